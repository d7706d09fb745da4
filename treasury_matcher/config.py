"""
Configuration management using Pydantic Settings.
All matching thresholds are loaded from environment variables with sensible defaults.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Persistent config path for deployments that keep a .env next to their data
APP_BASE_PATH = Path(os.environ.get(
    "TESORERIA_BASE_PATH",
    os.environ.get("APP_BASE_PATH", Path.home() / ".tesoreria")
))
ENV_FILE_PATH = APP_BASE_PATH / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        env_prefix="MATCHER_",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_env: str = Field(default="development")
    app_log_level: str = Field(default="INFO")
    log_dir: Optional[Path] = Field(default=None)

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    # Amount signal (max 40 pts)
    amount_exact_tolerance: float = Field(default=0.01)
    amount_similar_ratio: float = Field(default=0.05)
    amount_approximate_ratio: float = Field(default=0.10)
    amount_exact_points: int = Field(default=40)
    amount_similar_points: int = Field(default=30)
    amount_approximate_points: int = Field(default=15)

    # Date signal (max 25 pts)
    date_coincident_days: int = Field(default=3)
    date_close_days: int = Field(default=7)
    date_approximate_days: int = Field(default=14)
    date_coincident_points: int = Field(default=25)
    date_close_points: int = Field(default=15)
    date_approximate_points: int = Field(default=5)

    # Reference / text signal (max 25 pts)
    document_number_points: int = Field(default=25)
    name_strong_points: int = Field(default=20)
    name_weak_points: int = Field(default=10)
    reference_number_points: int = Field(default=15)
    similar_text_max_points: int = Field(default=15)
    similar_text_threshold: float = Field(default=0.5)
    name_word_min_length: int = Field(default=4)
    reference_number_min_digits: int = Field(default=4)

    # Learned pattern signal (max 10 pts)
    pattern_points: int = Field(default=10)

    # Confidence tiers
    high_confidence_score: int = Field(default=85)
    medium_confidence_score: int = Field(default=65)

    # Suggestions
    max_score: int = Field(default=100)
    min_suggestion_score: int = Field(default=50)
    auto_reconcile_score: int = Field(default=95)
    max_matches_per_movement: int = Field(default=5)

    # Edit distance input bound
    max_similarity_input_length: int = Field(default=500)

    # Parallel scoring
    max_workers: int = Field(default=1)
    parallel_min_movements: int = Field(default=200)

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
