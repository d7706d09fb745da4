"""
FastAPI application exposing the reconciliation matcher.

The API is stateless: pattern memory travels in the request and the updated
memory comes back in the response. Nothing is persisted here.
"""

import datetime
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
import structlog

from . import __version__
from .config import get_settings
from .engine import (
    compute_stats,
    generate_reconciliation_suggestions,
    learn_pattern,
)
from .logging_config import setup_logging
from .models import (
    BankMovement,
    MatchConfidence,
    MatchType,
    MovementDirection,
    PaymentCandidate,
    PaymentType,
    ReconciliationMatch,
    ReconciliationSuggestion,
)
from .utils.text_normalizer import pattern_key

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(settings)
    logger.info("Starting reconciliation matcher API", env=settings.app_env)
    yield
    logger.info("Shutting down reconciliation matcher API")


app = FastAPI(
    title="Conciliacion Bancaria",
    description="Sugerencias de conciliacion entre extractos bancarios y pagos",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class MovementIn(BaseModel):
    id: str
    date: Union[datetime.datetime, datetime.date]
    concept: str = Field(max_length=500)
    reference: Optional[str] = Field(default=None, max_length=100)
    amount: float = Field(ge=0, allow_inf_nan=False)
    direction: MovementDirection
    reconciled: bool = False

    def to_domain(self) -> BankMovement:
        return BankMovement(
            id=self.id,
            date=self.date,
            concept=self.concept,
            reference=self.reference,
            amount=self.amount,
            direction=self.direction,
            reconciled=self.reconciled,
        )


class CandidateIn(BaseModel):
    id: str
    number: str = ""
    date: Union[datetime.datetime, datetime.date]
    amount: float = Field(ge=0, allow_inf_nan=False)
    counterparty_name: str = ""
    counterparty_id: str = ""
    type: PaymentType
    reference: Optional[str] = Field(default=None, max_length=100)

    def to_domain(self) -> PaymentCandidate:
        return PaymentCandidate(
            id=self.id,
            number=self.number,
            date=self.date,
            amount=self.amount,
            counterparty_name=self.counterparty_name,
            counterparty_id=self.counterparty_id,
            type=self.type,
            reference=self.reference,
        )


class MatchIn(BaseModel):
    bank_movement_id: str
    payment_id: str
    payment_type: PaymentType
    match_score: int = Field(ge=0, le=100)
    match_type: MatchType
    confidence: MatchConfidence
    reasoning: List[str] = Field(default_factory=list)
    signal_points: Dict[str, int] = Field(default_factory=dict)
    amount_difference: float = Field(default=0.0, ge=0)
    date_difference_days: int = Field(default=0, ge=0)

    def to_domain(self) -> ReconciliationMatch:
        return ReconciliationMatch(**self.model_dump())


class SuggestionIn(BaseModel):
    bank_movement: MovementIn
    matches: List[MatchIn] = Field(default_factory=list)
    auto_reconcileable: bool = False

    def to_domain(self) -> ReconciliationSuggestion:
        return ReconciliationSuggestion(
            bank_movement=self.bank_movement.to_domain(),
            matches=[m.to_domain() for m in self.matches],
            auto_reconcileable=self.auto_reconcileable,
        )


class SuggestionRequest(BaseModel):
    movements: List[MovementIn]
    candidates: List[CandidateIn]
    patterns: Dict[str, str] = Field(default_factory=dict)
    include_unmatched: bool = False


class LearnPatternRequest(BaseModel):
    concept: str = Field(min_length=1, max_length=500)
    counterparty_id: str = Field(min_length=1)
    patterns: Dict[str, str] = Field(default_factory=dict)


class LearnPatternResponse(BaseModel):
    pattern_key: str
    counterparty_id: str
    patterns: Dict[str, str]


class StatsRequest(BaseModel):
    suggestions: List[SuggestionIn]


class MatchingSettingsResponse(BaseModel):
    min_suggestion_score: int
    auto_reconcile_score: int
    max_matches_per_movement: int
    high_confidence_score: int
    medium_confidence_score: int
    amount_exact_tolerance: float
    amount_similar_ratio: float
    amount_approximate_ratio: float
    date_coincident_days: int
    date_close_days: int
    date_approximate_days: int


# API Endpoints
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }


@app.post("/api/reconciliation/suggestions")
async def create_suggestions(request: SuggestionRequest):
    """Rank candidate payments for every unreconciled bank movement."""
    try:
        suggestions = generate_reconciliation_suggestions(
            [m.to_domain() for m in request.movements],
            [c.to_domain() for c in request.candidates],
            request.patterns,
            include_unmatched=request.include_unmatched,
        )
        stats = compute_stats(suggestions)
    except Exception as e:
        logger.exception("Suggestion generation failed", movements=len(request.movements))
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "suggestions": [s.to_dict() for s in suggestions],
        "stats": stats.to_dict(),
    }


@app.post("/api/patterns/learn", response_model=LearnPatternResponse)
async def learn(request: LearnPatternRequest):
    """Record a confirmed concept -> counterparty association."""
    key = pattern_key(request.concept)
    if not key:
        raise HTTPException(400, "Concept has no learnable pattern")

    updated = learn_pattern(request.concept, request.counterparty_id, request.patterns)
    return LearnPatternResponse(
        pattern_key=key,
        counterparty_id=request.counterparty_id,
        patterns=updated,
    )


@app.post("/api/reconciliation/stats")
async def suggestion_stats(request: StatsRequest):
    """Summarize a previously generated suggestion list."""
    stats = compute_stats([s.to_domain() for s in request.suggestions])
    return stats.to_dict()


@app.get("/settings", response_model=MatchingSettingsResponse)
async def get_settings_endpoint():
    """Get current matching thresholds."""
    s = get_settings()
    return MatchingSettingsResponse(
        min_suggestion_score=s.min_suggestion_score,
        auto_reconcile_score=s.auto_reconcile_score,
        max_matches_per_movement=s.max_matches_per_movement,
        high_confidence_score=s.high_confidence_score,
        medium_confidence_score=s.medium_confidence_score,
        amount_exact_tolerance=s.amount_exact_tolerance,
        amount_similar_ratio=s.amount_similar_ratio,
        amount_approximate_ratio=s.amount_approximate_ratio,
        date_coincident_days=s.date_coincident_days,
        date_close_days=s.date_close_days,
        date_approximate_days=s.date_approximate_days,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
