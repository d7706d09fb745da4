"""Bank statement reconciliation matcher for treasury operations."""

from .engine import (
    compute_stats,
    generate_reconciliation_suggestions,
    learn_pattern,
)

__version__ = "1.0.0"

__all__ = [
    "generate_reconciliation_suggestions",
    "learn_pattern",
    "compute_stats",
]
