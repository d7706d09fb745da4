"""Data models for the treasury reconciliation matcher."""

from .enums import (
    COMPATIBLE_PAYMENT_TYPE,
    MovementDirection,
    PaymentType,
    MatchType,
    MatchConfidence,
)
from .movement import (
    BankMovement,
    PaymentCandidate,
)
from .reconciliation import (
    ReconciliationMatch,
    ReconciliationSuggestion,
    SuggestionStats,
)

__all__ = [
    # Enums
    "COMPATIBLE_PAYMENT_TYPE",
    "MovementDirection",
    "PaymentType",
    "MatchType",
    "MatchConfidence",
    # Inputs
    "BankMovement",
    "PaymentCandidate",
    # Results
    "ReconciliationMatch",
    "ReconciliationSuggestion",
    "SuggestionStats",
]
