"""Reconciliation result models."""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from .enums import (
    MatchConfidence,
    MatchType,
    PaymentType,
)
from .movement import BankMovement


@dataclass
class ReconciliationMatch:
    """A scored pairing between one bank movement and one payment."""
    bank_movement_id: str
    payment_id: str
    payment_type: PaymentType

    # Quality
    match_score: int = 0  # 0-100
    match_type: MatchType = MatchType.FUZZY
    confidence: MatchConfidence = MatchConfidence.LOW
    reasoning: List[str] = field(default_factory=list)

    # Per-signal points (amount, date, reference, pattern)
    signal_points: Dict[str, int] = field(default_factory=dict)

    # Differences
    amount_difference: float = 0.0
    date_difference_days: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "bank_movement_id": self.bank_movement_id,
            "payment_id": self.payment_id,
            "payment_type": self.payment_type.value,
            "match_score": self.match_score,
            "match_type": self.match_type.value,
            "confidence": self.confidence.value,
            "reasoning": list(self.reasoning),
            "signal_points": dict(self.signal_points),
            "amount_difference": self.amount_difference,
            "date_difference_days": self.date_difference_days,
        }


@dataclass
class ReconciliationSuggestion:
    """All acceptable matches for one bank movement, best first."""
    bank_movement: BankMovement
    matches: List[ReconciliationMatch] = field(default_factory=list)
    auto_reconcileable: bool = False

    @property
    def best_match(self) -> Optional[ReconciliationMatch]:
        return self.matches[0] if self.matches else None

    @property
    def best_score(self) -> int:
        """Score of the top match, 0 for a suggestion without matches."""
        return self.matches[0].match_score if self.matches else 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "bank_movement": self.bank_movement.to_dict(),
            "matches": [m.to_dict() for m in self.matches],
            "auto_reconcileable": self.auto_reconcileable,
        }


@dataclass
class SuggestionStats:
    """Summary statistics of a suggestion run."""
    total: int = 0
    auto_reconcileable: int = 0

    # Partitioned by the top match's confidence
    high: int = 0
    medium: int = 0
    low: int = 0

    no_matches: int = 0
    avg_top_score: float = 0.0

    # Top match type counts
    match_type_breakdown: Dict[str, int] = field(
        default_factory=lambda: {t.value: 0 for t in MatchType}
    )

    @property
    def auto_reconcile_rate(self) -> float:
        """Percentage of suggestions that can be confirmed without review."""
        if self.total == 0:
            return 0.0
        return (self.auto_reconcileable / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total": self.total,
            "auto_reconcileable": self.auto_reconcileable,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "no_matches": self.no_matches,
            "avg_top_score": self.avg_top_score,
            "auto_reconcile_rate": self.auto_reconcile_rate,
            "match_type_breakdown": dict(self.match_type_breakdown),
        }
