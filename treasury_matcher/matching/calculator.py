"""
Match calculator - combines the four signals into a single scored match.
"""

from typing import Mapping, Optional

from ..config import Settings, get_settings
from ..models import (
    BankMovement,
    PaymentCandidate,
    ReconciliationMatch,
    MatchConfidence,
    MatchType,
)
from .signals import (
    AmountTier,
    DateTier,
    SignalScorer,
    amount_difference,
    days_between,
)


class MatchCalculator:
    """
    Scores one (movement, candidate) pair on a 0-100 scale.

    Match type:
    - EXACT: exact amount and coincident date
    - PARTIAL: exact amount with any other date, or similar amount with a
      coincident or close date
    - FUZZY: anything else

    Confidence is a pure function of the score (see confidence_for).
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.scorer = SignalScorer(self.settings)

    def score(
        self,
        movement: BankMovement,
        candidate: PaymentCandidate,
        patterns: Optional[Mapping[str, str]] = None,
    ) -> ReconciliationMatch:
        """
        Score a movement against a payment candidate.

        Args:
            movement: Bank statement line
            candidate: Internal payment
            patterns: Optional learned pattern memory (pattern key -> counterparty id)

        Returns:
            ReconciliationMatch with score, type, confidence and reasoning
        """
        signals = self.scorer.score_all(movement, candidate, patterns)

        total = min(
            sum(signal.points for signal in signals.values()),
            self.settings.max_score,
        )
        reasoning = [signal.reason for signal in signals.values() if signal.points > 0]

        match_type = self._classify(
            signals["amount"].tier,
            signals["date"].tier,
        )

        return ReconciliationMatch(
            bank_movement_id=movement.id,
            payment_id=candidate.id,
            payment_type=candidate.type,
            match_score=total,
            match_type=match_type,
            confidence=self.confidence_for(total),
            reasoning=reasoning,
            signal_points={name: signal.points for name, signal in signals.items()},
            amount_difference=amount_difference(movement, candidate),
            date_difference_days=days_between(movement, candidate) or 0,
        )

    def confidence_for(self, score: int) -> MatchConfidence:
        """High at 85+, medium at 65+, low otherwise."""
        if score >= self.settings.high_confidence_score:
            return MatchConfidence.HIGH
        if score >= self.settings.medium_confidence_score:
            return MatchConfidence.MEDIUM
        return MatchConfidence.LOW

    def _classify(self, amount_tier: Optional[str], date_tier: Optional[str]) -> MatchType:
        if amount_tier == AmountTier.EXACT.value:
            if date_tier == DateTier.COINCIDENT.value:
                return MatchType.EXACT
            return MatchType.PARTIAL
        if amount_tier == AmountTier.SIMILAR.value and date_tier in (
            DateTier.COINCIDENT.value,
            DateTier.CLOSE.value,
        ):
            return MatchType.PARTIAL
        return MatchType.FUZZY
