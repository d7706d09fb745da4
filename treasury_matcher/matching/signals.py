"""
Signal scorers for a (bank movement, payment candidate) pair.

Each scorer returns the points it awards plus the human-readable clause that
explains them. A scorer that awards nothing returns no reason, so the match
reasoning only ever lists signals that contributed.
"""

import datetime
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

from ..config import Settings, get_settings
from ..models import BankMovement, PaymentCandidate
from ..utils.text_normalizer import (
    comparable,
    numeric_tokens,
    significant_words,
)
from ..utils.text_similarity import TextSimilarityEngine
from .pattern_memory import lookup_counterparty


class AmountTier(str, Enum):
    EXACT = "exact"
    SIMILAR = "similar"
    APPROXIMATE = "approximate"
    NONE = "none"


class DateTier(str, Enum):
    COINCIDENT = "coincident"
    CLOSE = "close"
    APPROXIMATE = "approximate"
    NONE = "none"


class ReferenceTier(str, Enum):
    DOCUMENT_NUMBER = "document_number"
    NAME_STRONG = "name_strong"
    NAME_WEAK = "name_weak"
    REFERENCE_NUMBERS = "reference_numbers"
    SIMILAR_TEXT = "similar_text"
    NONE = "none"


@dataclass
class SignalScore:
    """Points awarded by one signal and why."""
    points: int = 0
    reason: Optional[str] = None
    tier: Optional[str] = None


def amount_difference(movement: BankMovement, candidate: PaymentCandidate) -> float:
    """Absolute amount difference, rounded to cents."""
    return round(abs(movement.amount - candidate.amount), 2)


def _as_date(value) -> Optional[datetime.date]:
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def days_between(movement: BankMovement, candidate: PaymentCandidate) -> Optional[int]:
    """Whole days between the two dates, None when either is missing."""
    movement_date = _as_date(movement.date)
    candidate_date = _as_date(candidate.date)
    if movement_date is None or candidate_date is None:
        return None
    return abs((movement_date - candidate_date).days)


class SignalScorer:
    """
    The four independent matching signals.

    - Amount (max 40): exact / within 5% / within 10% of the movement amount
    - Date (max 25): within 3 / 7 / 14 days
    - Reference (max 25): document number, counterparty name, reference
      numbers, or fuzzy text similarity; first hit wins
    - Pattern (max 10): the movement concept was previously resolved to the
      candidate's counterparty
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.similarity_engine = TextSimilarityEngine(self.settings)

    def score_amount(
        self,
        movement: BankMovement,
        candidate: PaymentCandidate,
    ) -> SignalScore:
        s = self.settings
        diff = amount_difference(movement, candidate)

        if diff <= s.amount_exact_tolerance:
            return SignalScore(s.amount_exact_points, "exact amount", AmountTier.EXACT.value)

        # Percentage tiers are meaningless against a zero amount
        if movement.amount <= 0:
            return SignalScore(tier=AmountTier.NONE.value)

        ratio = diff / movement.amount
        if ratio <= s.amount_similar_ratio:
            return SignalScore(
                s.amount_similar_points,
                f"similar amount (difference {diff:.2f}, {ratio:.1%})",
                AmountTier.SIMILAR.value,
            )
        if ratio <= s.amount_approximate_ratio:
            return SignalScore(
                s.amount_approximate_points,
                f"approximate amount (difference {diff:.2f}, {ratio:.1%})",
                AmountTier.APPROXIMATE.value,
            )
        return SignalScore(tier=AmountTier.NONE.value)

    def score_date(
        self,
        movement: BankMovement,
        candidate: PaymentCandidate,
    ) -> SignalScore:
        s = self.settings
        days = days_between(movement, candidate)

        if days is None:
            return SignalScore(tier=DateTier.NONE.value)
        if days <= s.date_coincident_days:
            return SignalScore(
                s.date_coincident_points,
                f"coincident date ({days} days apart)",
                DateTier.COINCIDENT.value,
            )
        if days <= s.date_close_days:
            return SignalScore(
                s.date_close_points,
                f"close date ({days} days apart)",
                DateTier.CLOSE.value,
            )
        if days <= s.date_approximate_days:
            return SignalScore(
                s.date_approximate_points,
                f"approximate date ({days} days apart)",
                DateTier.APPROXIMATE.value,
            )
        return SignalScore(tier=DateTier.NONE.value)

    def score_reference(
        self,
        movement: BankMovement,
        candidate: PaymentCandidate,
    ) -> SignalScore:
        """
        Reference/text signal. Applied in priority order, first hit wins:

        1. Candidate document number verbatim inside the bank text
        2. Counterparty name words (longer than 3 chars) in the bank text
        3. Shared reference numbers (runs of 4+ digits)
        4. Edit-distance similarity above the threshold
        """
        s = self.settings
        movement_text = comparable(movement.text)
        candidate_text = comparable(candidate.text)

        document_number = comparable(candidate.number)
        if document_number and document_number in movement_text:
            return SignalScore(
                s.document_number_points,
                "document number found in bank reference",
                ReferenceTier.DOCUMENT_NUMBER.value,
            )

        name_words = significant_words(
            candidate.counterparty_name, s.name_word_min_length
        )
        found = sorted(word for word in name_words if word in movement_text)
        if len(found) >= 2:
            return SignalScore(
                s.name_strong_points,
                f"counterparty name matches ({len(found)} words)",
                ReferenceTier.NAME_STRONG.value,
            )
        if len(found) == 1:
            return SignalScore(
                s.name_weak_points,
                f"counterparty name partially matches ({found[0]})",
                ReferenceTier.NAME_WEAK.value,
            )

        shared_numbers = (
            numeric_tokens(movement_text, s.reference_number_min_digits)
            & numeric_tokens(candidate_text, s.reference_number_min_digits)
        )
        if shared_numbers:
            return SignalScore(
                s.reference_number_points,
                "matching reference numbers",
                ReferenceTier.REFERENCE_NUMBERS.value,
            )

        similarity = self.similarity_engine.similarity(movement_text, candidate_text)
        if similarity > s.similar_text_threshold:
            return SignalScore(
                math.floor(similarity * s.similar_text_max_points),
                f"similar text ({similarity:.0%})",
                ReferenceTier.SIMILAR_TEXT.value,
            )

        return SignalScore(tier=ReferenceTier.NONE.value)

    def score_pattern(
        self,
        movement: BankMovement,
        candidate: PaymentCandidate,
        patterns: Optional[Mapping[str, str]] = None,
    ) -> SignalScore:
        if not patterns or not candidate.counterparty_id:
            return SignalScore()

        if lookup_counterparty(movement.concept, patterns) == candidate.counterparty_id:
            return SignalScore(
                self.settings.pattern_points,
                "learned pattern for this counterparty",
            )
        return SignalScore()

    def score_all(
        self,
        movement: BankMovement,
        candidate: PaymentCandidate,
        patterns: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, SignalScore]:
        """All four signals, in reasoning order."""
        return {
            "amount": self.score_amount(movement, candidate),
            "date": self.score_date(movement, candidate),
            "reference": self.score_reference(movement, candidate),
            "pattern": self.score_pattern(movement, candidate, patterns),
        }
