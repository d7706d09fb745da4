"""Enumerations for the treasury reconciliation matcher."""

from enum import Enum


class MovementDirection(str, Enum):
    """Cash-flow direction of a bank movement."""
    CREDIT = "credit"      # Money in (receipt)
    DEBIT = "debit"        # Money out (disbursement)


class PaymentType(str, Enum):
    """Type of internal payment."""
    CLIENT = "client"      # Receipt from a client
    SUPPLIER = "supplier"  # Payment to a supplier


class MatchType(str, Enum):
    """
    Classification of a scored pairing.

    EXACT: Exact amount and coincident date
    PARTIAL: Exact amount with a non-coincident date, or a similar amount
             with a coincident or close date
    FUZZY: Anything else
    """
    EXACT = "exact"
    PARTIAL = "partial"
    FUZZY = "fuzzy"


class MatchConfidence(str, Enum):
    """Confidence tier of a match, derived from its score."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Direction -> the only payment type it may be reconciled against
COMPATIBLE_PAYMENT_TYPE = {
    MovementDirection.CREDIT: PaymentType.CLIENT,
    MovementDirection.DEBIT: PaymentType.SUPPLIER,
}
