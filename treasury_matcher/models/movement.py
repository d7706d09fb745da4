"""Input records: bank statement movements and internal payment candidates."""

from dataclasses import dataclass, field
import datetime
from typing import Optional, Dict, Any
from uuid import uuid4

from .enums import (
    COMPATIBLE_PAYMENT_TYPE,
    MovementDirection,
    PaymentType,
)


@dataclass
class BankMovement:
    """
    One bank-statement line.

    Amounts are positive magnitudes; the cash-flow sign lives in `direction`.
    Created by the statement importer and never mutated by the matcher.
    """
    id: str = field(default_factory=lambda: str(uuid4()))
    date: Optional[datetime.date] = None
    concept: str = ""
    reference: Optional[str] = None
    amount: float = 0.0
    direction: MovementDirection = MovementDirection.CREDIT
    reconciled: bool = False

    @property
    def compatible_payment_type(self) -> PaymentType:
        """CREDIT movements pair with CLIENT payments, DEBIT with SUPPLIER."""
        return COMPATIBLE_PAYMENT_TYPE[self.direction]

    @property
    def text(self) -> str:
        """Concept and reference joined for text comparison."""
        return " ".join(part for part in (self.concept, self.reference) if part)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "concept": self.concept,
            "reference": self.reference,
            "amount": self.amount,
            "direction": self.direction.value,
            "reconciled": self.reconciled,
        }


@dataclass
class PaymentCandidate:
    """One internal payment (client receipt or supplier disbursement)."""
    id: str = field(default_factory=lambda: str(uuid4()))
    number: str = ""
    date: Optional[datetime.date] = None
    amount: float = 0.0
    counterparty_name: str = ""
    counterparty_id: str = ""
    type: PaymentType = PaymentType.CLIENT
    reference: Optional[str] = None

    @property
    def text(self) -> str:
        """Document number, reference and counterparty joined for text comparison."""
        parts = (self.number, self.reference, self.counterparty_name)
        return " ".join(part for part in parts if part)

    def is_compatible_with(self, movement: BankMovement) -> bool:
        """Check the direction compatibility invariant."""
        return self.type == movement.compatible_payment_type

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "number": self.number,
            "date": self.date.isoformat() if self.date else None,
            "amount": self.amount,
            "counterparty_name": self.counterparty_name,
            "counterparty_id": self.counterparty_id,
            "type": self.type.value,
            "reference": self.reference,
        }
