"""
Shared fixtures for matcher tests.
"""

from datetime import date

import pytest

from treasury_matcher.config import Settings
from treasury_matcher.models import (
    BankMovement,
    MovementDirection,
    PaymentCandidate,
    PaymentType,
)


@pytest.fixture
def settings():
    """Default thresholds, independent of any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_movement():
    """Factory for bank movements with neutral defaults."""
    def _make(**overrides):
        fields = dict(
            id="mov1",
            date=date(2024, 6, 10),
            concept="DEPOSITO",
            reference=None,
            amount=1000.00,
            direction=MovementDirection.CREDIT,
        )
        fields.update(overrides)
        return BankMovement(**fields)
    return _make


@pytest.fixture
def make_candidate():
    """Factory for payment candidates with no text overlap by default."""
    def _make(**overrides):
        fields = dict(
            id="pay1",
            number="",
            date=date(2024, 6, 10),
            amount=1000.00,
            counterparty_name="",
            counterparty_id="",
            type=PaymentType.CLIENT,
        )
        fields.update(overrides)
        return PaymentCandidate(**fields)
    return _make
