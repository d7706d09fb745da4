"""
Public entry points of the matcher.

Three pure functions form the boundary used by the statement import,
confirmation and monitoring workflows:
- generate_reconciliation_suggestions: ranked matches per bank movement
- learn_pattern: feedback hook after a confirmed match
- compute_stats: monitoring summary of a suggestion run
"""

from typing import List, Mapping, Optional

from .config import Settings
from .models import (
    BankMovement,
    PaymentCandidate,
    ReconciliationSuggestion,
)
from .matching import SuggestionEngine, compute_stats, learn_pattern


def generate_reconciliation_suggestions(
    bank_movements: List[BankMovement],
    candidates: List[PaymentCandidate],
    patterns: Optional[Mapping[str, str]] = None,
    include_unmatched: bool = False,
    settings: Optional[Settings] = None,
) -> List[ReconciliationSuggestion]:
    """
    Propose ranked matches for every unreconciled bank movement.

    Movements without any candidate at or above the suggestion floor are
    omitted unless `include_unmatched` is set.
    """
    engine = SuggestionEngine(settings)
    return engine.suggest(
        bank_movements,
        candidates,
        patterns,
        include_unmatched=include_unmatched,
    )


__all__ = [
    "generate_reconciliation_suggestions",
    "learn_pattern",
    "compute_stats",
]
