"""
Suggestion engine - candidate filtering, ranking and suggestion assembly.

For every unreconciled bank movement:
1. Keep only candidates of the payment type compatible with its direction
2. Score every remaining candidate
3. Drop matches below the suggestion floor
4. Sort best first and keep the top N
5. Emit a suggestion, flagged auto-reconcileable when unambiguous

The final list puts auto-reconcileable suggestions first, then orders by best
score, so a review queue drains zero-touch reconciliations first.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Mapping, Optional

import structlog

from ..config import Settings, get_settings
from ..models import (
    BankMovement,
    PaymentCandidate,
    ReconciliationMatch,
    ReconciliationSuggestion,
)
from .calculator import MatchCalculator

logger = structlog.get_logger()


class SuggestionEngine:
    """
    Proposes ranked matches for a batch of bank movements.

    Movements are independent of each other, so large batches can be scored
    on a thread pool (`max_workers` > 1). The output is identical either way.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.calculator = MatchCalculator(self.settings)
        self.min_score = self.settings.min_suggestion_score
        self.auto_score = self.settings.auto_reconcile_score
        self.max_matches = self.settings.max_matches_per_movement

    def suggest(
        self,
        movements: List[BankMovement],
        candidates: List[PaymentCandidate],
        patterns: Optional[Mapping[str, str]] = None,
        include_unmatched: bool = False,
    ) -> List[ReconciliationSuggestion]:
        """
        Generate reconciliation suggestions.

        Args:
            movements: Bank statement lines (reconciled ones are skipped)
            candidates: Internal payments eligible for matching
            patterns: Optional learned pattern memory, read-only
            include_unmatched: Emit empty suggestions for movements with no
                acceptable candidate instead of omitting them

        Returns:
            Ordered list of ReconciliationSuggestion
        """
        pending = [m for m in movements if not m.reconciled]

        logger.info(
            "Starting suggestion generation",
            movements=len(movements),
            pending=len(pending),
            candidates=len(candidates),
            patterns=len(patterns) if patterns else 0,
        )

        if self._use_pool(pending):
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
                ranked = list(pool.map(
                    lambda m: self.rank_candidates(m, candidates, patterns),
                    pending,
                ))
        else:
            ranked = [self.rank_candidates(m, candidates, patterns) for m in pending]

        suggestions = []
        for movement, matches in zip(pending, ranked):
            if not matches and not include_unmatched:
                continue
            suggestions.append(self.build_suggestion(movement, matches))

        suggestions = self.order_suggestions(suggestions)

        logger.info(
            "Suggestion generation complete",
            suggestions=len(suggestions),
            without_suggestion=sum(1 for matches in ranked if not matches),
            auto_reconcileable=sum(1 for s in suggestions if s.auto_reconcileable),
        )

        return suggestions

    def rank_candidates(
        self,
        movement: BankMovement,
        candidates: List[PaymentCandidate],
        patterns: Optional[Mapping[str, str]] = None,
    ) -> List[ReconciliationMatch]:
        """Scored matches for one movement above the floor, best first, capped."""
        compatible = [c for c in candidates if c.is_compatible_with(movement)]

        matches = []
        for candidate in compatible:
            match = self.calculator.score(movement, candidate, patterns)
            if match.match_score >= self.min_score:
                matches.append(match)

        # sorted() is stable: equal scores keep candidate input order
        matches = sorted(matches, key=lambda m: m.match_score, reverse=True)

        logger.debug(
            "Movement ranked",
            movement_id=movement.id,
            compatible_candidates=len(compatible),
            accepted=len(matches),
        )

        return matches[:self.max_matches]

    def build_suggestion(
        self,
        movement: BankMovement,
        matches: List[ReconciliationMatch],
    ) -> ReconciliationSuggestion:
        """Wrap ranked matches; auto-reconcileable only with one candidate at 95+."""
        auto = len(matches) == 1 and matches[0].match_score >= self.auto_score
        return ReconciliationSuggestion(
            bank_movement=movement,
            matches=matches,
            auto_reconcileable=auto,
        )

    def order_suggestions(
        self,
        suggestions: List[ReconciliationSuggestion],
    ) -> List[ReconciliationSuggestion]:
        """Auto-reconcileable first, then by best score descending."""
        return sorted(
            suggestions,
            key=lambda s: (not s.auto_reconcileable, -s.best_score),
        )

    def _use_pool(self, movements: List[BankMovement]) -> bool:
        return (
            self.settings.max_workers > 1
            and len(movements) >= self.settings.parallel_min_movements
        )
