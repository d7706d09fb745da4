"""
Tests for suggestion run statistics.
"""

import pytest

from treasury_matcher.engine import compute_stats
from treasury_matcher.models import (
    MatchConfidence,
    MatchType,
    PaymentType,
    ReconciliationMatch,
    ReconciliationSuggestion,
)


def _match(score, confidence, match_type=MatchType.EXACT):
    return ReconciliationMatch(
        bank_movement_id="mov",
        payment_id=f"pay-{score}",
        payment_type=PaymentType.CLIENT,
        match_score=score,
        match_type=match_type,
        confidence=confidence,
    )


@pytest.fixture
def suggestions(make_movement):
    return [
        ReconciliationSuggestion(
            bank_movement=make_movement(id="a"),
            matches=[_match(100, MatchConfidence.HIGH)],
            auto_reconcileable=True,
        ),
        ReconciliationSuggestion(
            bank_movement=make_movement(id="b"),
            matches=[
                _match(90, MatchConfidence.HIGH, MatchType.PARTIAL),
                _match(70, MatchConfidence.MEDIUM),
            ],
        ),
        ReconciliationSuggestion(
            bank_movement=make_movement(id="c"),
            matches=[_match(70, MatchConfidence.MEDIUM, MatchType.FUZZY)],
        ),
        ReconciliationSuggestion(
            bank_movement=make_movement(id="d"),
            matches=[_match(52, MatchConfidence.LOW, MatchType.FUZZY)],
        ),
    ]


class TestComputeStats:
    """Monitoring summary."""

    def test_empty_list(self):
        stats = compute_stats([])

        assert stats.total == 0
        assert stats.auto_reconcileable == 0
        assert stats.high == stats.medium == stats.low == 0
        assert stats.avg_top_score == 0
        assert stats.auto_reconcile_rate == 0.0

    def test_counts_by_top_match(self, suggestions):
        stats = compute_stats(suggestions)

        assert stats.total == 4
        assert stats.auto_reconcileable == 1
        assert stats.high == 2
        assert stats.medium == 1
        assert stats.low == 1
        assert stats.high + stats.medium + stats.low == stats.total
        assert stats.no_matches == 0

    def test_average_top_score(self, suggestions):
        stats = compute_stats(suggestions)
        # (100 + 90 + 70 + 52) / 4
        assert stats.avg_top_score == 78.0

    def test_match_type_breakdown(self, suggestions):
        stats = compute_stats(suggestions)
        assert stats.match_type_breakdown == {"exact": 1, "partial": 1, "fuzzy": 2}

    def test_auto_reconcile_rate(self, suggestions):
        assert compute_stats(suggestions).auto_reconcile_rate == 25.0

    def test_suggestions_without_matches(self, suggestions, make_movement):
        suggestions.append(ReconciliationSuggestion(bank_movement=make_movement(id="e")))

        stats = compute_stats(suggestions)

        assert stats.total == 5
        assert stats.no_matches == 1
        assert stats.high + stats.medium + stats.low == 4
        # (100 + 90 + 70 + 52 + 0) / 5
        assert stats.avg_top_score == 62.4

    def test_to_dict(self, suggestions):
        data = compute_stats(suggestions).to_dict()

        assert data["total"] == 4
        assert data["auto_reconcile_rate"] == 25.0
        assert set(data) >= {"high", "medium", "low", "avg_top_score", "match_type_breakdown"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
