"""
Stats aggregator - monitoring summary of a suggestion run.
"""

from typing import List

from ..models import (
    MatchConfidence,
    ReconciliationSuggestion,
    SuggestionStats,
)


def compute_stats(suggestions: List[ReconciliationSuggestion]) -> SuggestionStats:
    """
    Summarize a suggestion list.

    Confidence and match-type counts use each suggestion's top match.
    Suggestions without matches only count towards `no_matches` (and the
    average, as a top score of 0).
    """
    stats = SuggestionStats(total=len(suggestions))

    if not suggestions:
        return stats

    top_scores = []
    for suggestion in suggestions:
        if suggestion.auto_reconcileable:
            stats.auto_reconcileable += 1

        top = suggestion.best_match
        top_scores.append(suggestion.best_score)

        if top is None:
            stats.no_matches += 1
            continue

        if top.confidence == MatchConfidence.HIGH:
            stats.high += 1
        elif top.confidence == MatchConfidence.MEDIUM:
            stats.medium += 1
        else:
            stats.low += 1

        stats.match_type_breakdown[top.match_type.value] += 1

    stats.avg_top_score = round(sum(top_scores) / len(top_scores), 2)
    return stats
