"""Matching engine components."""

from .signals import SignalScorer, SignalScore
from .calculator import MatchCalculator
from .suggestions import SuggestionEngine
from .pattern_memory import learn_pattern, lookup_counterparty
from .stats import compute_stats

__all__ = [
    "SignalScorer",
    "SignalScore",
    "MatchCalculator",
    "SuggestionEngine",
    "learn_pattern",
    "lookup_counterparty",
    "compute_stats",
]
