"""Utility modules."""

from .text_similarity import TextSimilarityEngine
from .text_normalizer import comparable, pattern_key

__all__ = ["TextSimilarityEngine", "comparable", "pattern_key"]
