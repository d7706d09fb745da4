"""
Edit-distance text similarity.
"""

from typing import Optional

import structlog
from rapidfuzz.distance import Levenshtein

from ..config import Settings, get_settings

logger = structlog.get_logger()


class TextSimilarityEngine:
    """
    Levenshtein distance and the similarity ratio derived from it.

    Inputs longer than `max_similarity_input_length` characters are
    truncated before comparison.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.max_length = self.settings.max_similarity_input_length

    def _bound(self, text: str) -> str:
        if len(text) > self.max_length:
            logger.debug(
                "Truncating similarity input",
                length=len(text),
                max_length=self.max_length,
            )
            return text[:self.max_length]
        return text

    def distance(self, a: str, b: str) -> int:
        """Minimum number of single-character insertions, deletions or substitutions."""
        return Levenshtein.distance(self._bound(a), self._bound(b))

    def similarity(self, a: str, b: str) -> float:
        """
        Similarity ratio in [0, 1].

        (max_len - distance) / max_len, and 1.0 when both inputs are empty.
        """
        a = self._bound(a)
        b = self._bound(b)
        longest = max(len(a), len(b))
        if longest == 0:
            return 1.0
        return (longest - Levenshtein.distance(a, b)) / longest
