"""
Text normalization for bank concepts, references and counterparty names.

One normalizer with two views:
- comparable(): accent-free, lower-cased, punctuation collapsed to single spaces
- pattern_key(): comparable() with every digit run generalized to a placeholder
"""

import re
import unicodedata
from typing import Optional, Set

PATTERN_DIGIT_PLACEHOLDER = "N"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_DIGIT_RUN = re.compile(r"\d+")


def strip_diacritics(text: str) -> str:
    """Remove combining marks ("Pérez" -> "Perez", "ñ" -> "n")."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def comparable(text: Optional[str]) -> str:
    """
    Canonical comparable form of free text.

    Args:
        text: Raw text (may be None)

    Returns:
        Lower-cased text with diacritics removed and every run of
        non-alphanumeric characters collapsed to a single space.
    """
    if not text:
        return ""
    lowered = strip_diacritics(text).lower()
    return _NON_ALNUM.sub(" ", lowered).strip()


def pattern_key(text: Optional[str]) -> str:
    """
    Pattern form used as the learned-pattern memory key.

    "TRANSFERENCIA 001234 JUAN PEREZ" -> "transferencia N juan perez"
    """
    return _DIGIT_RUN.sub(PATTERN_DIGIT_PLACEHOLDER, comparable(text))


def numeric_tokens(text: Optional[str], min_digits: int = 4) -> Set[str]:
    """Runs of at least `min_digits` digits found in the text."""
    if not text:
        return set()
    return set(re.findall(r"\d{%d,}" % min_digits, text))


def significant_words(text: Optional[str], min_length: int = 4) -> Set[str]:
    """Comparable words of at least `min_length` characters."""
    return {word for word in comparable(text).split() if len(word) >= min_length}
