"""
Pattern memory - learned mapping from generalized bank concepts to counterparties.

The memory is owned by the caller and persisted between runs. The matcher
only reads it while scoring; learning produces a new mapping.
"""

from typing import Dict, Mapping, Optional

import structlog

from ..utils.text_normalizer import pattern_key

logger = structlog.get_logger()


def learn_pattern(
    concept: str,
    counterparty_id: str,
    patterns: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Record that a bank concept resolved to a counterparty.

    The input mapping is never modified; a new dict is returned with the
    pattern key of `concept` associated to `counterparty_id`, replacing any
    previous association for that key.

    Args:
        concept: Bank movement concept of a confirmed match
        counterparty_id: Counterparty the movement was reconciled against
        patterns: Current pattern memory

    Returns:
        Updated copy of the pattern memory
    """
    updated = dict(patterns or {})
    key = pattern_key(concept)

    if not key:
        logger.warning(
            "Concept has no learnable pattern",
            concept=concept,
            counterparty_id=counterparty_id,
        )
        return updated

    previous = updated.get(key)
    updated[key] = counterparty_id

    if previous is not None and previous != counterparty_id:
        logger.info(
            "Pattern reassigned",
            pattern=key,
            previous_counterparty_id=previous,
            counterparty_id=counterparty_id,
        )
    else:
        logger.debug("Pattern learned", pattern=key, counterparty_id=counterparty_id)

    return updated


def lookup_counterparty(
    concept: str,
    patterns: Optional[Mapping[str, str]],
) -> Optional[str]:
    """Counterparty previously learned for this concept, if any."""
    if not patterns:
        return None
    key = pattern_key(concept)
    return patterns.get(key) if key else None
