"""Key suggestions: which keys to search for next, given a reference key."""

import logging
from typing import Any, Dict, List

from ..analyze.key import CIRCLE_OF_FIFTHS, CIRCLE_SIZE, parse_key

logger = logging.getLogger(__name__)

DEFAULT_MAX_SUGGESTIONS = 10


def suggest_compatible_keys(reference_key: Any, limit: int = DEFAULT_MAX_SUGGESTIONS) -> List[Dict[str, Any]]:
    """
    Suggest keys that mix well with a reference key.

    Relative keys (same circle position) come first, then keys one fifth
    either side, each group in circle-of-fifths table order. Keys are
    spelled with sharps, so enharmonic duplicates never appear.

    Args:
        reference_key: Key string, e.g. "C Major" or "F#m"
        limit: Maximum number of suggestions

    Returns:
        List of {"key", "camelot", "reason", "score"} dicts; empty for an invalid key
    """
    parsed = parse_key(reference_key)
    if not parsed.is_valid or parsed.circle_position is None:
        return []

    position = parsed.circle_position
    adjacent = {(position + 1) % CIRCLE_SIZE, (position - 1) % CIRCLE_SIZE}

    relative = [
        _suggestion(key, "Relative major/minor", 95)
        for key, pos in CIRCLE_OF_FIFTHS.items()
        if pos == position and key != parsed.identity
    ]
    neighbours = [
        _suggestion(key, "Adjacent in circle of fifths", 80)
        for key, pos in CIRCLE_OF_FIFTHS.items()
        if pos in adjacent
    ]

    suggestions = (relative + neighbours)[:limit]
    logger.debug(f"{len(suggestions)} key suggestions for {parsed.identity}")
    return suggestions


def _suggestion(key: str, reason: str, score: int) -> Dict[str, Any]:
    return {
        "key": key,
        "camelot": parse_key(key).camelot,
        "reason": reason,
        "score": score,
    }
