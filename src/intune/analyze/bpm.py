"""
BPM parsing and tempo compatibility classification.

Tempos arrive as strings from an external analysis source ("120", "128 BPM",
"Unknown") or as numbers from a local library. Anything that does not yield
an integer is the invalid state (None), which is distinct from 0 BPM.

Half/double and 3/2 relationships are checked before the absolute
difference tiers, so 120 vs 60 is a tempo relationship rather than a
60 BPM gap.
"""

import logging
import math
import re
from typing import Optional, Union

from .result import CompatibilityResult

logger = logging.getLogger(__name__)

# Leading ASCII integer, as a DJ would read "128.4 BPM" or " 96bpm".
# Runs longer than MAX_TEMPO_DIGITS do not match and read as invalid.
MAX_TEMPO_DIGITS = 9
LEADING_INT_PATTERN = re.compile(rf"^\s*([+-]?[0-9]{{1,{MAX_TEMPO_DIGITS}}})(?![0-9])")

# Allowed deviation from an exact 2:1 or 3:2 tempo ratio
RATIO_TOLERANCE = 0.1

BpmInput = Union[str, int, float, None]


def parse_tempo(value: BpmInput) -> Optional[int]:
    """
    Parse a tempo into whole BPM.

    Args:
        value: BPM as a string or number

    Returns:
        Integer BPM (fractions truncated), or None if no integer can be read
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        return int(value)

    if isinstance(value, str):
        match = LEADING_INT_PATTERN.match(value)
        if match:
            return int(match.group(1))

    logger.debug(f"Unparseable BPM value: {value!r}")
    return None


def _near_ratio(bpm1: int, bpm2: int, target: float) -> bool:
    """True if bpm1/bpm2 or bpm2/bpm1 is within RATIO_TOLERANCE of target."""
    ratios = [a / b for a, b in ((bpm1, bpm2), (bpm2, bpm1)) if b != 0]
    return any(abs(ratio - target) < RATIO_TOLERANCE for ratio in ratios)


def calculate_bpm_compatibility(bpm1: BpmInput, bpm2: BpmInput) -> CompatibilityResult:
    """
    Classify the tempo relationship between two tracks.

    Args:
        bpm1: First BPM (string or number)
        bpm2: Second BPM (string or number)

    Returns:
        CompatibilityResult (score 0-100); difference-based reasons embed
        the integer BPM difference
    """
    num1 = parse_tempo(bpm1)
    num2 = parse_tempo(bpm2)

    if num1 is None or num2 is None:
        return CompatibilityResult("unknown", 0, "Invalid BPM data")

    difference = abs(num1 - num2)

    if difference == 0:
        return CompatibilityResult("perfect", 100, "Exact BPM match")

    if _near_ratio(num1, num2, 2.0):
        return CompatibilityResult("excellent", 90, "Half/double BPM relationship")

    if _near_ratio(num1, num2, 1.5):
        return CompatibilityResult("good", 75, "3/2 BPM relationship")

    if difference <= 5:
        return CompatibilityResult(
            "excellent", 95, f"Within 5 BPM ({difference} BPM difference)"
        )
    elif difference <= 10:
        return CompatibilityResult(
            "good", 80, f"Within 10 BPM ({difference} BPM difference)"
        )
    elif difference <= 20:
        return CompatibilityResult(
            "fair", 60, f"Within 20 BPM ({difference} BPM difference)"
        )
    elif difference <= 40:
        return CompatibilityResult("acceptable", 40, f"{difference} BPM difference")

    return CompatibilityResult("poor", 20, f"Large BPM difference ({difference} BPM)")
