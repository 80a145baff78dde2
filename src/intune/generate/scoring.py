"""
Overall compatibility scoring.

Blends key and BPM classifications into one verdict:
- Key weighted 60%, BPM 40%
- Score rounded half up to an integer 0-100
- Tier label, description and two mixing tips (one key, one BPM)
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..analyze.bpm import BpmInput, calculate_bpm_compatibility
from ..analyze.key import calculate_key_compatibility
from ..analyze.result import CompatibilityResult

logger = logging.getLogger(__name__)

KEY_WEIGHT = 0.6
BPM_WEIGHT = 0.4

# (minimum overall score, tier); first match wins
TIER_THRESHOLDS = (
    (90, "excellent"),
    (75, "very-good"),
    (60, "good"),
    (40, "fair"),
    (25, "acceptable"),
)
LOWEST_TIER = "poor"

TIER_DESCRIPTIONS = {
    "excellent": "🎯 Perfect for mixing - seamless transition",
    "very-good": "✅ Great compatibility - smooth mixing",
    "good": "👍 Good match - will mix well together",
    "fair": "⚖️ Decent compatibility - requires some skill",
    "acceptable": "⚠️ Challenging but possible to mix",
    "poor": "❌ Difficult to mix harmonically",
}
UNKNOWN_DESCRIPTION = "❓ Unknown compatibility"


@dataclass(frozen=True)
class CompatibilityVerdict:
    """Immutable result of comparing a reference track with one candidate."""

    key: CompatibilityResult
    tempo: CompatibilityResult
    overall_score: int
    overall_label: str
    advice: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def description(self) -> str:
        return describe_tier(self.overall_label)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "overall": {
                "compatibility": self.overall_label,
                "score": self.overall_score,
                "description": self.description,
            },
            "key": self.key.to_dict(),
            "bpm": self.tempo.to_dict(),
            "mixing_advice": list(self.advice),
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def tier_for_score(score: int) -> str:
    """Map an overall score to its tier label."""
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return LOWEST_TIER


def describe_tier(label: str) -> str:
    """User-facing description for a tier label."""
    return TIER_DESCRIPTIONS.get(label, UNKNOWN_DESCRIPTION)


def mixing_advice(key_result: CompatibilityResult, bpm_result: CompatibilityResult) -> List[str]:
    """
    Build mixing tips from the key and BPM results independently.

    Args:
        key_result: Key classification
        bpm_result: BPM classification

    Returns:
        Exactly two tips: one for the key, one for the tempo
    """
    advice = []

    if key_result.score >= 80:
        advice.append("🎹 Keys mix naturally - no pitch adjustment needed")
    elif key_result.score >= 60:
        advice.append("🎹 Keys are related - consider key-lock or harmonic mixing")
    else:
        advice.append("🎹 Use camelot wheel or key-lock for best results")

    if bpm_result.score >= 90:
        advice.append("🥁 BPMs are perfectly matched for mixing")
    elif bpm_result.score >= 70:
        advice.append("🥁 BPMs are close - minimal tempo adjustment needed")
    elif "double" in bpm_result.reason:
        advice.append("🥁 Half/double BPM - perfect for creative transitions")
    else:
        advice.append("🥁 Use tempo sync or beatmatching for smooth transition")

    return advice


def track_key_and_bpm(track: Mapping[str, Any]) -> Tuple[Optional[Any], Optional[Any]]:
    """
    Read the key and tempo fields of a track record.

    Looks inside a nested "key_info" mapping when present; "tempo" is
    preferred over "bpm". No other field is inspected.

    Raises:
        ValueError: If track is None
        TypeError: If track is not a mapping
    """
    if track is None:
        raise ValueError("Track record is required")
    if not isinstance(track, Mapping):
        raise TypeError(f"Track record must be a mapping, got {type(track).__name__}")

    info = track.get("key_info")
    if isinstance(info, Mapping):
        track = info

    tempo = track["tempo"] if "tempo" in track else track.get("bpm")
    return track.get("key"), tempo


def score_pair(key1: Any, bpm1: BpmInput, key2: Any, bpm2: BpmInput) -> CompatibilityVerdict:
    """
    Compare two (key, BPM) pairs.

    Invalid key or BPM data scores 0 on that side only; the other side is
    still classified normally.

    Returns:
        CompatibilityVerdict
    """
    key_result = calculate_key_compatibility(key1, key2)
    bpm_result = calculate_bpm_compatibility(bpm1, bpm2)

    overall_score = round_half_up(key_result.score * KEY_WEIGHT + bpm_result.score * BPM_WEIGHT)

    return CompatibilityVerdict(
        key=key_result,
        tempo=bpm_result,
        overall_score=overall_score,
        overall_label=tier_for_score(overall_score),
        advice=tuple(mixing_advice(key_result, bpm_result)),
    )


def calculate_overall_compatibility(
    track1: Mapping[str, Any],
    track2: Mapping[str, Any],
) -> CompatibilityVerdict:
    """
    Compare two track records by key and tempo.

    Args:
        track1: Reference track (e.g. {"key": "C Major", "tempo": "120"})
        track2: Candidate track

    Returns:
        CompatibilityVerdict
    """
    key1, bpm1 = track_key_and_bpm(track1)
    key2, bpm2 = track_key_and_bpm(track2)
    return score_pair(key1, bpm1, key2, bpm2)
