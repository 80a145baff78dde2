"""
Musical key parsing and harmonic compatibility classification.

Accepts free-form key notation as delivered by audio-analysis services
("C Major", "Am", "F# minor", "Bb min", "Db") and places it on the circle
of fifths. Pairs of keys are classified by a fixed priority cascade:
same key, relative major/minor, parallel major/minor, then circle distance.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .result import CompatibilityResult

logger = logging.getLogger(__name__)

UNKNOWN_KEY = "Unknown"

# Root letter A-G, optional sharp/flat, then an optional mode token.
# The mode token is case-insensitive; the note itself is not.
KEY_PATTERN = re.compile(r"^([A-G][#b]?)\s*((?i:major|minor|maj|min|m))?$")

MODE_TOKENS = {
    "major": "major",
    "maj": "major",
    "minor": "minor",
    "min": "minor",
    "m": "minor",
}

# Every spelling the grammar admits, folded onto its sharp spelling
SHARP_SPELLINGS = {
    "C": "C", "B#": "C",
    "C#": "C#", "Db": "C#",
    "D": "D",
    "D#": "D#", "Eb": "D#",
    "E": "E", "Fb": "E",
    "F": "F", "E#": "F",
    "F#": "F#", "Gb": "F#",
    "G": "G",
    "G#": "G#", "Ab": "G#",
    "A": "A",
    "A#": "A#", "Bb": "A#",
    "B": "B", "Cb": "B",
}

# Circle of fifths: clockwise step (+1) is a perfect fifth.
# Relative major/minor pairs share a position.
# Insertion order (majors, then minors, each clockwise from C/Am) is the
# order in which suggestions are emitted.
CIRCLE_OF_FIFTHS = {
    "C": 0,
    "G": 1,
    "D": 2,
    "A": 3,
    "E": 4,
    "B": 5,
    "F#": 6,
    "C#": 7,
    "G#": 8,
    "D#": 9,
    "A#": 10,
    "F": 11,
    "Am": 0,
    "Em": 1,
    "Bm": 2,
    "F#m": 3,
    "C#m": 4,
    "G#m": 5,
    "D#m": 6,
    "A#m": 7,
    "Fm": 8,
    "Cm": 9,
    "Gm": 10,
    "Dm": 11,
}

# (major, relative minor); flat spellings (Gb/Ebm, Db/Bbm, ...) are folded
# onto these by SHARP_SPELLINGS before lookup.
RELATIVE_KEY_PAIRS = (
    ("C", "Am"),
    ("G", "Em"),
    ("D", "Bm"),
    ("A", "F#m"),
    ("E", "C#m"),
    ("B", "G#m"),
    ("F#", "D#m"),
    ("C#", "A#m"),
    ("G#", "Fm"),
    ("D#", "Cm"),
    ("A#", "Gm"),
    ("F", "Dm"),
)

CIRCLE_SIZE = 12


class Mode(str, Enum):
    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True)
class MusicalKey:
    """Parsed key. Invalid keys carry no root, mode or circle position."""

    root_note: Optional[str]
    mode: Optional[Mode]
    is_valid: bool
    circle_position: Optional[int] = None

    @property
    def identity(self) -> Optional[str]:
        """Canonical key name used for equality, e.g. "Am" or "C"."""
        if not self.is_valid:
            return None
        return f"{self.root_note}m" if self.mode is Mode.MINOR else self.root_note

    @property
    def camelot(self) -> Optional[str]:
        """Camelot wheel code: C major is 8B, A minor is 8A."""
        if self.circle_position is None:
            return None
        number = (self.circle_position + 7) % CIRCLE_SIZE + 1
        return f"{number}{'A' if self.mode is Mode.MINOR else 'B'}"

    def __str__(self) -> str:
        if not self.is_valid:
            return UNKNOWN_KEY
        return f"{self.root_note} {self.mode.value.capitalize()}"


INVALID_KEY = MusicalKey(root_note=None, mode=None, is_valid=False)


def parse_key(key_string: Optional[str]) -> MusicalKey:
    """
    Parse free-form key notation.

    Args:
        key_string: e.g. "C Major", "Am", "F# minor", "Bb min", "Db"

    Returns:
        MusicalKey; is_valid is False for empty input, the "Unknown"
        sentinel, or anything outside the key grammar
    """
    if not isinstance(key_string, str):
        return INVALID_KEY

    normalized = key_string.strip()
    if not normalized or normalized == UNKNOWN_KEY:
        return INVALID_KEY

    match = KEY_PATTERN.match(normalized)
    if not match:
        logger.debug(f"Unrecognized key notation: {key_string!r}")
        return INVALID_KEY

    note, mode_token = match.groups()
    mode = Mode(MODE_TOKENS[mode_token.lower()]) if mode_token else Mode.MAJOR
    root = SHARP_SPELLINGS[note]
    identity = f"{root}m" if mode is Mode.MINOR else root

    return MusicalKey(
        root_note=root,
        mode=mode,
        is_valid=True,
        circle_position=CIRCLE_OF_FIFTHS.get(identity),
    )


def circle_distance(pos1: int, pos2: int) -> int:
    """Shortest number of fifths between two circle positions."""
    distance = abs(pos1 - pos2)
    return min(distance, CIRCLE_SIZE - distance)


def are_relative_keys(key1: MusicalKey, key2: MusicalKey) -> bool:
    """True for a major key and its relative minor (C / Am), in either order."""
    return any(
        (key1.identity == major and key2.identity == minor)
        or (key1.identity == minor and key2.identity == major)
        for major, minor in RELATIVE_KEY_PAIRS
    )


def are_parallel_keys(key1: MusicalKey, key2: MusicalKey) -> bool:
    """True for the same root in different modes (C / Cm)."""
    return key1.root_note == key2.root_note and key1.mode is not key2.mode


def _as_key(key: Union[str, MusicalKey, None]) -> MusicalKey:
    return key if isinstance(key, MusicalKey) else parse_key(key)


def calculate_key_compatibility(
    key1: Union[str, MusicalKey, None],
    key2: Union[str, MusicalKey, None],
) -> CompatibilityResult:
    """
    Classify the harmonic relationship between two keys.

    Rules are evaluated in priority order and the first match wins:
    same key, relative, parallel, then distance on the circle of fifths.
    Relative keys sit at distance 0, so they must be caught before the
    distance rules.

    Args:
        key1: Key string or parsed MusicalKey
        key2: Key string or parsed MusicalKey

    Returns:
        CompatibilityResult (score 0-100)
    """
    parsed1 = _as_key(key1)
    parsed2 = _as_key(key2)

    if not parsed1.is_valid or not parsed2.is_valid:
        return CompatibilityResult("unknown", 0, "Invalid key data")

    if parsed1.identity == parsed2.identity:
        return CompatibilityResult("perfect", 100, "Same key")

    if are_relative_keys(parsed1, parsed2):
        return CompatibilityResult("excellent", 95, "Relative major/minor keys")

    if are_parallel_keys(parsed1, parsed2):
        return CompatibilityResult("very-good", 85, "Parallel major/minor keys")

    if parsed1.circle_position is not None and parsed2.circle_position is not None:
        distance = circle_distance(parsed1.circle_position, parsed2.circle_position)

        if distance == 1:
            return CompatibilityResult("good", 80, "Adjacent keys in circle of fifths")
        elif distance == 2:
            return CompatibilityResult("fair", 60, "Two steps apart in circle of fifths")
        elif distance == 3:
            return CompatibilityResult("acceptable", 40, "Three steps apart in circle of fifths")

    return CompatibilityResult("poor", 20, "Keys are not harmonically related")
