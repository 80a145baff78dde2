"""Pairwise compatibility result shared by the key and BPM classifiers."""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class CompatibilityResult:
    """Immutable outcome of comparing one attribute (key or BPM) of two tracks."""

    label: str
    score: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "compatibility": self.label,
            "score": self.score,
            "reason": self.reason,
        }
