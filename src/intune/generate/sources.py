"""
Candidate sources: where tracks to rank come from.

The ranking engine never knows the origin of its candidates. A source
turns a reference track into a list of plain track dicts; catalog search,
AI suggestions or a local library all sit behind the same interface.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)


class CandidateSourceError(Exception):
    """Raised when a source cannot produce candidates."""
    pass


class CandidateSource(ABC):
    """Provider of candidate tracks for a reference track."""

    name = "source"

    @abstractmethod
    def fetch_candidates(self, reference: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Return candidate track dicts for the reference track."""


class LibraryCandidateSource(CandidateSource):
    """In-memory track library. The reference itself (matched by id) is skipped."""

    name = "library"

    def __init__(self, library: Iterable[Mapping[str, Any]]):
        self.library = [dict(track) for track in library]

    def fetch_candidates(self, reference: Mapping[str, Any]) -> List[Dict[str, Any]]:
        reference_id = reference.get("id") if reference is not None else None
        return [
            dict(track)
            for track in self.library
            if reference_id is None or track.get("id") != reference_id
        ]


class JsonCandidateSource(CandidateSource):
    """
    Track library stored as JSON.

    Accepts either a top-level array of track objects or an object with a
    "tracks" array. The file is read on every fetch.
    """

    name = "json"

    def __init__(self, path: str):
        self.path = Path(path)

    def _load(self) -> List[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CandidateSourceError(f"Failed to read track library {self.path}: {e}")

        if isinstance(data, dict):
            data = data.get("tracks")

        if not isinstance(data, list) or not all(isinstance(t, dict) for t in data):
            raise CandidateSourceError(
                f"Track library {self.path} must be a list of track objects"
            )

        logger.debug(f"Loaded {len(data)} tracks from {self.path}")
        return data

    def fetch_candidates(self, reference: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return LibraryCandidateSource(self._load()).fetch_candidates(reference)


class FallbackCandidateSource(CandidateSource):
    """
    Tries sources in order and returns the first non-empty result.

    A source that raises CandidateSourceError is logged and skipped; if
    every source fails, CandidateSourceError is raised. Other exceptions
    propagate.
    """

    name = "fallback"

    def __init__(self, sources: Iterable[CandidateSource]):
        self.sources = list(sources)
        if not self.sources:
            raise ValueError("At least one candidate source is required")

    def fetch_candidates(self, reference: Mapping[str, Any]) -> List[Dict[str, Any]]:
        last_error: Optional[CandidateSourceError] = None
        failures = 0

        for source in self.sources:
            try:
                candidates = source.fetch_candidates(reference)
            except CandidateSourceError as e:
                logger.warning(f"Candidate source '{source.name}' failed: {e}")
                last_error = e
                failures += 1
                continue

            if candidates:
                logger.debug(f"Source '{source.name}' returned {len(candidates)} candidates")
                return candidates

            logger.debug(f"Source '{source.name}' returned no candidates; trying next")

        if failures == len(self.sources):
            raise CandidateSourceError(f"All candidate sources failed; last error: {last_error}")
        return []
