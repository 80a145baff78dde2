"""
Compatible Track Selector: filter and rank candidates against a reference.

- Each candidate is scored with calculate_overall_compatibility()
- Candidates below min_score are dropped (threshold is inclusive)
- Survivors sorted by overall score, descending; ties keep input order
- Output: shallow copies of the candidates with the verdict under "compatibility"
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .scoring import calculate_overall_compatibility, track_key_and_bpm

logger = logging.getLogger(__name__)

COMPATIBILITY_FIELD = "compatibility"


class SelectionConstraints:
    """Ranking constraints from config."""

    def __init__(self, config: dict):
        """
        Args:
            config: Ranking dict from config["ranking"]
        """
        self.min_score = config.get("min_score", 40)
        self.max_results = config.get("max_results", 20)


class CompatibilitySelector:
    """
    Ranks candidate tracks by key/BPM compatibility with a reference track.

    Holds no per-call state; one instance may serve concurrent callers.
    """

    def __init__(self, constraints: SelectionConstraints, source=None):
        """
        Args:
            constraints: SelectionConstraints object
            source: Optional CandidateSource used by find_for()
        """
        self.constraints = constraints
        self.source = source
        logger.debug("CompatibilitySelector initialized")

    def filter_and_rank(
        self,
        reference: Mapping[str, Any],
        candidates: Sequence[Mapping[str, Any]],
        min_score: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Score, filter and sort candidates against a reference track.

        Args:
            reference: Reference track with key/tempo fields
            candidates: Candidate track records (never mutated)
            min_score: Inclusive threshold; constraints.min_score if None

        Returns:
            Decorated candidates, best first; empty if nothing qualifies

        Raises:
            ValueError: If reference, candidates, or any candidate is None
            TypeError: If a track record is not a mapping
        """
        if reference is None:
            raise ValueError("Reference track is required")
        if candidates is None:
            raise ValueError("Candidate list is required")

        threshold = self.constraints.min_score if min_score is None else min_score

        compatible = []
        for index, candidate in enumerate(candidates):
            if candidate is None:
                raise ValueError(f"Candidate at position {index} is None")

            verdict = calculate_overall_compatibility(reference, candidate)

            if verdict.overall_score < threshold:
                logger.debug(
                    f"Candidate {candidate.get('id', index)} scored "
                    f"{verdict.overall_score} < {threshold}; dropped"
                )
                continue

            decorated = dict(candidate)
            decorated[COMPATIBILITY_FIELD] = verdict
            compatible.append(decorated)

        # sorted() is stable, so equal scores keep input order
        ranked = sorted(compatible, key=lambda t: -t[COMPATIBILITY_FIELD].overall_score)

        logger.debug(f"Ranked {len(ranked)}/{len(candidates)} candidates (min score {threshold})")
        return ranked

    def find_for(
        self,
        reference: Mapping[str, Any],
        min_score: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch candidates from the configured source and rank them.

        Args:
            reference: Reference track
            min_score: Inclusive threshold; constraints.min_score if None

        Returns:
            At most constraints.max_results decorated candidates, best first
        """
        if self.source is None:
            raise ValueError("No candidate source configured")

        candidates = self.source.fetch_candidates(reference)
        ranked = self.filter_and_rank(reference, candidates, min_score=min_score)
        key, tempo = track_key_and_bpm(reference)

        logger.info(
            f"✅ Found {len(ranked)} compatible tracks from {len(candidates)} candidates "
            f"(key: {key}, tempo: {tempo})"
        )
        return ranked[: self.constraints.max_results]


def find_compatible_tracks(
    reference: Mapping[str, Any],
    candidates: Sequence[Mapping[str, Any]],
    min_score: Optional[int] = None,
    constraints: Optional[SelectionConstraints] = None,
) -> List[Dict[str, Any]]:
    """
    Filter and rank candidate tracks by compatibility with a reference.

    Args:
        reference: Reference track record
        candidates: Candidate track records
        min_score: Inclusive score threshold (default: constraints.min_score)
        constraints: SelectionConstraints (defaults apply if None)

    Returns:
        Decorated candidates sorted by overall score, descending
    """
    if constraints is None:
        constraints = SelectionConstraints({})

    selector = CompatibilitySelector(constraints)
    return selector.filter_and_rank(reference, candidates, min_score=min_score)
