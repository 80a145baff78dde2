#!/usr/bin/env python3
"""
Find Compatible Tracks Script

Usage:
  python src/scripts/find_compatible.py LIBRARY.json KEY BPM [MIN_SCORE]

LIBRARY.json holds a list of track objects (or {"tracks": [...]}) with
"key" and "tempo" (or "bpm") fields. Ranked matches are printed as JSON,
best first, capped at ranking.max_results.
"""

import sys
import json
import logging
from pathlib import Path

# Add src/ to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from intune.config import Config
from intune.generate.selector import CompatibilitySelector, SelectionConstraints, COMPATIBILITY_FIELD
from intune.generate.sources import JsonCandidateSource

logger = logging.getLogger(__name__)


def main(argv=None):
    """Ranking entrypoint."""
    args = sys.argv[1:] if argv is None else argv

    if len(args) not in (3, 4):
        print(__doc__.strip(), file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )

    try:
        config = Config.load()
        logging.getLogger().setLevel(config.get("logging", "level", "INFO"))
        logger.info(f"Config loaded: {config}")

        library_path, key, bpm = args[:3]
        min_score = None
        if len(args) == 4:
            try:
                min_score = int(args[3])
            except ValueError:
                logger.warning(f"Invalid min score argument: {args[3]}; using config default")

        constraints = SelectionConstraints(config["ranking"])
        selector = CompatibilitySelector(constraints, source=JsonCandidateSource(library_path))

        reference = {"key": key, "tempo": bpm}
        ranked = selector.find_for(reference, min_score=min_score)

        output = []
        for track in ranked:
            track = dict(track)
            track[COMPATIBILITY_FIELD] = track[COMPATIBILITY_FIELD].to_dict()
            output.append(track)

        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0

    except KeyboardInterrupt:
        logger.warning("Search interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Search failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
