#!/usr/bin/env python3
"""
Compare Two Tracks Script

Usage:
  python src/scripts/compare_tracks.py KEY1 BPM1 KEY2 BPM2

Example:
  python src/scripts/compare_tracks.py "C Major" 120 Am 122

Prints the compatibility verdict as JSON.
"""

import sys
import json
import logging
from pathlib import Path

# Add src/ to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from intune.config import Config
from intune.generate.scoring import score_pair

logger = logging.getLogger(__name__)


def main(argv=None):
    """Compare entrypoint."""
    args = sys.argv[1:] if argv is None else argv

    if len(args) != 4:
        print(__doc__.strip(), file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )

    try:
        config = Config.load()
        logging.getLogger().setLevel(config.get("logging", "level", "INFO"))

        key1, bpm1, key2, bpm2 = args
        verdict = score_pair(key1, bpm1, key2, bpm2)

        logger.info(
            f"✅ {key1} @ {bpm1} vs {key2} @ {bpm2}: "
            f"{verdict.overall_score} ({verdict.overall_label})"
        )
        print(json.dumps(verdict.to_dict(), indent=2, ensure_ascii=False))
        return 0

    except KeyboardInterrupt:
        logger.warning("Comparison interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Comparison failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
