#!/usr/bin/env python3
"""
Suggest Compatible Keys Script

Usage:
  python src/scripts/suggest_keys.py KEY

Example:
  python src/scripts/suggest_keys.py "F# minor"

Prints keys worth searching for next as JSON, capped at
suggestions.max_suggestions.
"""

import sys
import json
import logging
from pathlib import Path

# Add src/ to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from intune.config import Config
from intune.generate.suggest import suggest_compatible_keys

logger = logging.getLogger(__name__)


def main(argv=None):
    """Suggestion entrypoint."""
    args = sys.argv[1:] if argv is None else argv

    if len(args) != 1:
        print(__doc__.strip(), file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )

    try:
        config = Config.load()
        logging.getLogger().setLevel(config.get("logging", "level", "INFO"))

        limit = config.get("suggestions", "max_suggestions", 10)
        suggestions = suggest_compatible_keys(args[0], limit=limit)

        if not suggestions:
            logger.warning(f"No suggestions for key {args[0]!r}")
        else:
            logger.info(f"✅ {len(suggestions)} keys suggested for {args[0]}")

        print(json.dumps(suggestions, indent=2))
        return 0

    except KeyboardInterrupt:
        logger.warning("Suggestion interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Suggestion failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
