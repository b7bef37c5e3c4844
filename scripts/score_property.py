#!/usr/bin/env python3
"""Score one property attribute record.

Reads a JSON object of attributes (camelCase or snake_case keys) from a
file or stdin and prints the analysis result as JSON.

Examples
--------
    python scripts/score_property.py property.json
    cat property.json | python scripts/score_property.py --profile anchor-url-v1 --mode strict
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from propscore.exceptions import PropScoreError
from propscore.logging import setup_logging
from propscore.scoring import ScoringEngine, available_profiles

logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Score a property attribute record")
    parser.add_argument(
        "input",
        nargs="?",
        type=str,
        default="-",
        help="JSON file with property attributes ('-' or omitted for stdin)",
    )
    parser.add_argument(
        "--profile",
        type=str,
        default="anchor-v1",
        help=f"Rubric profile (one of: {', '.join(available_profiles())})",
    )
    parser.add_argument(
        "--mode",
        choices=["strict", "renormalized"],
        default=None,
        help="Aggregation mode (default: the profile's own)",
    )
    parser.add_argument(
        "--breakdown",
        action="store_true",
        help="Include per-criterion sub-scores in the output",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level)

    try:
        if args.input == "-":
            data = json.load(sys.stdin)
        else:
            with open(args.input, encoding="utf-8") as f:
                data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Cannot read attributes: %s", exc)
        return 1

    if not isinstance(data, dict):
        logger.error("Expected a JSON object, got %s", type(data).__name__)
        return 1

    try:
        engine = ScoringEngine(args.profile, args.mode)
    except PropScoreError as exc:
        logger.error("%s", exc)
        return 2

    result = engine.analyse(data).to_dict()
    if not args.breakdown:
        result.pop("breakdown")

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
