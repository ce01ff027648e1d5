#!/usr/bin/env python3
"""
Generate the default-loadouts SQF file from per-unit loadout JSON files.

Usage:
    python run_generate_loadouts.py
    python run_generate_loadouts.py --loadouts-dir data_loadouts --output-file output/loadouts.sqf
"""

import argparse
import logging
import os
import sys

from arsenal.config import LOADOUTS_FILE_NAME
from arsenal.loadouts import generate_loadouts
from core.settings import ConfigValidationError, load_settings
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render ACE default loadouts into an SQF file",
    )
    parser.add_argument("--loadouts-dir", default=None, help="Override the loadouts directory.")
    parser.add_argument(
        "--output-file",
        default=None,
        help=f"Output SQF path. Default: <output_dir>/{LOADOUTS_FILE_NAME}",
    )
    parser.add_argument("--settings", default=None, help="Settings YAML/JSON file.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    configure_structured_logging(level=logging.INFO)
    args = parse_args(argv)
    set_run_id()

    try:
        settings = load_settings(args.settings)
    except ConfigValidationError as e:
        logger.error("Invalid settings: %s", e)
        return 1

    loadouts_dir = args.loadouts_dir or settings.loadouts_dir
    output_file = args.output_file or os.path.join(settings.output_dir, LOADOUTS_FILE_NAME)

    try:
        with phase_scope("loadouts"):
            count = generate_loadouts(loadouts_dir, output_file)
    except (FileNotFoundError, OSError) as e:
        logger.error("Error generating loadouts: %s", e)
        return 1

    print(f"Wrote {count} loadouts to {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
