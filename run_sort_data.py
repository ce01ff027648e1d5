#!/usr/bin/env python3
"""
Normalize every JSON array in the arsenal data directory in place.

Usage:
    python run_sort_data.py
    python run_sort_data.py --data-dir data_arsenal
"""

import argparse
import logging
import sys

from arsenal.normalize import normalize_data_dir
from core.settings import ConfigValidationError, load_settings
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dedupe and sort arsenal JSON arrays in place",
    )
    parser.add_argument("--data-dir", default=None, help="Override the data directory.")
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

    data_dir = args.data_dir or settings.data_dir
    try:
        with phase_scope("normalize"):
            stats = normalize_data_dir(data_dir)
    except OSError as e:
        logger.error("Failed to scan %s: %s", data_dir, e)
        return 1

    print(stats.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
