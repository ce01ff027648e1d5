#!/usr/bin/env python3
"""
Generate ACE arsenal SQF scripts from the arsenal data directory.

Each unit folder under the data directory holds JSON arrays of item class
names. Items are combined, deduplicated, sorted case-insensitively and
rendered into ``init_arsenal_<unit>.sqf`` and ``arsenal_<unit>.sqf``.

Usage:
    python run_generate_arsenal.py --unit rhs_usaf
    python run_generate_arsenal.py --all
    python run_generate_arsenal.py -u rhs_usaf --no-check
"""

import argparse
import logging
import os
import sys

from arsenal.config import ALL_UNITS_PRESET
from arsenal.dedupe import find_duplicates, normalize_items
from arsenal.loader import list_unit_dirs, load_all_units_data, load_and_combine_data
from arsenal.sqf import format_date, write_arsenal_scripts
from core.settings import ConfigValidationError, load_settings
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate ACE arsenal SQF scripts per unit",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "-u", "--unit",
        help="Unit folder under the data directory.",
    )
    target.add_argument(
        "-a", "--all",
        action="store_true",
        default=False,
        help="Process every unit and an 'all' preset combining them.",
    )
    parser.add_argument(
        "--no-check",
        action="store_true",
        default=False,
        help="Skip the duplicate report.",
    )
    parser.add_argument("--data-dir", default=None, help="Override the data directory.")
    parser.add_argument("--output-dir", default=None, help="Override the output directory.")
    parser.add_argument("--settings", default=None, help="Settings YAML/JSON file.")
    return parser.parse_args(argv)


def print_duplicates(items: list[str]) -> None:
    """Print the duplicate report for one unit."""
    duplicates = find_duplicates(items)
    if duplicates:
        print("\nDuplicate items found:")
        for item in duplicates:
            print(item)
    else:
        print("No duplicates found.")


def build_unit(unit: str, data_dir: str, output_dir: str, check: bool, date: str) -> tuple[str, str]:
    """Load, check, normalize and write scripts for one unit."""
    with phase_scope(f"{unit}_arsenal"):
        items = load_and_combine_data(os.path.join(data_dir, unit))
        if check:
            print_duplicates(items)
        return write_arsenal_scripts(normalize_items(items), unit, output_dir, date=date)


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
    output_dir = args.output_dir or settings.output_dir
    date = format_date()
    check = not args.no_check

    try:
        if args.all:
            for unit in list_unit_dirs(data_dir):
                print(f"\n=== Processing unit: {unit} ===")
                build_unit(unit, data_dir, output_dir, check, date)

            print("\n=== Processing all units combined ===")
            with phase_scope("all_arsenal"):
                combined = normalize_items(load_all_units_data(data_dir))
                write_arsenal_scripts(combined, ALL_UNITS_PRESET, output_dir, date=date)
        else:
            build_unit(args.unit, data_dir, output_dir, check, date)
    except FileNotFoundError as e:
        logger.error("Error processing %s: %s", data_dir, e)
        return 1
    except OSError as e:
        logger.error("Error writing to file: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
