#!/usr/bin/env python3
"""
Extract item class names from config.cpp files.

Prints a JSON array of every class carrying ``scope = 2;`` at its own level
inside the CfgWeapons section, or writes it to a file.

Usage:
    python run_extract_config.py addons/weapons/config.cpp
    python run_extract_config.py addons/ --output data_arsenal/rhs/weapons.json
    python run_extract_config.py config.cpp --section-keyword CfgGlasses --exclude None
"""

import argparse
import json
import logging
import sys

from core.artifacts import write_json_array, write_run_report
from core.settings import ConfigValidationError, load_settings
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from extraction.config import DEFAULT_EXCLUDED_CLASSES
from extraction.extractor import extract_path

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Extract scope=2 item class names from config files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_extract_config.py addons/weapons/config.cpp\n"
            "  python run_extract_config.py addons/ --output out/items.json\n"
        )
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="Config file or directory of config files."
    )
    parser.add_argument(
        "--section-keyword",
        default=None,
        help="Section restricting eligible classes. Empty string disables it. "
             "Default: from settings (CfgWeapons)."
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Additional class name to never report. Repeatable."
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the JSON array to this file instead of stdout."
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Settings YAML/JSON file. Default: $ARSENAL_SETTINGS_PATH or arsenal.yml"
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="If set, write a JSON run report into this directory."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging."
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)
    configure_structured_logging(level=logging.DEBUG if args.verbose else logging.WARNING)
    run_id = set_run_id()

    if not args.path:
        logger.error("Please provide a path to config.cpp")
        return 1

    try:
        settings = load_settings(args.settings)
    except ConfigValidationError as e:
        logger.error("Invalid settings: %s", e)
        return 1

    section_keyword = (
        settings.section_keyword if args.section_keyword is None else args.section_keyword
    )
    exclusion_set = (
        DEFAULT_EXCLUDED_CLASSES
        | settings.extra_excluded_classes
        | frozenset(args.exclude)
    )

    try:
        with phase_scope("extract"):
            names, stats = extract_path(
                args.path,
                section_keyword=section_keyword,
                exclusion_set=exclusion_set,
                extensions=settings.config_extensions,
            )
    except FileNotFoundError as e:
        logger.error("File error: %s", e)
        return 1
    except Exception as e:
        logger.error("Error processing config file: %s", e, exc_info=True)
        return 1

    exit_code = 0
    if args.output:
        try:
            with phase_scope("write"):
                path = write_json_array(names, args.output)
            print(f"Wrote {len(names)} classes to {path}", file=sys.stderr)
        except OSError as e:
            logger.error("Failed to write %s: %s", args.output, e)
            exit_code = 1
    else:
        print(json.dumps(names, indent=2))

    print(stats.summary(), file=sys.stderr)

    if args.report_dir:
        report = {
            "pipeline": "extract_config",
            "source": args.path,
            "section_keyword": section_keyword,
            "output": args.output,
            "stats": stats.to_dict(),
            "status": "success" if exit_code == 0 else "failed",
        }
        try:
            report_path = write_run_report(report, run_id, output_dir=args.report_dir)
            logger.info("Run report written: %s", report_path)
        except OSError as e:
            logger.error("Failed to write run report to %s: %s", args.report_dir, e)
            exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
