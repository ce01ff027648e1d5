"""
Loading and merging of JSON item arrays from the arsenal data directory.

Each unit is a sub-directory of the data directory holding JSON files, each
of which is an array of item class names.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from arsenal.config import JSON_SUFFIX

logger = logging.getLogger(__name__)


class InvalidArrayError(ValueError):
    """Raised when a JSON file does not hold an array."""


def load_json_array(file_path: str) -> list[str]:
    """Load a JSON array file, coercing every item to ``str``.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        InvalidArrayError: If the top-level value is not an array.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        payload: Any = json.load(f)

    if not isinstance(payload, list):
        raise InvalidArrayError(
            f"Expected JSON array in {file_path} but got {type(payload).__name__}"
        )
    return [str(item) for item in payload]


def _is_json_file(name: str) -> bool:
    return name.lower().endswith(JSON_SUFFIX)


def load_and_combine_data(folder: str) -> list[str]:
    """Concatenate every JSON array directly inside ``folder``.

    Files are read in name order. Unreadable or invalid files are logged
    and skipped.

    Raises:
        FileNotFoundError: If ``folder`` does not exist.
    """
    if not os.path.isdir(folder):
        raise FileNotFoundError(f"Data folder not found: {folder}")

    combined: list[str] = []
    for entry in sorted(os.listdir(folder)):
        if not _is_json_file(entry):
            continue
        file_path = os.path.join(folder, entry)
        if not os.path.isfile(file_path):
            continue
        try:
            items = load_json_array(file_path)
        except json.JSONDecodeError as e:
            logger.error("Error parsing JSON in file %s: %s", file_path, e)
            continue
        except InvalidArrayError as e:
            logger.error("Invalid JSON format in file %s: %s", file_path, e)
            continue
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading file %s: %s", file_path, e)
            continue
        combined.extend(items)

    logger.info("Loaded %d items from %s", len(combined), folder)
    return combined


def list_unit_dirs(data_dir: str) -> list[str]:
    """Names of unit sub-directories, sorted.

    Raises:
        FileNotFoundError: If ``data_dir`` does not exist.
    """
    if not os.path.isdir(data_dir):
        raise FileNotFoundError(f"Data directory not found: {data_dir}")
    return sorted(
        entry
        for entry in os.listdir(data_dir)
        if os.path.isdir(os.path.join(data_dir, entry)) and not entry.startswith(".")
    )


def load_all_units_data(data_dir: str) -> list[str]:
    """Concatenate the combined data of every unit."""
    all_data: list[str] = []
    for unit in list_unit_dirs(data_dir):
        all_data.extend(load_and_combine_data(os.path.join(data_dir, unit)))
    return all_data


def get_json_files_under(directory: str) -> list[str]:
    """JSON files directly in ``directory`` or one level below, sorted."""
    result: list[str] = []
    for entry in sorted(os.listdir(directory)):
        entry_path = os.path.join(directory, entry)
        if os.path.isdir(entry_path):
            for nested in sorted(os.listdir(entry_path)):
                nested_path = os.path.join(entry_path, nested)
                if _is_json_file(nested) and os.path.isfile(nested_path):
                    result.append(nested_path)
            continue
        if os.path.isfile(entry_path) and _is_json_file(entry):
            result.append(entry_path)
    return result
