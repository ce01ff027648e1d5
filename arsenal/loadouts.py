"""
Default loadout SQF generation.

Loadouts live in ``<loadouts_dir>/<unit>/<loadout>.json``; each file holds
the loadout array as exported by the ACE arsenal.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from arsenal.config import LOADOUT_LINE_TEMPLATE, LOADOUTS_HEADER_TEMPLATE
from arsenal.sqf import format_date
from core.artifacts import atomic_write_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadoutFile:
    """One loadout JSON file."""

    unit: str
    loadout: str
    path: str


def get_all_unit_loadout_files(base_dir: str) -> list[LoadoutFile]:
    """List loadout files per unit folder, sorted by unit then loadout.

    Raises:
        FileNotFoundError: If ``base_dir`` does not exist.
    """
    if not os.path.isdir(base_dir):
        raise FileNotFoundError(f"Loadouts directory not found: {base_dir}")

    result: list[LoadoutFile] = []
    for unit in sorted(os.listdir(base_dir)):
        unit_path = os.path.join(base_dir, unit)
        if not os.path.isdir(unit_path):
            continue
        for loadout_file in sorted(os.listdir(unit_path)):
            stem, ext = os.path.splitext(loadout_file)
            if ext.lower() != ".json":
                continue
            result.append(
                LoadoutFile(unit=unit, loadout=stem, path=os.path.join(unit_path, loadout_file))
            )
    return result


def format_loadout_name(unit: str, loadout: str) -> str:
    """Display name, e.g. ``[1st Platoon] Squad Lead``."""
    return f"[{unit.replace('_', ' ')}] {loadout.replace('_', ' ')}"


def render_loadout_line(name: str, loadout: list[Any]) -> str:
    """Render one ``ace_arsenal_fnc_addDefaultLoadout`` call."""
    return LOADOUT_LINE_TEMPLATE.format(
        name=name.replace('"', '""'),
        loadout=json.dumps(loadout, separators=(",", ":"), ensure_ascii=False),
    )


def _load_loadout(path: str) -> Optional[list[Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read or parse %s: %s", path, e)
        return None
    if not isinstance(payload, list):
        logger.error("Invalid loadout array in %s", path)
        return None
    return payload


def generate_loadouts(
    base_dir: str,
    output_file: str,
    date: Optional[str] = None,
) -> int:
    """Write the loadouts SQF file.

    Invalid loadout files are logged and skipped.

    Returns:
        Number of loadouts written (the header line is not counted).

    Raises:
        FileNotFoundError: If ``base_dir`` does not exist.
        OSError: If the output file cannot be written.
    """
    lines = [LOADOUTS_HEADER_TEMPLATE.format(date=date or format_date())]
    for entry in get_all_unit_loadout_files(base_dir):
        loadout = _load_loadout(entry.path)
        if loadout is None:
            continue
        lines.append(render_loadout_line(format_loadout_name(entry.unit, entry.loadout), loadout))

    atomic_write_text(output_file, "\n".join(lines) + "\n")
    count = len(lines) - 1
    logger.info("Wrote %d loadouts to %s", count, output_file)
    return count
