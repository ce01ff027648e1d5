"""
SQF script rendering for ACE arsenal boxes.

Item arrays are embedded as compact JSON literals, which SQF parses as
arrays of strings.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import date as date_type, datetime, timezone
from typing import Optional, Sequence

from arsenal.config import (
    EXEC_BOX_TEMPLATE,
    EXEC_SCRIPT_NAME,
    INIT_BOX_TEMPLATE,
    INIT_SCRIPT_NAME,
)
from core.artifacts import atomic_write_text

logger = logging.getLogger(__name__)


def format_date(value: Optional[date_type] = None) -> str:
    """ISO date used in script header comments; defaults to today (UTC)."""
    if value is None:
        value = datetime.now(timezone.utc).date()
    return value.isoformat()


def items_literal(items: Sequence[str]) -> str:
    """Compact array literal, e.g. ``["a","b"]``."""
    return json.dumps(list(items), separators=(",", ":"), ensure_ascii=False)


def render_init_box(items: Sequence[str], prefix: str, date: str) -> str:
    """Render the object-init variant (operates on ``this``)."""
    return INIT_BOX_TEMPLATE.format(prefix=prefix, date=date, items=items_literal(items))


def render_exec_box(items: Sequence[str], prefix: str, date: str) -> str:
    """Render the execVM variant (operates on the ``_Arsenal`` parameter)."""
    return EXEC_BOX_TEMPLATE.format(prefix=prefix, date=date, items=items_literal(items))


def write_arsenal_scripts(
    items: Sequence[str],
    prefix: str,
    output_dir: str = "output",
    date: Optional[str] = None,
) -> tuple[str, str]:
    """Write both arsenal scripts for one preset.

    Both files are fully rendered before either is written; each write is
    atomic.

    Args:
        items: Sorted, deduplicated item class names.
        prefix: Preset name (unit folder or ``all``).
        output_dir: Destination directory, created if missing.
        date: Header date; defaults to today.

    Returns:
        Tuple of (init_script_path, exec_script_path).

    Raises:
        OSError: If an output file cannot be written.
    """
    date = date or format_date()
    init_content = render_init_box(items, prefix, date)
    exec_content = render_exec_box(items, prefix, date)

    init_path = atomic_write_text(
        os.path.join(output_dir, INIT_SCRIPT_NAME.format(prefix=prefix)), init_content
    )
    logger.info("Data written to file: %s", init_path)
    exec_path = atomic_write_text(
        os.path.join(output_dir, EXEC_SCRIPT_NAME.format(prefix=prefix)), exec_content
    )
    logger.info("Data written to file: %s", exec_path)
    return init_path, exec_path
