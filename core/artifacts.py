"""Atomic artifact writers for generated output and run reports."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def atomic_write_text(path: str, content: str, encoding: str = "utf-8") -> str:
    """Write text to ``path`` so readers never observe a partial file.

    The content is written to a temporary file in the target directory and
    moved over the target with ``os.replace``. On failure the temporary file
    is removed and the target is left as it was.

    Returns:
        Absolute path of the written file.

    Raises:
        OSError: If the directory cannot be created or the write fails.
    """
    target = os.path.abspath(path)
    directory = os.path.dirname(target)
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(target)}.",
        suffix=".tmp",
        dir=directory,
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        logger.error("Failed to write %s", target)
        raise
    logger.debug("Wrote %d characters to %s", len(content), target)
    return target


def write_json_array(values: list[str], path: str, indent: int | None = 2) -> str:
    """Serialize a list of strings as a JSON array file, newline terminated."""
    return atomic_write_text(path, json.dumps(values, indent=indent) + "\n")


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "output/run_reports",
) -> str:
    """Write a JSON run report and return its path."""
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    return atomic_write_text(path, json.dumps(payload, indent=2, sort_keys=True))
