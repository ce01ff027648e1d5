"""
In-place normalization of arsenal data files.

Every JSON array under the data directory is rewritten deduplicated and
sorted case-insensitively, with two-space indentation and a trailing
newline. Files already in canonical form are left untouched.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Optional

from arsenal.dedupe import find_duplicates, normalize_items
from arsenal.loader import get_json_files_under
from core.artifacts import atomic_write_text

logger = logging.getLogger(__name__)

STATUS_CHANGED = "changed"
STATUS_UNCHANGED = "unchanged"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class NormalizeResult:
    """Outcome of normalizing one file."""

    path: str
    status: str
    duplicates: tuple[str, ...] = ()
    reason: Optional[str] = None


@dataclass
class NormalizeStats:
    """Counters for a normalization run."""

    processed: int = 0
    changed: int = 0
    skipped: int = 0
    failed: int = 0
    duration_ms: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "processed": self.processed,
            "changed": self.changed,
            "skipped": self.skipped,
            "failed": self.failed,
            "duration_ms": self.duration_ms,
        }

    def summary(self) -> str:
        return (
            f"Processed {self.processed} files ({self.changed} updated, "
            f"{self.skipped} skipped, {self.failed} failed) in {self.duration_ms}ms"
        )


def render_canonical(items: list[str]) -> str:
    """Canonical file text for an item list."""
    return json.dumps(normalize_items(items), indent=2, ensure_ascii=False) + "\n"


def process_json_file(file_path: str) -> NormalizeResult:
    """Normalize one JSON array file in place.

    Never raises for per-file problems: they are reported through the
    result status.
    """
    if not os.path.isfile(file_path):
        return NormalizeResult(path=file_path, status=STATUS_SKIPPED)

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            original_text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        return NormalizeResult(path=file_path, status=STATUS_FAILED, reason=str(e))

    try:
        parsed = json.loads(original_text)
    except json.JSONDecodeError as e:
        return NormalizeResult(path=file_path, status=STATUS_FAILED, reason=f"Invalid JSON: {e}")

    if not isinstance(parsed, list):
        return NormalizeResult(
            path=file_path,
            status=STATUS_FAILED,
            reason=f"Expected JSON array but got {type(parsed).__name__}",
        )

    items = [str(item) for item in parsed]
    duplicates = find_duplicates(items)
    if duplicates:
        logger.warning("[duplicates] %s: %d duplicate values found", file_path, len(duplicates))
        for dup in duplicates:
            logger.warning("  - %s", dup)

    next_text = render_canonical(items)
    if next_text == original_text:
        return NormalizeResult(path=file_path, status=STATUS_UNCHANGED, duplicates=tuple(duplicates))

    try:
        atomic_write_text(file_path, next_text)
    except OSError as e:
        return NormalizeResult(path=file_path, status=STATUS_FAILED, reason=str(e))
    return NormalizeResult(path=file_path, status=STATUS_CHANGED, duplicates=tuple(duplicates))


def normalize_data_dir(data_dir: str) -> NormalizeStats:
    """Normalize every JSON file in ``data_dir`` and its unit folders.

    Raises:
        FileNotFoundError: If ``data_dir`` does not exist.
    """
    if not os.path.isdir(data_dir):
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    started = time.monotonic()
    stats = NormalizeStats()
    for file_path in get_json_files_under(data_dir):
        result = process_json_file(file_path)
        if result.status == STATUS_SKIPPED:
            stats.skipped += 1
            continue
        if result.status == STATUS_FAILED:
            stats.failed += 1
            logger.error("[failed] %s: %s", file_path, result.reason)
            continue
        stats.processed += 1
        if result.status == STATUS_CHANGED:
            stats.changed += 1

    stats.duration_ms = int((time.monotonic() - started) * 1000)
    logger.info("Normalization complete: %s", stats.summary())
    return stats
