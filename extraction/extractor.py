"""
High-level orchestrator for item class extraction.

This module provides the main entry points for extracting item class names
from single config files or entire directory trees.
"""

import logging
import os
from dataclasses import dataclass
from typing import AbstractSet, Dict, List, Optional, Tuple

from core.structured_logging import document_scope
from extraction.config import (
    CONFIG_EXTENSIONS,
    DEFAULT_EXCLUDED_CLASSES,
    DEFAULT_SECTION_KEYWORD,
    SKIPPED_DIRECTORIES,
)
from extraction.matcher import extract_class_names
from extraction.scanner import brace_imbalance

logger = logging.getLogger(__name__)


@dataclass
class FileExtractionDiagnostics:
    """Per-file extraction diagnostics."""

    class_names: List[str]
    brace_imbalance: int


class ExtractionStats:
    """Statistics for an extraction operation."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.classes_found = 0
        self.malformed_files = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "classes_found": self.classes_found,
            "malformed_files": self.malformed_files,
        }

    def summary(self) -> str:
        """One-line summary for end-of-batch reporting."""
        return (
            f"Processed {self.files_processed} files, found {self.classes_found} "
            f"classes ({self.files_failed} failed, {self.malformed_files} malformed)"
        )

    def __str__(self) -> str:
        """String representation of stats."""
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, classes={self.classes_found}, "
            f"malformed={self.malformed_files})"
        )


def read_document(file_path: str) -> str:
    """Read a config file as UTF-8 text.

    A leading byte order mark is dropped.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnicodeDecodeError: If the file is not valid UTF-8.
        OSError: If the file cannot be read.
    """
    with open(file_path, "r", encoding="utf-8-sig") as f:
        return f.read()


def _extract_file_with_diagnostics(
    file_path: str,
    section_keyword: Optional[str],
    exclusion_set: AbstractSet[str],
    extensions: AbstractSet[str],
) -> FileExtractionDiagnostics:
    """Extract class names from a single file with brace diagnostics."""
    file_path = os.path.abspath(file_path)

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    ext = os.path.splitext(file_path)[1].lower()
    if ext not in extensions:
        raise ValueError(
            f"File {file_path} is not a config file. "
            f"Expected one of: {sorted(extensions)}"
        )

    with document_scope(os.path.basename(file_path)):
        document = read_document(file_path)
        imbalance = brace_imbalance(document)
        if imbalance != 0:
            logger.warning(
                "File %s has unbalanced braces (%+d); results may be partial",
                file_path,
                imbalance,
            )

        names = extract_class_names(
            document,
            section_keyword=section_keyword,
            exclusion_set=exclusion_set,
        )
        logger.info("Extracted %d classes from %s", len(names), file_path)

    return FileExtractionDiagnostics(class_names=names, brace_imbalance=imbalance)


def extract_file(
    file_path: str,
    section_keyword: Optional[str] = DEFAULT_SECTION_KEYWORD,
    exclusion_set: AbstractSet[str] = DEFAULT_EXCLUDED_CLASSES,
    extensions: AbstractSet[str] = frozenset(CONFIG_EXTENSIONS),
) -> List[str]:
    """Extract item class names from a single config file.

    Args:
        file_path: Absolute or relative path to the config file.
        section_keyword: Section restricting eligible classes.
        exclusion_set: Class names never reported.
        extensions: Accepted file extensions.

    Returns:
        Class names in first-seen order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file extension is not accepted.
        UnicodeDecodeError: If the file is not valid UTF-8.

    Example:
        >>> names = extract_file("addons/weapons/config.cpp")
        >>> names[:2]
        ['rhs_weap_m4a1', 'rhs_weap_m4a1_blockII']
    """
    diagnostics = _extract_file_with_diagnostics(
        file_path=file_path,
        section_keyword=section_keyword,
        exclusion_set=exclusion_set,
        extensions=extensions,
    )
    return diagnostics.class_names


def discover_config_files(
    directory: str,
    extensions: AbstractSet[str] = frozenset(CONFIG_EXTENSIONS),
) -> List[str]:
    """Recursively discover all config files in a directory.

    Args:
        directory: Root directory to search.
        extensions: Accepted file extensions (lowercase, with dot).

    Returns:
        Sorted list of absolute paths to config files.
    """
    config_files = []
    directory = os.path.abspath(directory)

    logger.info("Discovering config files in %s", directory)

    for root, dirs, files in os.walk(directory):
        # Skip hidden directories and build/output directories
        dirs[:] = [
            d for d in dirs
            if not d.startswith('.') and d not in SKIPPED_DIRECTORIES
        ]

        for file in files:
            ext = os.path.splitext(file)[1].lower()
            if ext in extensions:
                config_files.append(os.path.join(root, file))

    logger.info("Found %d config files", len(config_files))
    return sorted(config_files)


def extract_directory(
    directory: str,
    section_keyword: Optional[str] = DEFAULT_SECTION_KEYWORD,
    exclusion_set: AbstractSet[str] = DEFAULT_EXCLUDED_CLASSES,
    extensions: AbstractSet[str] = frozenset(CONFIG_EXTENSIONS),
    continue_on_error: bool = True,
) -> Tuple[List[str], ExtractionStats]:
    """Extract class names from all config files in a directory tree.

    Args:
        directory: Root directory to process.
        section_keyword: Section restricting eligible classes.
        exclusion_set: Class names never reported.
        extensions: Accepted file extensions.
        continue_on_error: If True, log failed files and keep going.
                          If False, raise on the first failure.

    Returns:
        A tuple of (class_names, stats). Names from all files are
        concatenated in file order; duplicates across files are kept.

    Raises:
        FileNotFoundError: If directory does not exist.
    """
    directory = os.path.abspath(directory)

    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")

    stats = ExtractionStats()
    all_names: List[str] = []

    config_files = discover_config_files(directory, extensions)

    if not config_files:
        logger.warning("No config files found in %s", directory)
        return all_names, stats

    logger.info("Processing %d config files from %s", len(config_files), directory)

    for file_path in config_files:
        try:
            diagnostics = _extract_file_with_diagnostics(
                file_path=file_path,
                section_keyword=section_keyword,
                exclusion_set=exclusion_set,
                extensions=extensions,
            )
            all_names.extend(diagnostics.class_names)
            stats.files_processed += 1
            stats.classes_found += len(diagnostics.class_names)
            if diagnostics.brace_imbalance != 0:
                stats.malformed_files += 1

        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.error("Skipping %s: %s", file_path, e)
            stats.files_failed += 1
            if not continue_on_error:
                raise

        except Exception as e:
            logger.error("Unexpected error processing %s: %s", file_path, e, exc_info=True)
            stats.files_failed += 1
            if not continue_on_error:
                raise

    logger.info("Extraction complete: %s", stats)
    return all_names, stats


def extract_path(
    source: str,
    section_keyword: Optional[str] = DEFAULT_SECTION_KEYWORD,
    exclusion_set: AbstractSet[str] = DEFAULT_EXCLUDED_CLASSES,
    extensions: AbstractSet[str] = frozenset(CONFIG_EXTENSIONS),
) -> Tuple[List[str], ExtractionStats]:
    """Extract from a file or a directory, whichever ``source`` is.

    A single file is accepted regardless of its extension.

    Raises:
        FileNotFoundError: If source does not exist.
    """
    source = os.path.abspath(source)

    if os.path.isfile(source):
        stats = ExtractionStats()
        diagnostics = _extract_file_with_diagnostics(
            source,
            section_keyword=section_keyword,
            exclusion_set=exclusion_set,
            extensions=frozenset(extensions) | {os.path.splitext(source)[1].lower()},
        )
        stats.files_processed = 1
        stats.classes_found = len(diagnostics.class_names)
        if diagnostics.brace_imbalance != 0:
            stats.malformed_files = 1
        return diagnostics.class_names, stats
    if os.path.isdir(source):
        return extract_directory(
            source,
            section_keyword=section_keyword,
            exclusion_set=exclusion_set,
            extensions=extensions,
        )
    raise FileNotFoundError(f"Source not found: {source}")
