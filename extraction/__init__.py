"""
Config Class Extraction

Brace-balanced scanner over C++-like config text that extracts item class
names carrying ``scope = 2;`` at their own nesting level.
"""

from extraction.models import ClassSpan
from extraction.scanner import (
    locate_section,
    find_body_end,
    scan_class_spans,
    brace_imbalance,
)
from extraction.matcher import (
    own_level_text,
    has_own_property,
    should_include,
    find_matching_spans,
    extract_class_names,
)
from extraction.extractor import (
    read_document,
    extract_file,
    extract_directory,
    extract_path,
    discover_config_files,
    ExtractionStats,
)

__all__ = [
    # Data models
    "ClassSpan",
    "ExtractionStats",
    # Low-level scanning
    "locate_section",
    "find_body_end",
    "scan_class_spans",
    "brace_imbalance",
    # Matching
    "own_level_text",
    "has_own_property",
    "should_include",
    "find_matching_spans",
    "extract_class_names",
    # High-level orchestration
    "read_document",
    "extract_file",
    "extract_directory",
    "extract_path",
    "discover_config_files",
]
