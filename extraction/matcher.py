"""
Own-level property matching and item class extraction.

This module decides which scanned classes are reportable items: a class
qualifies when ``scope = 2;`` appears in its own body (not only inside a
nested class), its header lies inside the restricting section, and its
name is not a structural base class.
"""

import logging
import re
from typing import AbstractSet, Dict, Iterable, Iterator, List, Optional

from extraction.config import (
    DEFAULT_EXCLUDED_CLASSES,
    DEFAULT_SECTION_KEYWORD,
    ENABLING_PROPERTY,
    ENABLING_VALUE,
)
from extraction.models import ClassSpan
from extraction.scanner import locate_section, scan_class_spans

logger = logging.getLogger(__name__)

# String literals match first and are kept; a doubled quote is an escaped quote
_COMMENT_RE = re.compile(r'(?P<string>"(?:[^"]|"")*")|//[^\n]*|/\*.*?\*/', re.DOTALL)
_PROPERTY_RE = re.compile(
    r"(?<![A-Za-z0-9_]){prop}\s*=\s*{value}\s*;".format(
        prop=re.escape(ENABLING_PROPERTY),
        value=re.escape(ENABLING_VALUE),
    )
)


def strip_comments(text: str) -> str:
    """Remove ``//`` line comments and ``/* */`` block comments.

    Comment markers inside double-quoted strings are left alone, so
    ``author = "https://example.com";`` is not cut at ``//``.
    """
    return _COMMENT_RE.sub(lambda m: m.group("string") or " ", text)


def build_child_index(spans: Iterable[ClassSpan]) -> Dict[Optional[int], List[ClassSpan]]:
    """Group spans by the ``header_start`` of their parent.

    Top-level spans are grouped under the ``None`` key. Children keep
    document order.
    """
    index: Dict[Optional[int], List[ClassSpan]] = {}
    for span in spans:
        key = span.parent.header_start if span.parent is not None else None
        index.setdefault(key, []).append(span)
    return index


def direct_children(span: ClassSpan, document: str) -> List[ClassSpan]:
    """Scan a span's body for the classes nested directly inside it."""
    return [
        child
        for child in scan_class_spans(document, span.body_start, span.body_end)
        if child.parent is None
    ]


def own_level_text(
    span: ClassSpan,
    document: str,
    children: Optional[List[ClassSpan]] = None,
) -> str:
    """Return a span's body with every nested class removed.

    Args:
        span: Class to inspect.
        document: Document the span was scanned from.
        children: Direct children of ``span`` in document order. Scanned
            from the body when omitted.

    Returns:
        Body text minus the full extent (header through closing brace) of
        each nested class. Removing direct children also removes all
        deeper descendants, since they lie inside their ancestors.
    """
    if children is None:
        children = direct_children(span, document)

    pieces = []
    cursor = span.body_start
    for child in children:
        pieces.append(document[cursor:child.header_start])
        cursor = child.end
    pieces.append(document[cursor:span.body_end])
    return "".join(pieces)


def has_own_property(
    span: ClassSpan,
    document: str,
    children: Optional[List[ClassSpan]] = None,
) -> bool:
    """Check for ``scope = 2;`` at the span's own nesting level.

    Comments are ignored, so a commented-out assignment never counts.
    """
    text = strip_comments(own_level_text(span, document, children))
    return _PROPERTY_RE.search(text) is not None


def should_include(
    span: ClassSpan,
    section_boundary: Optional[int],
    exclusion_set: AbstractSet[str],
) -> bool:
    """Apply exclusion list and section boundary rules.

    Args:
        span: Candidate class.
        section_boundary: Offset where the restricting section begins, or
            None for no restriction.
        exclusion_set: Names that are never reported.

    Returns:
        False if the name is excluded or the header precedes the section
        boundary, True otherwise.
    """
    if span.name in exclusion_set:
        return False
    if section_boundary is not None and span.header_start < section_boundary:
        return False
    return True


def iter_matching_spans(
    document: str,
    section_keyword: Optional[str] = DEFAULT_SECTION_KEYWORD,
    exclusion_set: AbstractSet[str] = DEFAULT_EXCLUDED_CLASSES,
) -> Iterator[ClassSpan]:
    """Yield the spans that qualify as items, in document order.

    The whole document is scanned from offset 0 so classes before the
    section boundary are seen and rejected by the filter.
    """
    section_boundary = locate_section(document, section_keyword) if section_keyword else None
    spans = list(scan_class_spans(document))
    children = build_child_index(spans)

    for span in spans:
        if not has_own_property(span, document, children.get(span.header_start, [])):
            continue
        if not should_include(span, section_boundary, exclusion_set):
            continue
        yield span


def find_matching_spans(
    document: str,
    section_keyword: Optional[str] = DEFAULT_SECTION_KEYWORD,
    exclusion_set: AbstractSet[str] = DEFAULT_EXCLUDED_CLASSES,
) -> List[ClassSpan]:
    """Return the qualifying spans with their offsets.

    Unlike ``extract_class_names`` this propagates scanner errors.
    """
    return list(iter_matching_spans(document, section_keyword, exclusion_set))


def extract_class_names(
    document: str,
    section_keyword: Optional[str] = DEFAULT_SECTION_KEYWORD,
    exclusion_set: AbstractSet[str] = DEFAULT_EXCLUDED_CLASSES,
) -> List[str]:
    """Extract reportable item class names from one config document.

    Never raises: on an internal failure the error is logged and the names
    matched so far are returned.

    Args:
        document: Full text of one config file.
        section_keyword: Section restricting eligible classes. Empty or None
            disables the restriction.
        exclusion_set: Names never reported.

    Returns:
        Class names in first-seen order, duplicates kept.

    Example:
        >>> extract_class_names("class CfgWeapons { class Rifle { scope = 2; }; };")
        ['Rifle']
    """
    names: List[str] = []
    try:
        for span in iter_matching_spans(document, section_keyword, exclusion_set):
            names.append(span.name)
    except Exception as e:
        logger.error("Class extraction aborted after %d matches: %s", len(names), e, exc_info=True)
    return names
