"""
Brace-balanced scanning of config class definitions.

This module locates section headers and walks ``class Name : Base { ... };``
blocks in document order without building a syntax tree. Braces inside
string literals or comments are counted like any other brace.
"""

import logging
import re
from typing import Iterator, List, Optional, Tuple

from extraction.config import IDENTIFIER_PATTERN
from extraction.models import ClassSpan

# Configure logging
logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(
    r"\bclass\s+(?P<name>{id})(?:\s*:\s*(?P<base>{id}))?\s*(?P<terminator>[{{;])".format(
        id=IDENTIFIER_PATTERN
    )
)
_BRACE_RE = re.compile(r"[{}]")


def locate_section(document: str, section_keyword: Optional[str]) -> int:
    """Find where a named section begins.

    Args:
        document: Config document text.
        section_keyword: Section class name, e.g. ``CfgWeapons``. Empty or
            None disables the lookup.

    Returns:
        Offset of the first ``class <section_keyword>`` occurrence, or 0 when
        the section is absent.

    Example:
        >>> locate_section("class CfgPatches {}; class CfgWeapons {};", "CfgWeapons")
        21
    """
    if not section_keyword:
        return 0

    pattern = re.compile(
        r"\bclass\s+" + re.escape(section_keyword) + r"(?![A-Za-z0-9_])"
    )
    match = pattern.search(document)
    if match is None:
        logger.debug("Section %s not found; no section restriction", section_keyword)
        return 0
    return match.start()


def find_body_end(
    document: str,
    open_brace: int,
    limit: Optional[int] = None,
) -> Optional[int]:
    """Find the brace closing the block opened at ``open_brace``.

    Args:
        document: Config document text.
        open_brace: Offset of an opening ``{``.
        limit: Offset the search must not pass. Defaults to document end.

    Returns:
        Offset of the matching ``}``, or None if the block is unterminated.

    Raises:
        ValueError: If ``open_brace`` does not point at ``{``.
    """
    if document[open_brace:open_brace + 1] != "{":
        raise ValueError(f"Offset {open_brace} is not an opening brace")

    end = len(document) if limit is None else min(limit, len(document))
    depth = 0
    for brace in _BRACE_RE.finditer(document, open_brace, end):
        if brace.group() == "{":
            depth += 1
        else:
            depth -= 1
            if depth == 0:
                return brace.start()
    return None


def scan_class_spans(
    document: str,
    from_offset: int = 0,
    to_offset: Optional[int] = None,
) -> Iterator[ClassSpan]:
    """Yield every class span in document order, depth first.

    A span is yielded once its closing brace is found; its interior is
    scanned next, then scanning resumes after the span. Forward
    declarations (``class Foo;``) produce no span. A header whose body is
    never closed produces no span either: its interior up to the scan limit
    is still scanned and nothing after it is visited.

    Args:
        document: Config document text.
        from_offset: Offset to start looking for headers.
        to_offset: Offset to stop at. Defaults to document end.

    Yields:
        ClassSpan objects with parent links to the nearest enclosing span.

    Example:
        >>> [s.name for s in scan_class_spans("class A { class B {}; }; class C {};")]
        ['A', 'B', 'C']
    """
    limit = len(document) if to_offset is None else min(to_offset, len(document))
    # Work stack of (cursor, region_end, parent); explicit so depth is unbounded
    pending: List[Tuple[int, int, Optional[ClassSpan]]] = [
        (max(from_offset, 0), limit, None)
    ]

    while pending:
        cursor, region_end, parent = pending.pop()
        while cursor < region_end:
            header = _HEADER_RE.search(document, cursor, region_end)
            if header is None:
                break

            if header.group("terminator") == ";":
                cursor = header.end()
                continue

            open_brace = header.end() - 1
            close_brace = find_body_end(document, open_brace, region_end)
            if close_brace is None:
                logger.debug(
                    "Unterminated class %s at offset %d",
                    header.group("name"),
                    header.start(),
                )
                cursor = open_brace + 1
                continue

            span = ClassSpan(
                name=header.group("name"),
                base_name=header.group("base"),
                header_start=header.start(),
                body_start=open_brace + 1,
                body_end=close_brace,
                parent=parent,
            )
            yield span

            pending.append((span.end, region_end, parent))
            pending.append((span.body_start, span.body_end, span))
            break


def brace_imbalance(document: str) -> int:
    """Count opening minus closing braces in a document.

    Returns:
        0 for balanced text, positive when blocks are left open, negative
        when stray closing braces appear.
    """
    return document.count("{") - document.count("}")
