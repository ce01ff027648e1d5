"""Pure helpers for duplicate detection, dedupe and case-insensitive sorting.

Deduplication compares values exactly, while sorting ignores case. Two
names that differ only in case therefore both survive dedupe and end up
next to each other after sorting.
"""

from __future__ import annotations

from typing import Iterable


def sort_key(value: str) -> str:
    """Case-insensitive ordering key.

    Casefolded text compares by code point, independent of locale, so
    digits sort before ``_`` and ``_`` before letters.
    """
    return value.casefold()


def count_occurrences(values: Iterable[str]) -> dict[str, int]:
    """Count exact occurrences of each value, keyed in first-seen order."""
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def find_duplicates(values: Iterable[str]) -> list[str]:
    """Return values occurring more than once, sorted case-insensitively."""
    counts = count_occurrences(values)
    return sort_case_insensitive(value for value, count in counts.items() if count > 1)


def remove_duplicates(values: Iterable[str]) -> list[str]:
    """Drop exact repeats, keeping the first occurrence of each value."""
    return list(dict.fromkeys(values))


def sort_case_insensitive(values: Iterable[str]) -> list[str]:
    """Stable case-insensitive sort."""
    return sorted(values, key=sort_key)


def normalize_items(values: Iterable[str]) -> list[str]:
    """Dedupe then sort, the canonical form of an item list."""
    return sort_case_insensitive(remove_duplicates(values))
