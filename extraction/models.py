"""
Data models for scanned config classes.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ClassSpan:
    """Represents one brace-delimited class definition in a config document.

    Offsets index into the document string the span was scanned from.

    Attributes:
        name: Class identifier (e.g., ``arifle_MX_F``)
        base_name: Inherited class identifier after ``:``, or None
        header_start: Offset of the ``class`` keyword
        body_start: Offset just past the opening ``{``
        body_end: Offset of the matching closing ``}``
        parent: Nearest enclosing span, or None for top-level classes
    """

    name: str
    base_name: Optional[str]
    header_start: int
    body_start: int
    body_end: int
    parent: Optional["ClassSpan"] = field(default=None, repr=False, compare=False)

    @property
    def end(self) -> int:
        """Exclusive end offset of the full span (past the closing brace)."""
        return self.body_end + 1

    @property
    def depth(self) -> int:
        """Nesting depth, 0 for top-level classes."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def body(self, document: str) -> str:
        """Text between the braces."""
        return document[self.body_start:self.body_end]

    def full_text(self, document: str) -> str:
        """Text from the ``class`` keyword through the closing brace."""
        return document[self.header_start:self.end]

    def contains(self, other: "ClassSpan") -> bool:
        """Whether ``other`` lies strictly inside this span's body."""
        return self.body_start <= other.header_start and other.end <= self.body_end
