"""
Data models for Code Diff Highlighter.

Diff operations are immutable value objects. Reclassifying a line builds a new
DiffOperation rather than editing an existing one, so every pipeline stage
can be treated as a pure function over lists of operations.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class OperationType(Enum):
    """Category of a single line in the diff."""
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class DiffOperation:
    """One tagged line of diff output."""
    op_type: OperationType
    line: str

    @classmethod
    def unchanged(cls, line: str) -> "DiffOperation":
        return cls(OperationType.UNCHANGED, line)

    @classmethod
    def added(cls, line: str) -> "DiffOperation":
        return cls(OperationType.ADDED, line)

    @classmethod
    def removed(cls, line: str) -> "DiffOperation":
        return cls(OperationType.REMOVED, line)

    @classmethod
    def changed(cls, line: str) -> "DiffOperation":
        return cls(OperationType.CHANGED, line)

    @property
    def is_unchanged(self) -> bool:
        return self.op_type == OperationType.UNCHANGED

    @property
    def is_added(self) -> bool:
        return self.op_type == OperationType.ADDED

    @property
    def is_removed(self) -> bool:
        return self.op_type == OperationType.REMOVED

    @property
    def is_changed(self) -> bool:
        return self.op_type == OperationType.CHANGED

    def with_type(self, op_type: OperationType) -> "DiffOperation":
        """Return a copy of this operation carrying a different category."""
        return replace(self, op_type=op_type)

    def __repr__(self) -> str:
        return f"{self.op_type.name}({self.line!r})"


@dataclass(frozen=True)
class DiffStats:
    """Summary counts shown above the highlighted output."""
    added: int = 0
    changed: int = 0
    removed: int = 0

    @property
    def total_changes(self) -> int:
        return self.added + self.changed + self.removed

    def to_dict(self) -> dict[str, int]:
        return {
            "added": self.added,
            "changed": self.changed,
            "removed": self.removed,
        }


@dataclass(frozen=True)
class RenderedLine:
    """A line of the new text as handed to a renderer.

    Removed lines never appear here; category is one of
    UNCHANGED, ADDED or CHANGED.
    """
    line: str
    category: OperationType

    @property
    def css_class(self) -> str:
        """Class name used by the HTML view (unchanged lines get none)."""
        if self.category == OperationType.ADDED:
            return "added"
        if self.category == OperationType.CHANGED:
            return "changed"
        return ""

    def to_dict(self) -> dict[str, str]:
        return {"line": self.line, "category": self.category.value}


@dataclass
class ShapedResult:
    """Counts plus the renderable sequence derived from final operations."""
    stats: DiffStats
    lines: list[RenderedLine] = field(default_factory=list)


@dataclass
class ComparisonResult:
    """Complete outcome of comparing an old and a new block of text."""
    old_lines: list[str]
    new_lines: list[str]
    operations: list[DiffOperation]
    stats: DiffStats
    rendered: list[RenderedLine]
    threshold: float
    consume_on_match: bool = False

    @property
    def has_changes(self) -> bool:
        return self.stats.total_changes > 0

    def to_dict(self) -> dict[str, Any]:
        """Format result as a dictionary for JSON export."""
        return {
            "stats": self.stats.to_dict(),
            "lines": [line.to_dict() for line in self.rendered],
            "operations": [
                {"type": op.op_type.value, "line": op.line}
                for op in self.operations
            ],
            "old_line_count": len(self.old_lines),
            "new_line_count": len(self.new_lines),
            "threshold": self.threshold,
            "consume_on_match": self.consume_on_match,
        }
