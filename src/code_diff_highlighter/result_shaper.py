"""Derive summary counts and the renderable line sequence from final operations."""

from typing import Sequence

from .models import DiffOperation, DiffStats, RenderedLine, ShapedResult


def count_operations(operations: Sequence[DiffOperation]) -> DiffStats:
    """Count ADDED, CHANGED and REMOVED operations (UNCHANGED is not counted)."""
    added = sum(1 for op in operations if op.is_added)
    changed = sum(1 for op in operations if op.is_changed)
    removed = sum(1 for op in operations if op.is_removed)
    return DiffStats(added=added, changed=changed, removed=removed)


def shape_result(operations: Sequence[DiffOperation]) -> ShapedResult:
    """
    Build the stats and the view of the new text handed to renderers.

    Removed operations are dropped from the line sequence; everything else
    keeps its order and category.
    """
    lines = [
        RenderedLine(line=op.line, category=op.op_type)
        for op in operations
        if not op.is_removed
    ]
    return ShapedResult(stats=count_operations(operations), lines=lines)
