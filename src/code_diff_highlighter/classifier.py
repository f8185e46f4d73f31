"""
Changed-line detection.

After alignment a modified line shows up as a REMOVED old line plus an ADDED
new line. This module reclassifies an ADDED line as CHANGED when it is
similar enough to one of the removed lines.

By default the pool of removed lines is never consumed, so a single removed
line may turn several added lines into CHANGED. Pass consume_on_match=True
to pair each removed line with at most one added line.
"""

import logging
from typing import Optional, Sequence

from .models import DiffOperation, OperationType
from .similarity import similarity

logger = logging.getLogger(__name__)

# Added lines need a similarity strictly above this to count as changed
SIMILARITY_THRESHOLD = 0.7


def classify(
    operations: Sequence[DiffOperation],
    threshold: float = SIMILARITY_THRESHOLD,
    consume_on_match: bool = False,
) -> list[DiffOperation]:
    """
    Reclassify ADDED operations as CHANGED where a similar line was removed.

    Args:
        operations: Aligned operations (UNCHANGED / ADDED / REMOVED).
        threshold: Similarity that an added line must exceed.
        consume_on_match: If True, a removed line is taken out of the
            candidate pool once it has matched an added line.

    Returns:
        New list with the same length and order. Only ADDED entries can
        differ from the input, and only by becoming CHANGED.
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must be between 0 and 1, got {threshold}")

    candidates = [op.line for op in operations if op.is_removed]

    classified: list[DiffOperation] = []
    for op in operations:
        if not op.is_added or not candidates:
            classified.append(op)
            continue

        match_index = _find_similar(op.line, candidates, threshold)
        if match_index is None:
            classified.append(op)
            continue

        classified.append(op.with_type(OperationType.CHANGED))
        if consume_on_match:
            del candidates[match_index]

    return classified


def _find_similar(line: str, candidates: list[str], threshold: float) -> Optional[int]:
    """Index of the first candidate scoring above threshold, else None."""
    for index, candidate in enumerate(candidates):
        score = similarity(line, candidate)
        if score > threshold:
            logger.debug(f"Paired {line!r} with removed {candidate!r} ({score:.3f})")
            return index
    return None
