"""
Comparison pipeline for Code Diff Highlighter.

Runs the full sequence for a pair of texts:
- Validates and splits the raw texts into lines
- Rejects inputs whose alignment table would exceed the size guard
- Aligns the lines (LCS), then reclassifies similar added lines as changed
- Derives the stats and the renderable view of the new text
"""

import logging
from typing import Optional, Sequence

from .aligner import align
from .classifier import classify
from .config import DiffConfig
from .errors import InputTooLargeError
from .models import ComparisonResult, DiffStats
from .result_shaper import shape_result
from .text_input import split_lines, validate_inputs

logger = logging.getLogger(__name__)


def compare_lines(
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    config: Optional[DiffConfig] = None,
) -> ComparisonResult:
    """
    Compare two line sequences.

    Args:
        old_lines: Lines of the old text.
        new_lines: Lines of the new text.
        config: Comparison settings (defaults to DiffConfig()).

    Returns:
        ComparisonResult with final operations, stats and rendered lines.

    Raises:
        InputTooLargeError: If len(old_lines) * len(new_lines) exceeds
            config.max_alignment_cells.
    """
    config = config or DiffConfig()
    old_lines = list(old_lines)
    new_lines = list(new_lines)

    if config.exceeds_size_guard(len(old_lines), len(new_lines)):
        raise InputTooLargeError(
            f"Inputs too large to compare: {len(old_lines)} x {len(new_lines)} lines "
            f"exceeds the limit of {config.max_alignment_cells} table cells"
        )

    logger.debug(f"Aligning {len(old_lines)} old lines against {len(new_lines)} new lines")
    aligned = align(old_lines, new_lines)
    operations = classify(
        aligned,
        threshold=config.similarity_threshold,
        consume_on_match=config.consume_on_match,
    )
    shaped = shape_result(operations)

    result = ComparisonResult(
        old_lines=old_lines,
        new_lines=new_lines,
        operations=operations,
        stats=shaped.stats,
        rendered=shaped.lines,
        threshold=config.similarity_threshold,
        consume_on_match=config.consume_on_match,
    )
    log_comparison(result)
    return result


def compare_texts(
    old_text: str,
    new_text: str,
    config: Optional[DiffConfig] = None,
) -> ComparisonResult:
    """
    Compare two raw text blocks.

    Args:
        old_text: Old version as entered.
        new_text: New version as entered.
        config: Comparison settings.

    Returns:
        ComparisonResult for the trimmed, line-split texts.

    Raises:
        MissingInputError: If either text is empty after trimming.
        InputTooLargeError: If the inputs exceed the size guard.
    """
    old_text, new_text = validate_inputs(old_text, new_text)
    return compare_lines(split_lines(old_text), split_lines(new_text), config)


def format_stats_text(stats: DiffStats) -> str:
    """Format stats as the one-line summary shown above the output."""
    return f"Diff Stats: Added: {stats.added} | Changed: {stats.changed} | Removed: {stats.removed}"


def log_comparison(result: ComparisonResult) -> None:
    """
    Log comparison summary.

    Args:
        result: Result to log.
    """
    logger.info(format_stats_text(result.stats))

    # Without consume-on-match one removed line can mark several added lines
    if not result.consume_on_match and result.stats.changed > result.stats.removed:
        logger.warning(
            f"  {result.stats.changed} changed lines paired with only "
            f"{result.stats.removed} removed lines"
        )
