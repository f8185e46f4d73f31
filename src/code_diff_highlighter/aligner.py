"""
LCS-based line alignment.

Builds the longest-common-subsequence table for the old and new line lists
and walks it back from the bottom-right corner to produce an ordered list of
UNCHANGED / ADDED / REMOVED operations.

Lines are compared by exact value: no case folding, no whitespace
normalisation.
"""

from typing import Sequence

from .models import DiffOperation


def build_lcs_table(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[list[int]]:
    """
    Build the LCS length table.

    dp[i][j] holds the LCS length of old_lines[:i] and new_lines[:j].
    Row 0 and column 0 are all zeros.
    """
    m = len(old_lines)
    n = len(new_lines)
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(1, m + 1):
        old_line = old_lines[i - 1]
        for j in range(1, n + 1):
            if old_line == new_lines[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    return dp


def align(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[DiffOperation]:
    """
    Align two line sequences into an ordered list of diff operations.

    When the table offers an equally long path through an insertion or a
    deletion, the insertion (ADDED) is taken first while walking backwards.
    This keeps output reproducible: for ["a", "b", "c"] -> ["a", "x", "c"]
    the result is UNCHANGED(a), REMOVED(b), ADDED(x), UNCHANGED(c).

    Args:
        old_lines: Lines of the old text.
        new_lines: Lines of the new text.

    Returns:
        Operations in reading order. UNCHANGED + REMOVED covers every old
        line and UNCHANGED + ADDED covers every new line.
    """
    dp = build_lcs_table(old_lines, new_lines)

    operations: list[DiffOperation] = []
    i = len(old_lines)
    j = len(new_lines)

    while i > 0 or j > 0:
        if i > 0 and j > 0 and old_lines[i - 1] == new_lines[j - 1]:
            operations.append(DiffOperation.unchanged(new_lines[j - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            operations.append(DiffOperation.added(new_lines[j - 1]))
            j -= 1
        else:
            operations.append(DiffOperation.removed(old_lines[i - 1]))
            i -= 1

    operations.reverse()
    return operations
