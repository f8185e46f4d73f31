"""
Line similarity scoring.

Similarity between two lines is the complement of their Levenshtein
distance, normalised by the length of the longer line:

    similarity(a, b) = 1 - edit_distance(a, b) / max(len(a), len(b))

Two empty lines are treated as identical (similarity 1.0).
"""


def edit_distance(a: str, b: str) -> int:
    """
    Compute the Levenshtein distance between two lines.

    Insertions and deletions cost 1; substituting a character costs 0 when
    the characters are equal and 1 otherwise.

    Args:
        a: First line.
        b: Second line.

    Returns:
        Minimum number of single-character edits turning a into b.
    """
    rows = len(a) + 1
    cols = len(b) + 1
    matrix = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,         # deletion
                matrix[i][j - 1] + 1,         # insertion
                matrix[i - 1][j - 1] + cost,  # substitution
            )

    return matrix[rows - 1][cols - 1]


def similarity(a: str, b: str) -> float:
    """
    Similarity ratio between two lines in the range [0.0, 1.0].

    Args:
        a: First line.
        b: Second line.

    Returns:
        1.0 for identical lines, 0.0 when every character differs.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - (edit_distance(a, b) / max_len)
