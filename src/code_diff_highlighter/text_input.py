"""
Text acquisition and validation.

Both texts are trimmed of overall leading/trailing whitespace and split on
line breaks before comparison. Individual lines keep their own indentation
and trailing spaces.
"""

import sys
from pathlib import Path
from typing import Union

from .errors import MissingInputError, TextLoadError

MISSING_INPUT_MESSAGE = "Please enter both old and new code."

# Path value meaning "read from standard input"
STDIN_MARKER = "-"


def prepare_text(raw: str) -> str:
    """Normalise Windows line endings and trim the block as a whole."""
    return raw.replace("\r\n", "\n").strip()


def split_lines(text: str) -> list[str]:
    """
    Split a prepared text block into lines.

    Args:
        text: Text already passed through prepare_text.

    Returns:
        Lines without their newline characters. An empty text yields [""].
    """
    return text.split("\n")


def validate_inputs(old_raw: str, new_raw: str) -> tuple[str, str]:
    """
    Trim both texts and make sure neither is empty.

    Args:
        old_raw: Old text as entered.
        new_raw: New text as entered.

    Returns:
        Tuple of (old_text, new_text), both trimmed.

    Raises:
        MissingInputError: If either text is empty after trimming.
    """
    old_text = prepare_text(old_raw or "")
    new_text = prepare_text(new_raw or "")

    if not old_text or not new_text:
        raise MissingInputError(MISSING_INPUT_MESSAGE)

    return old_text, new_text


def load_text(source: Union[str, Path]) -> str:
    """
    Read a text file (or stdin for "-") as UTF-8.

    Args:
        source: File path, or "-" for standard input.

    Returns:
        File contents, untrimmed.

    Raises:
        TextLoadError: If the file is missing, is a directory, or is not
            valid UTF-8.
    """
    if str(source) == STDIN_MARKER:
        return sys.stdin.read()

    path = Path(source)
    if not path.exists():
        raise TextLoadError(f"File not found: {path}")
    if path.is_dir():
        raise TextLoadError(f"Expected a file but got a directory: {path}")

    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise TextLoadError(f"File is not valid UTF-8: {path} ({e})")
    except OSError as e:
        raise TextLoadError(f"Failed to read file: {path} ({e})")
