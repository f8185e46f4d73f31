"""
Code Diff Highlighter

Compares an old and a new version of some code line by line:
- Aligns the two versions with a longest-common-subsequence diff
- Detects changed lines by edit-distance similarity to removed lines
- Renders the new version with added and changed lines highlighted
"""

__version__ = "1.0.0"
__author__ = "Code Diff Highlighter Team"

from .config import DiffConfig

from .models import (
    OperationType,
    DiffOperation,
    DiffStats,
    RenderedLine,
    ShapedResult,
    ComparisonResult,
)

from .errors import (
    DiffInputError,
    MissingInputError,
    InputTooLargeError,
    TextLoadError,
    StorageError,
)

# Diff engine
from .similarity import edit_distance, similarity
from .aligner import align, build_lcs_table
from .classifier import SIMILARITY_THRESHOLD, classify
from .result_shaper import count_operations, shape_result

# Pipeline
from .text_input import load_text, prepare_text, split_lines, validate_inputs
from .comparison import compare_lines, compare_texts, format_stats_text

# Output
from .html_renderer import (
    render_document,
    render_lines_html,
    render_stats_html,
    write_html_report,
)
from .docx_writer import DiffDocxWriter, write_diff_docx

# Persistence
from .storage import DebouncedSaver, SessionStore, restore_session

__all__ = [
    # Configuration
    "DiffConfig",
    # Models
    "OperationType",
    "DiffOperation",
    "DiffStats",
    "RenderedLine",
    "ShapedResult",
    "ComparisonResult",
    # Errors
    "DiffInputError",
    "MissingInputError",
    "InputTooLargeError",
    "TextLoadError",
    "StorageError",
    # Diff engine
    "edit_distance",
    "similarity",
    "align",
    "build_lcs_table",
    "SIMILARITY_THRESHOLD",
    "classify",
    "count_operations",
    "shape_result",
    # Pipeline
    "load_text",
    "prepare_text",
    "split_lines",
    "validate_inputs",
    "compare_lines",
    "compare_texts",
    "format_stats_text",
    # Output
    "render_document",
    "render_lines_html",
    "render_stats_html",
    "write_html_report",
    "DiffDocxWriter",
    "write_diff_docx",
    # Persistence
    "DebouncedSaver",
    "SessionStore",
    "restore_session",
]
