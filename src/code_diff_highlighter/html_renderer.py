"""
HTML rendering for comparison results.

Produces the highlighted view of the new text: one <div> per line, added
lines with class "added", changed lines with class "changed", unchanged lines
with an empty class. Removed lines are not part of this view; they only show
up in the stats line.
"""

import html
from pathlib import Path
from typing import Iterable, Union

from .models import ComparisonResult, DiffStats, RenderedLine

ADDED_COLOR = "#d4f8d4"    # Light green
CHANGED_COLOR = "#fff3b0"  # Light yellow

DOCUMENT_CSS = f"""
<style>
body {{
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif;
    margin: 20px;
    color: #24292f;
}}

.diff-stats {{
    margin-bottom: 12px;
    font-size: 13px;
}}

.highlighted-new {{
    font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, "Liberation Mono", monospace;
    font-size: 12px;
    line-height: 1.5;
    white-space: pre;
    border: 1px solid #d0d7de;
    border-radius: 6px;
    padding: 8px;
    overflow-x: auto;
}}

.highlighted-new div {{
    min-height: 1.5em;
}}

.added {{
    background-color: {ADDED_COLOR};
}}

.changed {{
    background-color: {CHANGED_COLOR};
}}
</style>
"""


def escape_line(line: str) -> str:
    """Escape &, < and > so a line of code can be injected as text."""
    return html.escape(line, quote=False)


def render_line_html(line: RenderedLine) -> str:
    """Render one line as a classed <div>."""
    return f'<div class="{line.css_class}">{escape_line(line.line)}</div>'


def render_lines_html(lines: Iterable[RenderedLine]) -> str:
    """Render the highlighted new text."""
    return "".join(render_line_html(line) for line in lines)


def render_stats_html(stats: DiffStats) -> str:
    """Render the stats line."""
    return (
        f"<strong>Diff Stats:</strong> Added: {stats.added} | "
        f"Changed: {stats.changed} | Removed: {stats.removed}"
    )


def render_document(result: ComparisonResult, title: str = "Code Diff") -> str:
    """
    Render a standalone HTML page for a comparison.

    Args:
        result: Comparison to render.
        title: Page title and heading.

    Returns:
        Complete HTML document with embedded CSS.
    """
    safe_title = html.escape(title)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{safe_title}</title>\n"
        f"{DOCUMENT_CSS}"
        "</head>\n"
        "<body>\n"
        f"<h2>{safe_title}</h2>\n"
        f'<div class="diff-stats">{render_stats_html(result.stats)}</div>\n'
        f'<div class="highlighted-new">{render_lines_html(result.rendered)}</div>\n'
        "</body>\n"
        "</html>\n"
    )


def write_html_report(
    result: ComparisonResult,
    output_path: Union[str, Path],
    title: str = "Code Diff",
) -> Path:
    """
    Write the HTML page for a comparison to disk.

    Args:
        result: Comparison to render.
        output_path: Target path; a .html suffix is enforced.
        title: Page title.

    Returns:
        Path to the written file.
    """
    output_path = Path(output_path)
    if output_path.suffix.lower() not in (".html", ".htm"):
        output_path = output_path.with_suffix(".html")

    output_path.write_text(render_document(result, title=title), encoding="utf-8")
    return output_path
