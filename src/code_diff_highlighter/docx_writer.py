"""
Word document writer with highlight support.

This module exports a comparison as a .docx file with:
- A title and a stats table (added / changed / removed)
- The new text, one monospace paragraph per line
- Added lines highlighted green, changed lines highlighted yellow
"""

import re
from pathlib import Path
from typing import Optional, Union

from docx import Document
from docx.enum.text import WD_COLOR_INDEX
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt
from docx.text.paragraph import Paragraph

from .models import ComparisonResult, OperationType, RenderedLine

CODE_FONT = "Consolas"
BODY_FONT = "Calibri"

HIGHLIGHT_COLORS = {
    OperationType.ADDED: WD_COLOR_INDEX.BRIGHT_GREEN,
    OperationType.CHANGED: WD_COLOR_INDEX.YELLOW,
}

# Table header fill
HEADER_FILL = "D9E2F3"

# Regex pattern for invalid XML 1.0 characters
# Valid XML 1.0 chars: #x9 | #xA | #xD | [#x20-#xD7FF] | [#xE000-#xFFFD] | [#x10000-#x10FFFF]
_INVALID_XML_CHARS_RE = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]"
)


def sanitize_for_xml(text: str) -> str:
    """
    Remove characters XML 1.0 does not allow.

    Source code can carry stray control characters; Word refuses to open a
    document containing them.

    Args:
        text: Input text.

    Returns:
        Text safe for DOCX.
    """
    if not text:
        return text
    return _INVALID_XML_CHARS_RE.sub("", text)


def set_cell_shading(cell, color: str) -> None:
    """Set background color/shading for a table cell."""
    tc = cell._tc
    tcPr = tc.get_or_add_tcPr()
    shd = OxmlElement("w:shd")
    shd.set(qn("w:fill"), color)
    tcPr.append(shd)


def add_code_line(paragraph: Paragraph, line: RenderedLine) -> None:
    """
    Write one rendered line into a paragraph, highlighting it by category.

    Empty lines get a single space so the highlight stays visible.
    """
    text = sanitize_for_xml(line.line) or " "
    run = paragraph.add_run(text)
    run.font.name = CODE_FONT
    run.font.size = Pt(10)

    color = HIGHLIGHT_COLORS.get(line.category)
    if color is not None:
        run.font.highlight_color = color


class DiffDocxWriter:
    """
    Writes comparison results to a Word document.

    Creates a document with:
    - Title
    - Stats table
    - Full new text with added/changed lines highlighted
    """

    def __init__(self):
        """Initialize the document writer."""
        self.doc = Document()
        self._setup_styles()

    def _setup_styles(self) -> None:
        """Configure body font and tight spacing for code lines."""
        normal_style = self.doc.styles["Normal"]
        normal_style.font.name = BODY_FONT
        normal_style.font.size = Pt(11)
        normal_style.paragraph_format.space_before = Pt(0)
        normal_style.paragraph_format.space_after = Pt(0)
        normal_style.paragraph_format.line_spacing = 1.0

        # East Asian fallback (required for proper font embedding)
        normal_style._element.rPr.rFonts.set(qn("w:eastAsia"), BODY_FONT)

    def write(
        self,
        result: ComparisonResult,
        output_path: Union[str, Path],
        document_title: Optional[str] = "Code Diff",
    ) -> Path:
        """
        Write the comparison to a Word document.

        Args:
            result: ComparisonResult to export.
            output_path: Path for the output .docx file.
            document_title: Optional heading at the top.

        Returns:
            Path to the created document.
        """
        output_path = Path(output_path)

        # Ensure .docx extension
        if output_path.suffix.lower() != ".docx":
            output_path = output_path.with_suffix(".docx")

        if document_title:
            self.doc.add_heading(document_title, level=1)

        self._add_stats_table(result)

        self.doc.add_heading("NEW CODE", level=2)
        for line in result.rendered:
            add_code_line(self.doc.add_paragraph(), line)

        self.doc.save(str(output_path))
        return output_path

    def _add_stats_table(self, result: ComparisonResult) -> None:
        """Add a two-row table with the added/changed/removed counts."""
        table = self.doc.add_table(rows=2, cols=3)
        table.style = "Table Grid"

        headers = ("Added", "Changed", "Removed")
        values = (result.stats.added, result.stats.changed, result.stats.removed)

        for col, (header, value) in enumerate(zip(headers, values)):
            header_cell = table.cell(0, col)
            header_cell.text = header
            set_cell_shading(header_cell, HEADER_FILL)
            table.cell(1, col).text = str(value)

        self.doc.add_paragraph()


def write_diff_docx(
    result: ComparisonResult,
    output_path: Union[str, Path],
) -> Path:
    """
    Convenience function to write a comparison to docx.

    Args:
        result: ComparisonResult to write.
        output_path: Output file path.

    Returns:
        Path to created document.
    """
    writer = DiffDocxWriter()
    return writer.write(result, output_path)
