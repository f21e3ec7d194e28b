"""
DOCX document builder for the mail summary report.

Fluent wrapper around python-docx with the table shapes the report needs:
plain key/value counts, category shares and the courier ranking.
"""

from typing import List, Optional, Sequence, Tuple
from datetime import datetime
from docx import Document
from docx.shared import Inches
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.enum.table import WD_TABLE_ALIGNMENT
import logging

from ..core.models import CourierSummary

logger = logging.getLogger(__name__)


def percentage(part: int, whole: int) -> str:
    """Format part/whole as a percentage string, '0.0%' when whole is zero."""
    if whole <= 0:
        return "0.0%"
    return f"{part / whole * 100:.1f}%"


class DocxBuilder:
    """Builder for the A4 summary report."""

    TABLE_STYLE = "Light Grid Accent 1"

    def __init__(self):
        self._doc = Document()
        self._configure_page()

    def _configure_page(self) -> None:
        """A4 page, one-inch margins."""
        section = self._doc.sections[0]
        section.page_height = Inches(11.69)
        section.page_width = Inches(8.27)
        for side in ("left_margin", "right_margin", "top_margin", "bottom_margin"):
            setattr(section, side, Inches(1.0))

    def add_title(self, text: str, date: Optional[datetime] = None) -> "DocxBuilder":
        """
        Add the centered report title followed by a right-aligned date line.

        Args:
            text: Title text
            date: Report date. Uses the current date if not provided.

        Returns:
            Self for method chaining
        """
        heading = self._doc.add_heading(text, 0)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

        date = date or datetime.now()
        para = self._doc.add_paragraph()
        para.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        para.add_run(f"日期：{date.strftime('%Y-%m-%d')}").bold = True
        self._doc.add_paragraph()
        return self

    def add_section(self, number: int, title: str) -> "DocxBuilder":
        """Add a numbered level-1 heading."""
        self._doc.add_heading(f"{number}. {title}", level=1)
        return self

    def add_paragraph(self, text: str, bold_prefix: Optional[str] = None) -> "DocxBuilder":
        """Add a paragraph, optionally led by a bold label."""
        para = self._doc.add_paragraph()
        if bold_prefix:
            para.add_run(bold_prefix).bold = True
        para.add_run(text)
        return self

    def add_bullet_list(self, items: List[str]) -> "DocxBuilder":
        """Add hints as one bulleted paragraph."""
        self._doc.add_paragraph("\n".join(f"• {item}" for item in items))
        return self

    def add_count_table(self, rows: Sequence[Tuple[str, int]]) -> "DocxBuilder":
        """Add a two-column 项目/数量 table."""
        return self._add_table(["项目", "数量"], rows)

    def add_share_table(self, rows: Sequence[Tuple[str, int]], total: int) -> "DocxBuilder":
        """
        Add a category table with each count's share of the total.

        Args:
            rows: (category label, count) pairs
            total: Denominator for the share column

        Returns:
            Self for method chaining
        """
        return self._add_table(
            ["类别", "件数", "占比"],
            [(label, count, percentage(count, total)) for label, count in rows],
        )

    def add_courier_ranking(self, summaries: Sequence[CourierSummary]) -> "DocxBuilder":
        """Add the courier ranking in the given (already sorted) order."""
        return self._add_table(
            ["排名", "投递员", "件数"],
            [(rank, s.name, s.count) for rank, s in enumerate(summaries, 1)],
        )

    def _add_table(self, headers: Sequence[str], rows: Sequence[Sequence[object]]) -> "DocxBuilder":
        table = self._doc.add_table(rows=1, cols=len(headers))
        table.style = self.TABLE_STYLE
        table.alignment = WD_TABLE_ALIGNMENT.CENTER

        for cell, header in zip(table.rows[0].cells, headers):
            cell.text = header

        for row_data in rows:
            for cell, value in zip(table.add_row().cells, row_data):
                cell.text = str(value)

        self._doc.add_paragraph()
        return self

    def save(self, path: str) -> None:
        """Save the document to a file."""
        self._doc.save(path)
        logger.info(f"Document saved to: {path}")
