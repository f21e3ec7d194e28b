"""
Excel formatting service for professional-looking spreadsheets.

This module provides utilities to export DataFrames to Excel workbooks
with consistent styling, colors, and formatting.
"""

from pathlib import Path
from typing import Dict, Iterable, Optional
import pandas as pd
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

logger = logging.getLogger(__name__)


class ExcelTheme:
    """Color theme for Excel formatting."""

    # Header colors
    HEADER_BG = "2F5496"  # Dark blue
    HEADER_FG = "FFFFFF"  # White text

    # Alternating row colors
    ROW_EVEN = "D6E3F8"  # Light blue
    ROW_ODD = "FFFFFF"   # White

    # Total row
    SUMMARY_BG = "FFF2CC"  # Light yellow
    SUMMARY_FG = "000000"  # Black text

    # Border color
    BORDER_COLOR = "B4C6E7"  # Light blue border


class ExcelStyles:
    """Pre-defined styles for Excel formatting."""

    @staticmethod
    def get_header_font() -> Font:
        """Bold white font for headers."""
        return Font(bold=True, color=ExcelTheme.HEADER_FG, size=11)

    @staticmethod
    def get_header_fill() -> PatternFill:
        """Dark blue background for headers."""
        return PatternFill(
            start_color=ExcelTheme.HEADER_BG,
            end_color=ExcelTheme.HEADER_BG,
            fill_type="solid"
        )

    @staticmethod
    def get_header_alignment() -> Alignment:
        """Center alignment for headers."""
        return Alignment(horizontal="center", vertical="center", wrap_text=True)

    @staticmethod
    def get_data_alignment(wrap: bool = False) -> Alignment:
        """Default alignment for data cells."""
        return Alignment(horizontal="left", vertical="center", wrap_text=wrap)

    @staticmethod
    def get_row_fill(even: bool) -> PatternFill:
        """Zebra striping fill."""
        color = ExcelTheme.ROW_EVEN if even else ExcelTheme.ROW_ODD
        return PatternFill(start_color=color, end_color=color, fill_type="solid")

    @staticmethod
    def get_summary_fill() -> PatternFill:
        """Yellow background for total rows."""
        return PatternFill(
            start_color=ExcelTheme.SUMMARY_BG,
            end_color=ExcelTheme.SUMMARY_BG,
            fill_type="solid"
        )

    @staticmethod
    def get_summary_font() -> Font:
        """Bold font for total rows."""
        return Font(bold=True, color=ExcelTheme.SUMMARY_FG, size=11)

    @staticmethod
    def get_thin_border() -> Border:
        """Thin border for cells."""
        side = Side(style="thin", color=ExcelTheme.BORDER_COLOR)
        return Border(left=side, right=side, top=side, bottom=side)

    @staticmethod
    def get_integer_format() -> str:
        """Number format for integer values."""
        return "#,##0"

    @staticmethod
    def get_text_format() -> str:
        """Text format, keeps long numeric identifiers verbatim."""
        return "@"


class ExcelFormatter:
    """
    Service for exporting DataFrames to formatted Excel workbooks.

    Features:
    - Styled headers with colors
    - Alternating row colors (zebra striping)
    - Auto-sized columns
    - Highlighted total rows
    - Text format for identifier columns
    """

    def __init__(self):
        """Initialize the Excel formatter."""
        self._styles = ExcelStyles()

    def export_workbook(
        self,
        sheets: Dict[str, pd.DataFrame],
        path: Path,
        summary_identifier: str = "",
        freeze_header: bool = True,
        text_columns: Optional[Iterable[str]] = None
    ) -> bool:
        """
        Export several DataFrames to one formatted Excel file.

        Args:
            sheets: Sheet name -> DataFrame, written in the given order
            path: Output file path
            summary_identifier: First-column text that marks a total row
            freeze_header: Whether to freeze the header row
            text_columns: Columns stored with text number format

        Returns:
            True if export was successful, False otherwise
        """
        text_columns = set(text_columns or [])

        try:
            logger.info(f"Exporting formatted Excel to: {path}")
            path = Path(path)
            path.parent.mkdir(parents=True, exist_ok=True)

            wb = Workbook()
            wb.remove(wb.active)

            for sheet_name, df in sheets.items():
                ws = wb.create_sheet(title=sheet_name)

                self._write_data(ws, df, text_columns)
                self._format_header(ws, len(df.columns))
                self._format_data_rows(ws, df, summary_identifier, text_columns)
                self._auto_size_columns(ws, df)

                if freeze_header:
                    ws.freeze_panes = "A2"

            wb.save(path)
            logger.info(f"Excel file saved successfully: {path}")
            return True
        except (OSError, ValueError) as e:
            logger.error(f"Failed to export Excel file: {e}")
            return False

    def _write_data(self, ws: Worksheet, df: pd.DataFrame, text_columns: set) -> None:
        """Write DataFrame data to worksheet."""
        for col_idx, column in enumerate(df.columns, 1):
            ws.cell(row=1, column=col_idx, value=column)

        for row_idx, row in enumerate(df.itertuples(index=False), 2):
            for col_idx, value in enumerate(row, 1):
                cell = ws.cell(row=row_idx, column=col_idx)

                if pd.isna(value):
                    cell.value = ""
                elif df.columns[col_idx - 1] in text_columns:
                    cell.value = str(value)
                elif hasattr(value, "item"):
                    # numpy scalars
                    cell.value = value.item()
                else:
                    cell.value = value

    def _format_header(self, ws: Worksheet, num_cols: int) -> None:
        """Apply formatting to header row."""
        header_font = self._styles.get_header_font()
        header_fill = self._styles.get_header_fill()
        header_alignment = self._styles.get_header_alignment()
        border = self._styles.get_thin_border()

        for col_idx in range(1, num_cols + 1):
            cell = ws.cell(row=1, column=col_idx)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = border

        ws.row_dimensions[1].height = 24

    def _format_data_rows(
        self,
        ws: Worksheet,
        df: pd.DataFrame,
        summary_identifier: str,
        text_columns: set
    ) -> None:
        """Apply formatting to data rows."""
        summary_fill = self._styles.get_summary_fill()
        summary_font = self._styles.get_summary_font()
        border = self._styles.get_thin_border()
        integer_format = self._styles.get_integer_format()
        text_format = self._styles.get_text_format()

        if df.empty:
            return

        num_cols = len(df.columns)
        first_col = df.iloc[:, 0].astype(str)

        for row_idx in range(len(df)):
            excel_row = row_idx + 2  # Excel rows are 1-indexed, header is row 1
            is_summary = bool(summary_identifier) and first_col.iloc[row_idx] == summary_identifier

            if is_summary:
                fill = summary_fill
                font = summary_font
            else:
                fill = self._styles.get_row_fill(row_idx % 2 == 0)
                font = Font(size=11)

            for col_idx in range(1, num_cols + 1):
                cell = ws.cell(row=excel_row, column=col_idx)
                col_name = df.columns[col_idx - 1]
                multiline = isinstance(cell.value, str) and "\n" in cell.value

                cell.fill = fill
                cell.font = font
                cell.alignment = self._styles.get_data_alignment(wrap=multiline)
                cell.border = border

                if col_name in text_columns:
                    cell.number_format = text_format
                elif pd.api.types.is_integer_dtype(df[col_name].dtype):
                    cell.number_format = integer_format

    def _auto_size_columns(self, ws: Worksheet, df: pd.DataFrame) -> None:
        """Auto-size column widths based on content."""
        for col_idx, column in enumerate(df.columns, 1):
            max_length = self._display_width(str(column))

            for value in df.iloc[:, col_idx - 1]:
                if pd.notna(value):
                    longest_line = max(str(value).split("\n"), key=self._display_width)
                    max_length = max(max_length, self._display_width(longest_line))

            adjusted_width = min(max_length + 3, 60)  # Cap at 60 chars
            adjusted_width = max(adjusted_width, 10)   # Minimum 10 chars

            ws.column_dimensions[get_column_letter(col_idx)].width = adjusted_width

    @staticmethod
    def _display_width(text: str) -> int:
        """Approximate display width; CJK characters take two columns."""
        return sum(2 if ord(ch) > 0x2E80 else 1 for ch in text)


# Singleton instance
_formatter_instance: Optional[ExcelFormatter] = None


def get_excel_formatter() -> ExcelFormatter:
    """Get or create the Excel formatter singleton."""
    global _formatter_instance
    if _formatter_instance is None:
        _formatter_instance = ExcelFormatter()
    return _formatter_instance
