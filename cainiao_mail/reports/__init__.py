"""Reports module for generating summary documents."""

from .report_generator import ReportGenerator
from .docx_builder import DocxBuilder
from .text_summary import format_courier_detail, format_courier_summary, format_overview

__all__ = [
    "ReportGenerator",
    "DocxBuilder",
    "format_courier_detail",
    "format_courier_summary",
    "format_overview",
]
