"""
Report generator for the Cainiao mail summary.

This module turns a processing result into a Word document with the
overall counts, the delivery-outcome breakdown and the courier ranking.
"""

from typing import Optional
from pathlib import Path
import logging

from ..config import Settings, get_settings
from ..core.models import ProcessingResult, RunningStats
from .docx_builder import DocxBuilder

logger = logging.getLogger(__name__)


class ReportGenerator:
    """
    Generator for summary reports.

    Creates a Word document with overview statistics, delivery breakdown
    and per-courier counts. When nothing matched, a diagnostics section
    lists the detected headers and missing columns instead.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the report generator.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._settings = settings or get_settings()

    def generate(
        self,
        result: ProcessingResult,
        output_path: Optional[Path] = None
    ) -> Optional[Path]:
        """
        Generate the summary report.

        Args:
            result: Processing result of a successful run
            output_path: Optional custom output path

        Returns:
            Path to generated report, or None if generation failed
        """
        if not result.success:
            logger.warning("Processing failed, skipping report generation")
            return None

        output = Path(output_path or self._settings.report_path)
        stats = result.stats

        logger.info("Generating summary report")

        builder = DocxBuilder()
        builder.add_title("菜鸟邮件统计报告")

        self._add_overview(builder, stats)

        if stats.has_matches:
            self._add_delivery_section(builder, stats)
            self._add_courier_section(builder, stats)
        else:
            self._add_diagnostics(builder, stats)

        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            builder.save(str(output))
        except OSError as e:
            logger.error(f"Failed to save report: {e}")
            return None

        return output

    def _add_overview(self, builder: DocxBuilder, stats: RunningStats) -> None:
        """Add overview section."""
        builder.add_section(1, "总体情况")
        builder.add_count_table([
            ("总处理行数", stats.total_rows),
            ("识别为菜鸟邮件", stats.cainiao_rows),
            ("已剔除机构", stats.excluded_rows),
            ("最终有效数据", stats.final_count),
        ])

    def _add_delivery_section(self, builder: DocxBuilder, stats: RunningStats) -> None:
        """Add delivery-outcome breakdown."""
        builder.add_section(2, "投递情况")
        builder.add_share_table(
            list(stats.delivery_stats.as_dict().items()), total=stats.final_count
        )

    def _add_courier_section(self, builder: DocxBuilder, stats: RunningStats) -> None:
        """Add courier ranking."""
        builder.add_section(3, f"投递员揽投情况 ({stats.total_couriers}人)")
        builder.add_courier_ranking(stats.courier_stats)

    def _add_diagnostics(self, builder: DocxBuilder, stats: RunningStats) -> None:
        """Explain why no mail matched."""
        builder.add_section(2, "未找到符合条件的邮件")
        builder.add_paragraph(
            "系统在上传的文件中没有找到符合条件的邮件，这可能是因为列名不匹配导致的。"
        )
        headers = "、".join(stats.detected_headers) if stats.detected_headers else "（无）"
        builder.add_paragraph(headers, bold_prefix="检测到的列名：")
        if stats.missing_required_columns:
            builder.add_paragraph(
                "、".join(stats.missing_required_columns), bold_prefix="缺少的必需列："
            )
        builder.add_bullet_list([
            "必须包含含有“邮件号”或“单号”字样的列。",
            "必须包含含有“收寄机构”字样的列以进行剔除。",
            "请确保邮件号以文本格式存储，而不是科学计数法（如 1.3E+12）。",
        ])
