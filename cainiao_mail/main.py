"""
Main entry point for the Cainiao mail summary application.

This module provides the main execution flow: it loads the given delivery
reports, runs the processing pipeline, exports the summary workbook and
prints the statistics.

Usage:
    python -m cainiao_mail.main report1.xlsx report2.xlsx
    # or, processing every spreadsheet in data/
    python -m cainiao_mail.main
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from cainiao_mail.config import get_settings
from cainiao_mail.core.models import ProcessingResult
from cainiao_mail.services import ProcessingPipeline
from cainiao_mail.reports import (
    ReportGenerator,
    format_courier_detail,
    format_courier_summary,
    format_overview,
)


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure application logging.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="cainiao-mail",
        description="筛选菜鸟邮件并按投递员汇总",
    )
    parser.add_argument("files", nargs="*", type=Path, help="Excel/CSV delivery reports")
    parser.add_argument("-o", "--output", type=Path, help="path of the exported workbook")
    parser.add_argument("--report", action="store_true", help="also write a Word summary report")
    parser.add_argument(
        "--detail", action="store_true", help="list the tracking numbers of every courier"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def print_banner() -> None:
    """Print application banner."""
    print("=" * 60)
    print("  菜鸟邮件筛选汇总工具")
    print("  Version 1.0.0")
    print("=" * 60)


def print_summary(result: ProcessingResult, detail: bool = False) -> None:
    """Print execution summary, optionally with per-courier tracking numbers."""
    print("\n" + "=" * 60)
    print("处理结果汇总")
    print("=" * 60)

    if not result.success:
        print(f"\n✗ 处理失败: {result.message}")
        for error in result.processing_errors:
            print(f"  - {error}")
        return

    print(format_overview(result.stats))

    if result.stats.courier_stats:
        print(f"\n投递员揽投情况 ({result.stats.total_couriers}人):")
        print(format_courier_summary(result.stats))

    if detail:
        for summary in result.stats.courier_stats:
            print()
            print(format_courier_detail(summary))

    if not result.stats.has_matches:
        print("\n未找到符合条件的邮件，可能是列名不匹配导致的。")
        headers = ", ".join(result.stats.detected_headers) or "(无)"
        print(f"检测到的列名: {headers}")
        if result.stats.missing_required_columns:
            print(f"缺少的必需列: {', '.join(result.stats.missing_required_columns)}")

    if result.output_path:
        print(f"\n✓ 汇总表已导出: {result.output_path}")
    if result.report_path:
        print(f"✓ 报告已生成: {result.report_path}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    print_banner()

    settings = get_settings()
    logger = logging.getLogger(__name__)

    pipeline = ProcessingPipeline(settings)

    logger.info("Starting Cainiao mail pipeline")
    result = pipeline.run(args.files or None, output_path=args.output)

    if not result.success:
        logger.error(f"Pipeline failed: {result.message}")
        print_summary(result)
        return 1

    if args.report:
        result.report_path = ReportGenerator(settings).generate(result)
        if result.report_path is None:
            logger.warning("Report generation failed")

    print_summary(result, detail=args.detail)
    return 0


if __name__ == "__main__":
    sys.exit(main())
