"""Plain-text courier summaries, suitable for pasting into chat messages."""

from typing import List

from ..core.models import CourierSummary, RunningStats


def format_courier_summary(stats: RunningStats) -> str:
    """One line per courier: '<name>：<count>件', largest first."""
    return "\n".join(f"{c.name}：{c.count}件" for c in stats.courier_stats)


def format_courier_detail(summary: CourierSummary) -> str:
    """Heading line for one courier followed by its tracking numbers."""
    lines: List[str] = [f"{summary.name} - 需处理邮件 ({summary.count}件):"]
    lines.extend(summary.tracking_numbers)
    return "\n".join(lines)


def format_overview(stats: RunningStats) -> str:
    """Multi-line overview of the run counters and delivery breakdown."""
    lines = [
        f"总处理行数: {stats.total_rows}",
        f"识别为菜鸟邮件: {stats.cainiao_rows}",
        f"已剔除机构: {stats.excluded_rows}",
        f"最终有效数据: {stats.final_count}",
    ]
    lines.extend(f"{label}: {count}" for label, count in stats.delivery_stats.as_dict().items())
    return "\n".join(lines)
