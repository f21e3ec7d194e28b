"""
Aggregation service for per-courier statistics.

This module groups accepted mail items by courier and produces a summary
ordered by item count, plus DataFrame views used by the exporter.
"""

from typing import Dict, List, Optional
import pandas as pd
import logging

from ..config import Settings, get_settings
from ..core.models import AcceptedItem, CourierSummary, DeliveryStats

logger = logging.getLogger(__name__)

# Maximum characters openpyxl accepts in one cell
EXCEL_CELL_LIMIT = 32767


class CourierAggregator:
    """
    Service for grouping accepted items by courier.

    Tracking numbers are kept in accumulation order. The finalized summary
    is sorted by count descending; ties keep the order in which couriers
    were first seen.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the aggregator.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._settings = settings or get_settings()
        self._buckets: Dict[str, List[str]] = {}

    def reset(self) -> None:
        """Drop all accumulated items."""
        self._buckets = {}

    def key_for(self, courier: str) -> str:
        """Grouping key for a courier name; blank names share a sentinel bucket."""
        name = (courier or "").strip()
        return name or self._settings.export.unspecified_courier

    def accumulate(self, item: AcceptedItem) -> None:
        """Add one accepted item to its courier bucket."""
        self._buckets.setdefault(self.key_for(item.courier), []).append(item.tracking_number)

    def finalize(self) -> List[CourierSummary]:
        """
        Materialize the buckets into a summary sorted by count.

        Returns:
            CourierSummary list, largest bucket first
        """
        summaries = [
            CourierSummary(name=name, count=len(numbers), tracking_numbers=list(numbers))
            for name, numbers in self._buckets.items()
        ]
        # sorted() is stable, so ties keep first-insertion order
        summaries = sorted(summaries, key=lambda s: s.count, reverse=True)

        self._log_statistics(summaries)
        return summaries

    def _log_statistics(self, summaries: List[CourierSummary]) -> None:
        """Log aggregation statistics."""
        if not summaries:
            logger.info("No accepted items to aggregate")
            return

        total = sum(s.count for s in summaries)
        logger.info(f"Statistics for couriers:")
        logger.info(f"- Total couriers: {len(summaries)}")
        logger.info(f"- Total items: {total}")
        logger.info(f"- Largest bucket: {summaries[0].name} ({summaries[0].count})")

    def to_dataframe(self, summaries: List[CourierSummary]) -> pd.DataFrame:
        """
        Build the courier sheet, with a total row appended.

        Tracking numbers that would overflow one Excel cell continue on
        extra rows whose courier and count cells are left blank.

        Args:
            summaries: Finalized courier summaries

        Returns:
            DataFrame with columns 投递员, 件数, 邮件号
        """
        labels = self._settings.export
        rows = []
        for s in summaries:
            chunks = self._split_cell_text(s.tracking_numbers)
            if len(chunks) > 1:
                logger.warning(
                    f"Tracking numbers of {s.name} exceed one cell, split over {len(chunks)} rows"
                )
            rows.append({"投递员": s.name, "件数": s.count, "邮件号": chunks[0]})
            rows.extend({"投递员": "", "件数": "", "邮件号": chunk} for chunk in chunks[1:])

        df = pd.DataFrame(rows, columns=["投递员", "件数", "邮件号"])
        if not df.empty:
            total = sum(s.count for s in summaries)
            total_row = {"投递员": labels.total_label, "件数": total, "邮件号": ""}
            df = pd.concat([df, pd.DataFrame([total_row])], ignore_index=True)
        return df

    @staticmethod
    def _split_cell_text(numbers: List[str], limit: int = EXCEL_CELL_LIMIT) -> List[str]:
        """Join numbers one per line, starting a new chunk before `limit` is exceeded."""
        chunks: List[str] = []
        current: List[str] = []
        size = 0
        for number in numbers:
            extra = len(number) + (1 if current else 0)
            if current and size + extra > limit:
                chunks.append("\n".join(current))
                current, size = [], 0
                extra = len(number)
            current.append(number)
            size += extra
        chunks.append("\n".join(current))
        return chunks

    def delivery_dataframe(self, delivery: DeliveryStats) -> pd.DataFrame:
        """Build the outcome sheet: one row per category plus a total row."""
        rows = [{"类别": label, "件数": count} for label, count in delivery.as_dict().items()]
        rows.append({"类别": self._settings.export.total_label, "件数": delivery.total})
        return pd.DataFrame(rows, columns=["类别", "件数"])

    @staticmethod
    def items_dataframe(items: List[AcceptedItem]) -> pd.DataFrame:
        """Build the accepted-items sheet in export column order."""
        columns = list(AcceptedItem(id="", tracking_number="").to_export_row())
        return pd.DataFrame([item.to_export_row() for item in items], columns=columns)
