"""
Processing pipeline that orchestrates all services.

This module provides the main processing pipeline that coordinates
data loading, row filtering, outcome classification, courier aggregation
and export.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence
import logging

from ..config import Settings, get_settings
from ..core.models import AcceptedItem, ProcessingResult, RunningStats, SourceTable
from ..core.utils import HeaderResolver
from .data_loader import DataLoaderService
from .row_filter import RowFilterService
from .classifier import OutcomeClassifier
from .aggregator import CourierAggregator
from .excel_formatter import ExcelFormatter, get_excel_formatter

logger = logging.getLogger(__name__)


class ProcessingPipeline:
    """
    Main processing pipeline for Cainiao mail summaries.

    Tables are processed one at a time, rows strictly in source order, so
    courier ordering is reproducible between runs.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the processing pipeline.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._settings = settings or get_settings()

        # Initialize services
        self._loader = DataLoaderService(self._settings)
        self._row_filter = RowFilterService(self._settings)
        self._classifier = OutcomeClassifier(self._settings)
        self._aggregator = CourierAggregator(self._settings)
        self._excel_formatter = get_excel_formatter()

    def process_tables(self, tables: Sequence[SourceTable]) -> ProcessingResult:
        """
        Run filtering, classification and aggregation over parsed tables.

        A table whose tracking column cannot be found contributes no rows
        but does not stop the run.

        Args:
            tables: Parsed tables in arrival order

        Returns:
            ProcessingResult with accepted items and finalized statistics
        """
        result = ProcessingResult()
        stats = result.stats
        self._aggregator.reset()

        for table_index, table in enumerate(tables, 1):
            items = self._process_table(table, table_index, stats)
            for item in items:
                self._aggregator.accumulate(item)
            result.items.extend(items)

        stats.courier_stats = self._aggregator.finalize()
        stats.final_count = len(result.items)

        result.success = True
        result.message = "Processing completed successfully"

        logger.info(
            f"Rows: {stats.total_rows} total, {stats.cainiao_rows} matched, "
            f"{stats.excluded_rows} excluded, {stats.final_count} kept"
        )
        return result

    def _process_table(
        self,
        table: SourceTable,
        table_index: int,
        stats: RunningStats
    ) -> List[AcceptedItem]:
        """Process the rows of one table, updating stats in place."""
        stats.total_rows += len(table.rows)

        # Headers of the first file are kept for diagnostics
        if not stats.detected_headers:
            stats.detected_headers = list(table.headers)

        columns = HeaderResolver(table.headers).resolve_map(
            self._settings.columns.keyword_groups()
        )
        logger.debug(f"Resolved columns for {table.name}: {columns}")

        for label in columns.missing_required(self._settings.columns.required_labels):
            stats.add_missing(label)

        if not columns.is_processable:
            logger.warning(f"Tracking number column not found in {table.name}, skipping table")
            return []

        accepted: List[AcceptedItem] = []

        for row_index, row in enumerate(table.rows, 1):
            tracking_number = columns.value(row, "tracking")
            origin_institution = columns.value(row, "institution")

            decision = self._row_filter.apply(tracking_number, origin_institution, stats)
            if not decision.accepted:
                continue

            item = AcceptedItem(
                id=f"{table_index}-{row_index}",
                tracking_number=tracking_number,
                recipient_address=columns.value(row, "address"),
                reception_time=columns.value(row, "time"),
                courier=columns.value(row, "courier"),
                sign_method=columns.value(row, "sign_method"),
                feedback=columns.value(row, "feedback"),
                origin_institution=origin_institution,
            )
            self._classifier.apply(item.sign_method, item.feedback, stats)
            accepted.append(item)

        logger.info(f"{table.name}: {len(accepted)} of {len(table.rows)} rows accepted")
        return accepted

    def run(
        self,
        input_paths: Optional[Iterable[Path]] = None,
        output_path: Optional[Path] = None,
        export: bool = True
    ) -> ProcessingResult:
        """
        Execute the full processing pipeline.

        Args:
            input_paths: Files to process. Uses every spreadsheet in the data
                directory if not provided.
            output_path: Optional path of the export workbook.
            export: Whether to write the export workbook.

        Returns:
            ProcessingResult containing all outputs and statistics
        """
        result = ProcessingResult()

        try:
            # Step 1: Load data
            logger.info("=" * 60)
            logger.info("STEP 1: Loading data")
            logger.info("=" * 60)

            paths = [Path(p) for p in input_paths] if input_paths is not None else self._loader.discover()
            if not paths:
                raise FileNotFoundError("No input spreadsheets provided")

            tables = self._loader.load_all(paths)

            # Step 2: Filter, classify and aggregate
            logger.info("=" * 60)
            logger.info("STEP 2: Filtering and classifying rows")
            logger.info("=" * 60)

            result = self.process_tables(tables)
            result.input_files = paths

            if not result.stats.has_matches:
                logger.warning(
                    f"No matching mail found. Detected headers: {result.stats.detected_headers}; "
                    f"missing columns: {result.stats.missing_required_columns}"
                )

            # Step 3: Export
            if export and result.has_data:
                logger.info("=" * 60)
                logger.info("STEP 3: Exporting summary workbook")
                logger.info("=" * 60)

                target = output_path or self._settings.export_path()
                if self._save_workbook(result, target):
                    result.output_path = target

        except FileNotFoundError as e:
            result.success = False
            result.message = f"File not found: {e}"
            result.processing_errors.append(str(e))
            logger.error(result.message)

        except ValueError as e:
            result.success = False
            result.message = f"Processing failed: {e}"
            result.processing_errors.append(str(e))
            logger.exception("Pipeline execution failed")

        return result

    def _save_workbook(self, result: ProcessingResult, path: Path) -> bool:
        """Save accepted items and statistics to a formatted workbook."""
        labels = self._settings.export
        sheets = {
            labels.items_sheet: self._aggregator.items_dataframe(result.items),
            labels.courier_sheet: self._aggregator.to_dataframe(result.stats.courier_stats),
            labels.delivery_sheet: self._aggregator.delivery_dataframe(result.stats.delivery_stats),
        }

        success = self._excel_formatter.export_workbook(
            sheets,
            path,
            summary_identifier=labels.total_label,
            text_columns=["邮件号"],
        )
        if success:
            logger.info(f"Summary workbook saved to: {path}")
        else:
            result.processing_errors.append(f"Failed to save workbook: {path}")
        return success

    @property
    def loader(self) -> DataLoaderService:
        """Get the data loader service."""
        return self._loader

    @property
    def row_filter(self) -> RowFilterService:
        """Get the row filter service."""
        return self._row_filter

    @property
    def classifier(self) -> OutcomeClassifier:
        """Get the outcome classifier."""
        return self._classifier

    @property
    def aggregator(self) -> CourierAggregator:
        """Get the courier aggregator."""
        return self._aggregator

    @property
    def excel_formatter(self) -> ExcelFormatter:
        """Get the Excel formatter."""
        return self._excel_formatter
