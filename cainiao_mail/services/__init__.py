"""Services module containing business logic implementations."""

from .data_loader import DataLoaderService
from .row_filter import RowFilterService
from .classifier import OutcomeClassifier
from .aggregator import CourierAggregator
from .pipeline import ProcessingPipeline
from .excel_formatter import ExcelFormatter, get_excel_formatter

__all__ = [
    "DataLoaderService",
    "RowFilterService",
    "OutcomeClassifier",
    "CourierAggregator",
    "ProcessingPipeline",
    "ExcelFormatter",
    "get_excel_formatter",
]
