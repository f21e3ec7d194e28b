"""
Cainiao Mail Summary.

Filters Cainiao tracking numbers out of postal delivery reports, classifies
each mail item's delivery outcome and summarises the counts per courier.
"""

__version__ = "1.0.0"

from .config import Settings, get_settings
from .core import AcceptedItem, OutcomeCategory, ProcessingResult, RunningStats, SourceTable
from .services import ProcessingPipeline
from .reports import ReportGenerator

__all__ = [
    "Settings",
    "get_settings",
    "AcceptedItem",
    "OutcomeCategory",
    "ProcessingResult",
    "RunningStats",
    "SourceTable",
    "ProcessingPipeline",
    "ReportGenerator",
]
