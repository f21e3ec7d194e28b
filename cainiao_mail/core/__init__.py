"""Core module containing domain models and utilities."""

from .models import (
    AcceptedItem,
    CourierSummary,
    DeliveryStats,
    OutcomeCategory,
    ProcessingResult,
    ResolvedColumnMap,
    RunningStats,
    ScopeDecision,
    SourceTable,
)
from .utils import HeaderResolver, TextUtils

__all__ = [
    "AcceptedItem",
    "CourierSummary",
    "DeliveryStats",
    "OutcomeCategory",
    "ProcessingResult",
    "ResolvedColumnMap",
    "RunningStats",
    "ScopeDecision",
    "SourceTable",
    "HeaderResolver",
    "TextUtils",
]
