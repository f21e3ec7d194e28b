"""
Domain models and data transfer objects.

This module defines the core data structures used throughout the application:
parsed source tables, resolved column maps, accepted mail items and the
running statistics threaded through a processing run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Dict
from enum import Enum


class OutcomeCategory(Enum):
    """Delivery-outcome classification for an accepted mail item."""

    ADDRESS = "按址投递"
    STATION = "驿站投递"
    REDELIVERY = "再投邮件"
    RETURNED = "退回邮件"
    EXCEPTION = "异常邮件"

    @property
    def label(self) -> str:
        """Display label used in exports and reports."""
        return self.value


@dataclass
class SourceTable:
    """
    A single parsed spreadsheet.

    Rows map header names to text values; absent cells are empty strings.
    """

    name: str
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ResolvedColumnMap:
    """Actual header name resolved for each semantic field, or None."""

    tracking: Optional[str] = None
    institution: Optional[str] = None
    address: Optional[str] = None
    time: Optional[str] = None
    courier: Optional[str] = None
    sign_method: Optional[str] = None
    feedback: Optional[str] = None

    @classmethod
    def from_dict(cls, mapping: Dict[str, Optional[str]]) -> "ResolvedColumnMap":
        """Build a map from a field -> header dictionary, ignoring unknown keys."""
        known = set(cls.__dataclass_fields__)
        return cls(**{key: value for key, value in mapping.items() if key in known})

    @property
    def is_processable(self) -> bool:
        """A table can only be processed when its tracking column is known."""
        return self.tracking is not None

    def missing_required(self, labels: Dict[str, str]) -> List[str]:
        """
        List diagnostic labels of required fields that were not resolved.

        Args:
            labels: Mapping of required field name to its display label

        Returns:
            Labels in the order given by ``labels``
        """
        return [label for key, label in labels.items() if getattr(self, key) is None]

    def value(self, row: Dict[str, str], key: str) -> str:
        """Read a field from a row as trimmed text; unresolved fields read as ''."""
        header = getattr(self, key)
        if header is None:
            return ""
        raw = row.get(header)
        if raw is None:
            return ""
        return str(raw).strip()


@dataclass(frozen=True)
class ScopeDecision:
    """Outcome of the tracking-number scope and institution exclusion checks."""

    in_scope: bool
    excluded: bool = False

    @property
    def accepted(self) -> bool:
        """True when the row is in scope and not excluded."""
        return self.in_scope and not self.excluded


@dataclass(frozen=True)
class AcceptedItem:
    """
    Canonical output record for a mail item that passed filtering.

    Created once per accepted row and never modified afterwards.
    """

    id: str
    tracking_number: str
    recipient_address: str = ""
    reception_time: str = ""
    courier: str = ""
    sign_method: str = ""
    feedback: str = ""
    origin_institution: str = ""

    def to_export_row(self) -> Dict[str, str]:
        """Convert item to the labelled row written to the export workbook."""
        return {
            "邮件号": self.tracking_number,
            "收件人地址": self.recipient_address,
            "邮件接收时间": self.reception_time,
            "投递员": self.courier,
            "签收方式": self.sign_method,
            "反馈情况": self.feedback,
            "原收寄机构": self.origin_institution,
        }


@dataclass
class DeliveryStats:
    """Per-outcome counters."""

    address: int = 0
    station: int = 0
    redelivery: int = 0
    returned: int = 0
    exception: int = 0

    def increment(self, category: OutcomeCategory) -> None:
        """Increase the counter matching the given category by one."""
        attr = category.name.lower()
        setattr(self, attr, getattr(self, attr) + 1)

    def get(self, category: OutcomeCategory) -> int:
        return getattr(self, category.name.lower())

    @property
    def total(self) -> int:
        return self.address + self.station + self.redelivery + self.returned + self.exception

    def as_dict(self) -> Dict[str, int]:
        """Counters keyed by display label, in category declaration order."""
        return {category.label: self.get(category) for category in OutcomeCategory}


@dataclass
class CourierSummary:
    """Accepted items grouped under one courier name."""

    name: str
    count: int
    tracking_numbers: List[str] = field(default_factory=list)


@dataclass
class RunningStats:
    """
    Mutable accumulator threaded through a processing run.

    Filled in place by the row filter, the classifier and the pipeline;
    finalized once every table has been processed.
    """

    total_rows: int = 0
    cainiao_rows: int = 0
    excluded_rows: int = 0
    final_count: int = 0
    delivery_stats: DeliveryStats = field(default_factory=DeliveryStats)
    courier_stats: List[CourierSummary] = field(default_factory=list)

    # Debug info
    detected_headers: List[str] = field(default_factory=list)
    missing_required_columns: List[str] = field(default_factory=list)

    def add_missing(self, label: str) -> None:
        """Record a missing required column once."""
        if label not in self.missing_required_columns:
            self.missing_required_columns.append(label)

    @property
    def has_matches(self) -> bool:
        """Check if any row matched the tracking-number pattern."""
        return self.cainiao_rows > 0

    @property
    def total_couriers(self) -> int:
        return len(self.courier_stats)


@dataclass
class ProcessingResult:
    """
    Result container for the processing pipeline.

    Encapsulates accepted items, statistics, output locations and status
    information for one run.
    """

    items: List[AcceptedItem] = field(default_factory=list)
    stats: RunningStats = field(default_factory=RunningStats)

    input_files: List[Path] = field(default_factory=list)
    output_path: Optional[Path] = None
    report_path: Optional[Path] = None
    processing_errors: List[str] = field(default_factory=list)

    # Status
    success: bool = False
    message: str = ""

    @property
    def has_data(self) -> bool:
        """Check if any item was accepted."""
        return len(self.items) > 0
