"""
Application settings and configuration management.

This module provides centralized configuration using the Settings pattern.
Keyword lists and the tracking-number pattern are fixed business policy and
are not meant to be overridden at runtime.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class PathSettings:
    """File and directory path configurations."""

    base_dir: Path = field(default_factory=lambda: Path(__file__).parent.parent.parent)
    data_dir: Path = field(default_factory=lambda: Path(__file__).parent.parent.parent / "data")
    output_dir: Path = field(default_factory=lambda: Path(__file__).parent.parent.parent / "result")


@dataclass(frozen=True)
class FileSettings:
    """Input/output file configurations."""

    input_extensions: Tuple[str, ...] = (".xlsx", ".xlsm", ".xls", ".csv")
    csv_encodings: Tuple[str, ...] = ("utf-8-sig", "gb18030", "utf-16")
    export_prefix: str = "菜鸟邮件汇总"
    report_file: str = "菜鸟邮件统计报告.docx"


@dataclass(frozen=True)
class ColumnMappings:
    """Header keyword groups used to locate columns by fuzzy matching."""

    tracking: List[str] = field(default_factory=lambda: [
        "邮件号", "单号", "运单", "凭证号", "号码"
    ])
    address: List[str] = field(default_factory=lambda: [
        "收件人地址", "收件地址", "地址", "收件人"
    ])
    time: List[str] = field(default_factory=lambda: [
        "邮件接收时间", "收寄时间", "接收时间", "日期", "时间"
    ])
    courier: List[str] = field(default_factory=lambda: ["投递员", "揽投员", "人员", "员工"])
    sign_method: List[str] = field(default_factory=lambda: ["签收方式", "签收", "投递方式"])
    feedback: List[str] = field(default_factory=lambda: [
        "反馈情况", "妥投情况", "投递情况", "反馈", "备注"
    ])
    institution: List[str] = field(default_factory=lambda: ["收寄机构", "收寄局", "机构", "揽投部"])

    # Diagnostic labels reported when a required field cannot be resolved
    required_labels: Dict[str, str] = field(default_factory=lambda: {
        "tracking": "邮件号",
        "institution": "收寄机构",
    })

    def keyword_groups(self) -> Dict[str, List[str]]:
        """Return the keyword groups keyed by semantic field name."""
        return {
            "tracking": self.tracking,
            "institution": self.institution,
            "address": self.address,
            "time": self.time,
            "courier": self.courier,
            "sign_method": self.sign_method,
            "feedback": self.feedback,
        }


@dataclass(frozen=True)
class FilterRules:
    """Tracking-number scope pattern and institution blocklist."""

    tracking_prefix: str = "13"
    tracking_suffixes: Tuple[str, ...] = ("16", "31", "32", "34")
    min_length: int = 2
    # '蒙欣' alone already covers '康巴什蒙欣' and '蒙欣揽投部'
    excluded_institutions: Tuple[str, ...] = ("蒙欣", "康巴什蒙欣", "正意", "盈馨")


@dataclass(frozen=True)
class ClassificationKeywords:
    """Keyword sets for the delivery-outcome rule cascade."""

    returned: Tuple[str, ...] = ("退回", "退收")
    exception: Tuple[str, ...] = ("异常",)
    redelivery: Tuple[str, ...] = ("留存", "未妥投", "再投", "未反馈")
    station: Tuple[str, ...] = ("物业", "自提", "收发室", "包裹柜", "柜", "驿站", "丰巢")
    address: Tuple[str, ...] = ("本人", "他人", "家门口", "门口", "按址")
    delivered: Tuple[str, ...] = ("妥投",)


@dataclass(frozen=True)
class ExportSettings:
    """Sheet names and labels for the exported workbook."""

    items_sheet: str = "汇总数据"
    courier_sheet: str = "投递员统计"
    delivery_sheet: str = "投递统计"
    unspecified_courier: str = "未指定"
    total_label: str = "合计"


@dataclass
class Settings:
    """Main application settings container."""

    paths: PathSettings = field(default_factory=PathSettings)
    files: FileSettings = field(default_factory=FileSettings)
    columns: ColumnMappings = field(default_factory=ColumnMappings)
    filters: FilterRules = field(default_factory=FilterRules)
    keywords: ClassificationKeywords = field(default_factory=ClassificationKeywords)
    export: ExportSettings = field(default_factory=ExportSettings)

    def export_path(self, day: Optional[date] = None) -> Path:
        """Full path to the dated export workbook."""
        day = day or date.today()
        return self.paths.output_dir / f"{self.files.export_prefix}_{day.isoformat()}.xlsx"

    @property
    def report_path(self) -> Path:
        """Full path to report file."""
        return self.paths.output_dir / self.files.report_file


# Singleton pattern for settings
_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the settings singleton instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
