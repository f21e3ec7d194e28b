"""
Row filtering service.

Decides whether a row belongs to the Cainiao tracking-number range and
whether its origin institution is on the exclusion list.
"""

from typing import Optional
import logging

from ..config import Settings, get_settings
from ..core.models import RunningStats, ScopeDecision
from ..core.utils import TextUtils

logger = logging.getLogger(__name__)


class RowFilterService:
    """Service applying the scope pattern and the institution blocklist."""

    def __init__(self, settings: Optional[Settings] = None):
        self._rules = (settings or get_settings()).filters

    def is_in_scope(self, tracking_number: str) -> bool:
        """
        Check a tracking number against the fixed prefix/suffix pattern.

        Args:
            tracking_number: Raw tracking number text

        Returns:
            True if the trimmed number starts with the prefix and ends
            with one of the allowed suffixes
        """
        number = (tracking_number or "").strip()
        return (
            len(number) >= self._rules.min_length
            and number.startswith(self._rules.tracking_prefix)
            and number.endswith(self._rules.tracking_suffixes)
        )

    def is_excluded(self, origin_institution: str) -> bool:
        """Check if an institution name contains any excluded keyword."""
        institution = (origin_institution or "").strip()
        if not institution:
            return False
        return TextUtils.contains_any(institution, self._rules.excluded_institutions)

    def classify_scope(self, tracking_number: str, origin_institution: str) -> ScopeDecision:
        """
        Decide scope and exclusion for one row.

        Exclusion is only evaluated for in-scope rows.
        """
        if not self.is_in_scope(tracking_number):
            return ScopeDecision(in_scope=False)
        return ScopeDecision(in_scope=True, excluded=self.is_excluded(origin_institution))

    def apply(
        self,
        tracking_number: str,
        origin_institution: str,
        stats: RunningStats
    ) -> ScopeDecision:
        """
        Classify a row and record the result in the running statistics.

        Every in-scope row counts once towards ``cainiao_rows``; excluded
        rows additionally count towards ``excluded_rows``.
        """
        decision = self.classify_scope(tracking_number, origin_institution)

        if decision.in_scope:
            stats.cainiao_rows += 1
            if decision.excluded:
                stats.excluded_rows += 1
                logger.debug(f"Excluded {tracking_number.strip()} from '{origin_institution}'")

        return decision
