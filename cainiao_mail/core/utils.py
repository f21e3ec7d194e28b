"""
Core utility functions for data processing.

This module provides header resolution against fuzzy keyword groups and
helpers for normalising spreadsheet cell values to text.
"""

from typing import Any, Dict, Optional, Sequence
import math

import pandas as pd

from .models import ResolvedColumnMap


class HeaderResolver:
    """Utility class for resolving semantic fields to actual table headers."""

    def __init__(self, headers: Sequence[str]):
        """
        Initialize resolver with the headers of one table.

        Args:
            headers: Header names in their original column order
        """
        self._headers = [str(h) for h in headers]

    def find_best(self, keywords: Sequence[str]) -> Optional[str]:
        """
        Find the header that best matches a keyword group.

        An exact match on the trimmed header text wins over a partial one.
        Partial matching returns the first header containing any keyword.

        Args:
            keywords: Candidate names for one field, in order of preference

        Returns:
            The matching header as it appears in the table, or None
        """
        for header in self._headers:
            if header.strip() in keywords:
                return header

        for header in self._headers:
            if any(keyword in header for keyword in keywords):
                return header

        return None

    def resolve(self, keyword_groups: Dict[str, Sequence[str]]) -> Dict[str, Optional[str]]:
        """
        Resolve every keyword group at once.

        Args:
            keyword_groups: Field name -> candidate keywords

        Returns:
            Field name -> resolved header (or None)
        """
        return {
            key: self.find_best(keywords)
            for key, keywords in keyword_groups.items()
        }

    def resolve_map(self, keyword_groups: Dict[str, Sequence[str]]) -> ResolvedColumnMap:
        """Resolve keyword groups into an immutable column map."""
        return ResolvedColumnMap.from_dict(self.resolve(keyword_groups))


class TextUtils:
    """Utility class for cell text normalisation."""

    @staticmethod
    def cell_to_text(value: Any) -> str:
        """
        Convert a spreadsheet cell to text.

        Integral floats are rendered without a decimal part so long
        identifiers never turn into '1.3e+12' or '1300000031.0'.

        Args:
            value: Raw cell value

        Returns:
            Text value, '' for empty or missing cells
        """
        if value is None:
            return ""
        if isinstance(value, float):
            if math.isnan(value):
                return ""
            if value.is_integer():
                return str(int(value))
            return repr(value)
        if value is pd.NaT:
            return ""
        return str(value)

    @staticmethod
    def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
        """
        Normalise all headers and cells of a DataFrame to text.

        Args:
            df: DataFrame as read from the source file

        Returns:
            New DataFrame with string headers and string cells
        """
        result = df.copy()
        result.columns = [str(column) for column in result.columns]
        for column in result.columns:
            result[column] = result[column].map(TextUtils.cell_to_text)
        return result

    @staticmethod
    def contains_any(text: str, keywords: Sequence[str]) -> bool:
        """Check if text contains any of the keywords as a substring."""
        return any(keyword in text for keyword in keywords)
