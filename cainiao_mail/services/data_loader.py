"""
Data loading service for spreadsheet ingestion.

This module reads delivery reports (Excel or CSV) into generic text tables,
only ever looking at the first worksheet, and normalises every cell to text
so tracking numbers survive intact.
"""

import csv
from pathlib import Path
from typing import Iterable, List, Optional
import pandas as pd
import logging

from ..config import Settings, get_settings
from ..core.models import SourceTable
from ..core.utils import TextUtils

logger = logging.getLogger(__name__)


class DataLoaderService:
    """
    Service for loading delivery reports from spreadsheet files.

    Handles file reading, encoding detection for CSV exports and cell
    normalisation so downstream processing only ever sees text.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the data loader service.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._settings = settings or get_settings()

    def load(self, file_path: Path) -> SourceTable:
        """
        Load one spreadsheet into a text table.

        Args:
            file_path: Path to an .xlsx/.xlsm/.xls or .csv file

        Returns:
            SourceTable with ordered headers and rows

        Raises:
            FileNotFoundError: If the specified file doesn't exist
            ValueError: If the file type is unsupported or cannot be parsed
        """
        path = Path(file_path)

        logger.info(f"Loading data from: {path}")

        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in self._settings.files.input_extensions:
            raise ValueError(f"Unsupported file type: {path.name}")

        try:
            if suffix == ".csv":
                df = self._read_csv(path)
            else:
                engine = "xlrd" if suffix == ".xls" else "openpyxl"
                df = pd.read_excel(path, sheet_name=0, dtype=object, engine=engine)
        except Exception as e:
            logger.error(f"Failed to load file: {e}")
            raise ValueError(f"Failed to parse file {path.name}: {e}")

        df = TextUtils.normalize_frame(df)

        logger.info(f"Loaded {len(df)} records with {len(df.columns)} columns from {path.name}")

        return SourceTable(
            name=path.name,
            headers=list(df.columns),
            rows=df.to_dict(orient="records"),
        )

    def load_all(self, paths: Iterable[Path]) -> List[SourceTable]:
        """Load several files in the given order; the first failure is raised."""
        return [self.load(path) for path in paths]

    def discover(self, directory: Optional[Path] = None) -> List[Path]:
        """
        List supported spreadsheets in a directory, sorted by name.

        Args:
            directory: Directory to scan. Uses the data directory if not provided.

        Returns:
            Paths of supported input files
        """
        directory = directory or self._settings.paths.data_dir
        if not directory.is_dir():
            logger.warning(f"Input directory not found: {directory}")
            return []

        extensions = self._settings.files.input_extensions
        # Skip lock files Excel leaves next to open workbooks
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in extensions and not p.name.startswith("~$")
        )

    def _read_csv(self, path: Path) -> pd.DataFrame:
        """Read a CSV trying the configured encodings in turn."""
        last_error = None

        for encoding in self._settings.files.csv_encodings:
            try:
                df = self._read_csv_with(path, encoding)
                logger.info(f"Successfully loaded with encoding: {encoding}")
                return df
            except (UnicodeError, pd.errors.ParserError) as e:
                last_error = e
                continue

        raise last_error or ValueError("Failed to load CSV with any encoding")

    def _read_csv_with(self, path: Path, encoding: str) -> pd.DataFrame:
        """Read a CSV with a sniffed separator, falling back to comma."""
        options = dict(dtype=str, keep_default_na=False, encoding=encoding, engine="python")
        try:
            return pd.read_csv(path, sep=None, **options)
        except csv.Error:
            # Single-column reports give the sniffer nothing to detect
            logger.debug(f"Could not detect separator in {path.name}, using comma")
            return pd.read_csv(path, sep=",", **options)
