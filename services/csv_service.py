"""
CSV Service.

Handles reading and writing CSV files for:
- Article import (artikelen)
- Article and safety sheet export

Uses pandas for CSV processing. Files are UTF-8; a byte order mark is
accepted on read and written on export so spreadsheet programs detect
the encoding.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from config.constants import (
    ARTICLE_OPTIONAL_COLUMNS,
    ARTICLE_REQUIRED_COLUMNS,
    CSV_EXTENSIONS,
    ERROR_MESSAGES,
)
from domain.exceptions import ImportValidationError
from domain.models import ArticleImportRow
from domain.validators import validate_file_path

logger = logging.getLogger(__name__)

BOM = "\ufeff"

# Column name variants for flexible matching (lowercase)
COLUMN_VARIANTS = {
    "naam": ["naam", "name"],
    "unieke_id": ["unieke_id", "unieke id", "uniek_id"],
    "referentie_rubix": ["referentie_rubix", "referentie rubix"],
    "referentie_fabrikant": ["referentie_fabrikant", "referentie fabrikant"],
    "ean": ["ean", "ean_code", "ean-code"],
}


class CsvReader:
    """
    CSV reader for article import files.

    Reads comma-separated text with a header row. Tolerates:
    - Any column order and letter case in the header
    - Extra, unknown columns (ignored)
    - Ragged rows (missing cells become empty, surplus cells are dropped)
    - Quoted values and surrounding whitespace
    """

    def __init__(self, content: Union[bytes, str], source: str = "<csv>"):
        """
        Initialize CSV reader.

        Args:
            content: Raw CSV content
            source: Name used in log messages and error details
        """
        if isinstance(content, bytes):
            content = content.decode("utf-8-sig", errors="replace")
        self.text = content.lstrip(BOM)
        self.source = source

    @classmethod
    def from_file(cls, file_path: Union[Path, str]) -> "CsvReader":
        """
        Create reader for a .csv file on disk.

        Raises:
            ValidationError: If file is missing or not a .csv
        """
        path = validate_file_path(
            file_path,
            must_exist=True,
            allowed_extensions=CSV_EXTENSIONS,
            error_message=ERROR_MESSAGES["invalid_csv"],
        )
        logger.info(f"Initialized CSV reader for: {path}")
        return cls(path.read_bytes(), source=path.name)

    def _find_column(self, columns: List[str], search_terms: List[str]) -> Optional[str]:
        """
        Find column name using case-insensitive matching.

        Args:
            columns: Available column names in DataFrame
            search_terms: Possible column name variations

        Returns:
            Matched column name, or None if not found
        """
        for term in search_terms:
            for col in columns:
                if term == str(col).strip().strip('"').lower():
                    return col
        return None

    def read_dataframe(self) -> pd.DataFrame:
        """
        Read CSV text into a DataFrame of strings.

        Returns:
            DataFrame (all values str, missing cells "")

        Raises:
            ImportValidationError: If there is no header plus at least one data row
        """
        if not self.text.strip():
            raise ImportValidationError(ERROR_MESSAGES["csv_empty"], details={"file": self.source})

        try:
            header = next((r for r in csv.reader(io.StringIO(self.text)) if r), [])
            column_count = len(header)
            df = pd.read_csv(
                io.StringIO(self.text),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                skipinitialspace=True,
                engine="python",
                on_bad_lines=lambda bad_line: bad_line[:column_count],
            )
        except ImportValidationError:
            raise
        except Exception as e:
            raise ImportValidationError(
                f"Kon CSV bestand niet lezen: {e}",
                details={"file": self.source, "error": str(e)},
            )

        if df.empty:
            raise ImportValidationError(ERROR_MESSAGES["csv_empty"], details={"file": self.source})

        df = self._clean_dataframe(df)
        logger.debug(f"Read {len(df)} rows from {self.source}")
        return df

    def _clean_dataframe(self, df: pd.DataFrame) -> pd.DataFrame:
        """Strip whitespace and fill missing cells with ''."""
        df = df.fillna("")
        for col in df.columns:
            df[col] = df[col].map(self._safe_str)
        return df

    def _safe_str(self, value, default: str = "") -> str:
        """
        Convert value to string safely, handling None/NaN.

        Examples:
            >>> _safe_str(None) → ""
            >>> _safe_str(' Helm "Pro" ') → 'Helm "Pro"'
        """
        if value is None:
            return default
        if pd.isna(value):
            return default
        return str(value).strip()

    def read_articles(self) -> List[ArticleImportRow]:
        """
        Read article rows.

        Required columns: naam, unieke_id. Optional: referentie_rubix,
        referentie_fabrikant, ean. Rows without naam or unieke_id are skipped.
        Row numbers match the file (header is row 1, blank lines ignored).

        Returns:
            List of ArticleImportRow

        Raises:
            ImportValidationError: If required columns are missing
        """
        df = self.read_dataframe()
        columns = list(df.columns)

        found = {
            name: self._find_column(columns, COLUMN_VARIANTS[name])
            for name in ARTICLE_REQUIRED_COLUMNS + ARTICLE_OPTIONAL_COLUMNS
        }

        missing = [name for name in ARTICLE_REQUIRED_COLUMNS if found[name] is None]
        if missing:
            raise ImportValidationError(
                ERROR_MESSAGES["csv_missing_columns"].format(columns=", ".join(missing)),
                details={"missing": missing, "available": [str(c) for c in columns]},
            )

        logger.debug(f"Column mapping: {found}")

        rows = []
        skipped = 0
        for position, (_, record) in enumerate(df.iterrows()):
            values = {
                name: (record[col] if col is not None else "")
                for name, col in found.items()
            }

            if not values["naam"] or not values["unieke_id"]:
                skipped += 1
                continue

            rows.append(
                ArticleImportRow(
                    row_number=position + 2,
                    naam=values["naam"],
                    unieke_id=values["unieke_id"],
                    referentie_rubix=values["referentie_rubix"] or None,
                    referentie_fabrikant=values["referentie_fabrikant"] or None,
                    ean=values["ean"] or None,
                )
            )

        if skipped:
            logger.warning(f"Skipped {skipped} rows without naam or unieke_id in {self.source}")

        logger.info(f"Read {len(rows)} articles from {self.source}")
        return rows


def write_csv(rows: List[Dict[str, Any]], columns: List[str]) -> bytes:
    """
    Render rows as UTF-8 CSV with byte order mark.

    Values containing a comma, quote or line break are quoted with embedded
    quotes doubled; None becomes an empty cell.

    Args:
        rows: Row dicts
        columns: Column order (also the header)

    Returns:
        Encoded CSV content
    """
    df = pd.DataFrame(rows, columns=columns)
    text = df.to_csv(
        index=False,
        na_rep="",
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    return (BOM + text).encode("utf-8")
