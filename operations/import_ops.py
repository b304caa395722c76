"""
Import Operations for Veiligheidsbladen Beheer.

Bulk article import from CSV.

- parse_articles_csv() - Read and validate a CSV file (pure)
- preview_rows() - First rows for display
- import_articles() - Insert rows, skipping existing unique IDs
- get_import_summary() - Counts for display
- build_template_csv() - Downloadable example file
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from config.constants import (
    CSV_EXTENSIONS,
    CSV_PREVIEW_ROWS,
    ERROR_MESSAGES,
    MAX_CSV_SIZE_MB,
)
from data.interface import DatabaseInterface
from domain.exceptions import DatabaseError, ImportValidationError, ValidationError
from domain.models import ArticleImportRow, DuplicateRow, ImportResult, ImportRowError
from services.csv_service import BOM, CsvReader
from services.file_service import FileService
from .article_ops import get_existing_unique_ids

logger = logging.getLogger(__name__)

TEMPLATE_CSV = """naam,unieke_id,referentie_rubix,referentie_fabrikant,ean
"Veiligheidshelm Standaard","VH-001","RUB-VH-001","FAB-VH-STD","1234567890123"
"Werkhandschoenen Latex","WH-002","RUB-WH-002","FAB-WH-LAT","2345678901234"
"Veiligheidsbril Helder","VB-003","RUB-VB-003","FAB-VB-HLD","3456789012345"
"""


def validate_import_file(file_path: Union[Path, str]) -> Path:
    """
    Validate CSV file before reading.

    Rules:
    - Extension .csv
    - Size at most 5 MB

    Raises:
        ImportValidationError: If invalid
    """
    path = Path(file_path)
    try:
        FileService(path.parent).validate_file(
            path,
            allowed_extensions=CSV_EXTENSIONS,
            max_size_mb=MAX_CSV_SIZE_MB,
            extension_message=ERROR_MESSAGES["invalid_csv"],
            size_message=ERROR_MESSAGES["csv_too_large"].format(max_mb=MAX_CSV_SIZE_MB),
        )
    except ValidationError as e:
        raise ImportValidationError(e.message, details=e.details)
    return path


def parse_articles_csv(source: Union[Path, str, bytes]) -> List[ArticleImportRow]:
    """
    Parse articles from CSV.

    This is a PURE FUNCTION - no database access, no side effects.

    Args:
        source: Path to .csv file, or raw CSV content (bytes)

    Returns:
        List of ArticleImportRow (rows without naam/unieke_id skipped)

    Raises:
        ImportValidationError: If file is invalid, has no data rows,
                               misses required columns or has no usable rows

    Example:
        >>> rows = parse_articles_csv(Path("artikelen.csv"))
        >>> result = import_articles(db, rows)
    """
    if isinstance(source, bytes):
        reader = CsvReader(source)
    else:
        path = validate_import_file(source)
        logger.info(f"Importing articles from: {path}")
        reader = CsvReader(path.read_bytes(), source=path.name)

    rows = reader.read_articles()

    if not rows:
        raise ImportValidationError(
            "Geen geldige artikelen gevonden (naam en unieke_id zijn verplicht)",
            details={"file": reader.source},
        )

    return rows


def preview_rows(rows: List[ArticleImportRow], limit: int = CSV_PREVIEW_ROWS) -> List[ArticleImportRow]:
    """First rows for the preview table."""
    return rows[:limit]


def import_articles(db: DatabaseInterface, rows: List[ArticleImportRow]) -> ImportResult:
    """
    Insert parsed articles.

    Rows whose unieke_id already exists are reported as duplicates and not
    inserted. Remaining rows are inserted one by one; a failing row is
    recorded with the backend's message and does not stop the import.

    Args:
        db: Database instance (injected)
        rows: Parsed rows

    Returns:
        ImportResult with success count, errors and duplicates

    Raises:
        DatabaseError: If the duplicate lookup fails (nothing inserted)
    """
    result = ImportResult()
    if not rows:
        return result

    existing = get_existing_unique_ids(db, [row.unieke_id for row in rows])

    for row in rows:
        if row.unieke_id in existing:
            result.duplicates.append(DuplicateRow(row=row.row_number, unieke_id=row.unieke_id))
            continue

        payload = row.to_insert_row()
        try:
            db.insert_article(payload)
        except DatabaseError as e:
            logger.warning(f"Row {row.row_number} ({row.unieke_id}) failed: {e.message}")
            result.errors.append(ImportRowError(row=row.row_number, message=e.message, data=payload))
            continue
        except Exception as e:
            logger.exception(f"Unexpected error importing row {row.row_number}")
            result.errors.append(ImportRowError(row=row.row_number, message=str(e), data=payload))
            continue

        # Same ID twice in one file: second occurrence is a duplicate
        existing.add(row.unieke_id)
        result.success += 1

    logger.info(
        f"Import done: {result.success} inserted, "
        f"{len(result.duplicates)} duplicates, {len(result.errors)} errors"
    )
    return result


def get_import_summary(result: ImportResult) -> Dict[str, Any]:
    """
    Get summary statistics for an import.

    Example:
        >>> summary = get_import_summary(result)
        >>> print(f"{summary['success']} artikelen geïmporteerd")
    """
    return {
        "success": result.success,
        "error_count": len(result.errors),
        "duplicate_count": len(result.duplicates),
        "total": result.total,
        "errors": [str(e) for e in result.errors],
        "duplicates": [str(d) for d in result.duplicates],
    }


def build_template_csv() -> bytes:
    """Template CSV with three example articles (UTF-8 with BOM)."""
    return (BOM + TEMPLATE_CSV).encode("utf-8")
