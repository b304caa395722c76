"""
Export Operations for Veiligheidsbladen Beheer.

CSV export of articles and safety sheet metadata.

- export_articles() - artikelen table as CSV
- export_safety_sheets() - veiligheidsbladen joined with article data
- export_all() - both files
- export_filename() - dated filename per export kind
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from config.constants import (
    ARTICLE_EXPORT_COLUMNS,
    ERROR_MESSAGES,
    EXPORT_KINDS,
    SAFETY_SHEET_EXPORT_COLUMNS,
)
from data.interface import DatabaseInterface
from domain.exceptions import DatabaseError, NotFoundError, ValidationError
from domain.models import format_timestamp, parse_timestamp
from services.csv_service import write_csv

logger = logging.getLogger(__name__)


def export_filename(kind: str, day: Optional[date] = None) -> str:
    """
    Filename for an export.

    Example:
        >>> export_filename("artikelen", date(2025, 3, 1))
        'artikelen_export_2025-03-01.csv'
    """
    day = day or date.today()
    return f"{kind}_export_{day.isoformat()}.csv"


def _timestamp_text(value: Any) -> str:
    return format_timestamp(parse_timestamp(value))


def article_rows_for_export(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Project article rows onto export columns."""
    return [
        {
            "unieke_id": row.get("unieke_id"),
            "naam": row.get("naam"),
            "referentie_rubix": row.get("referentie_rubix"),
            "referentie_fabrikant": row.get("referentie_fabrikant"),
            "ean": row.get("ean"),
            "created_at": _timestamp_text(row.get("created_at")),
            "updated_at": _timestamp_text(row.get("updated_at")),
        }
        for row in rows
    ]


def sheet_rows_for_export(
    sheets: List[Dict[str, Any]],
    articles: List[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Project sheet rows onto export columns, joined with article names.

    Sheets whose article no longer resolves keep an empty artikel_naam.
    """
    names = {a.get("unieke_id"): a.get("naam") for a in articles}
    return [
        {
            "veiligheidsblad_id": sheet.get("id"),
            "artikel_unieke_id": sheet.get("artikel_id"),
            "artikel_naam": names.get(sheet.get("artikel_id"), ""),
            "taal": sheet.get("taal"),
            "versie": sheet.get("versie"),
            "bestandsnaam": sheet.get("bestandsnaam"),
            "storage_path": sheet.get("storage_path"),
            "geupload_op": _timestamp_text(sheet.get("geupload_op")),
        }
        for sheet in sheets
    ]


def _load(action: str, loader) -> List[Dict[str, Any]]:
    try:
        return loader()
    except DatabaseError:
        raise
    except Exception as e:
        logger.exception(f"{action} failed")
        raise DatabaseError(f"{action}: {e}")


def export_articles(db: DatabaseInterface) -> Tuple[bytes, int]:
    """
    Export all articles (newest first).

    Returns:
        (CSV bytes, row count)

    Raises:
        NotFoundError: If there are no articles
        DatabaseError: If query fails
    """
    rows = _load(
        "Fout bij exporteren artikelen",
        lambda: db.list_articles(order_by="created_at", descending=True),
    )
    if not rows:
        raise NotFoundError(ERROR_MESSAGES["no_data"], details={"export": "artikelen"})

    content = write_csv(article_rows_for_export(rows), ARTICLE_EXPORT_COLUMNS)
    logger.info(f"Exported {len(rows)} articles")
    return content, len(rows)


def export_safety_sheets(db: DatabaseInterface) -> Tuple[bytes, int]:
    """
    Export all safety sheet rows (newest upload first) with article names.

    Returns:
        (CSV bytes, row count)

    Raises:
        NotFoundError: If there are no sheets
        DatabaseError: If query fails
    """
    sheets = _load(
        "Fout bij exporteren veiligheidsbladen",
        lambda: db.list_safety_sheets(order_by="geupload_op", descending=True),
    )
    if not sheets:
        raise NotFoundError(ERROR_MESSAGES["no_data"], details={"export": "veiligheidsbladen"})

    articles = _load("Fout bij exporteren veiligheidsbladen", db.list_articles)

    content = write_csv(sheet_rows_for_export(sheets, articles), SAFETY_SHEET_EXPORT_COLUMNS)
    logger.info(f"Exported {len(sheets)} safety sheets")
    return content, len(sheets)


def export_all(db: DatabaseInterface, day: Optional[date] = None) -> Dict[str, Tuple[bytes, int]]:
    """
    Export both tables.

    Tables without rows are left out; if both are empty NotFoundError is raised.

    Returns:
        Dict filename -> (CSV bytes, row count)
    """
    files = {}
    for kind, exporter in (("artikelen", export_articles), ("veiligheidsbladen", export_safety_sheets)):
        try:
            files[export_filename(kind, day)] = exporter(db)
        except NotFoundError:
            logger.info(f"Nothing to export for {kind}")

    if not files:
        raise NotFoundError(ERROR_MESSAGES["no_data"], details={"export": "alles"})
    return files


def run_export(db: DatabaseInterface, kind: str, day: Optional[date] = None) -> Dict[str, Tuple[bytes, int]]:
    """
    Export by kind: 'artikelen', 'veiligheidsbladen' or 'alles'.

    Returns:
        Dict filename -> (CSV bytes, row count)

    Raises:
        ValidationError: If kind is unknown
    """
    if kind not in EXPORT_KINDS:
        raise ValidationError(f"Onbekend exporttype: {kind}", details={"allowed": EXPORT_KINDS})

    if kind == "artikelen":
        return {export_filename(kind, day): export_articles(db)}
    if kind == "veiligheidsbladen":
        return {export_filename(kind, day): export_safety_sheets(db)}
    return export_all(db, day)
