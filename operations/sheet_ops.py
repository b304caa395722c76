"""
Safety Sheet Operations for Veiligheidsbladen Beheer.

Per-article safety data sheet operations: listing versions, deriving the
current sheet per language, uploading a new version and opening a sheet.

The current sheet of a language is derived from the upload timestamp
(see domain.rules.get_latest_sheet); no flag is stored, so an upload is
one storage write pair plus one row insert.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from config.constants import (
    ALLOWED_DOCUMENT_EXTENSIONS,
    ERROR_MESSAGES,
    MAX_DOCUMENT_SIZE_MB,
    SIGNED_URL_EXPIRY_SECONDS,
)
from data.interface import DatabaseInterface, StorageInterface
from domain.exceptions import DatabaseError, StorageError, ValidationError
from domain.models import SafetySheet
from domain.rules import (
    build_latest_path,
    build_version_path,
    get_latest_sheets_by_language,
    suggest_next_version,
)
from domain.validators import validate_taal, validate_unieke_id, validate_versie
from services.file_service import FileService, guess_content_type
from services.pdf_utils import validate_pdf

logger = logging.getLogger(__name__)


def load_sheets_for_article(db: DatabaseInterface, unieke_id: str) -> List[SafetySheet]:
    """
    Load all sheet versions of an article (newest first).

    Raises:
        DatabaseError: If query fails
    """
    try:
        rows = db.get_safety_sheets_for_article(unieke_id)
    except DatabaseError:
        raise
    except Exception as e:
        logger.exception(f"Error loading sheets for {unieke_id}")
        raise DatabaseError(
            f"Fout bij laden veiligheidsbladen: {e}",
            details={"artikel_id": unieke_id},
        )

    return [SafetySheet.from_row(row) for row in rows]


def load_all_sheets(db: DatabaseInterface) -> List[SafetySheet]:
    """
    Load every sheet row (newest first).

    Used for the language badges in the article list.
    """
    try:
        rows = db.list_safety_sheets(order_by="geupload_op", descending=True)
    except DatabaseError:
        raise
    except Exception as e:
        logger.exception("Error loading sheets")
        raise DatabaseError(f"Fout bij laden veiligheidsbladen: {e}")

    return [SafetySheet.from_row(row) for row in rows]


def get_latest_sheets(sheets: List[SafetySheet]) -> Dict[str, Optional[SafetySheet]]:
    """
    Current sheet per language for one article.

    Returns:
        Dict with keys NL, EN, DE, FR (None where no sheet exists)
    """
    return get_latest_sheets_by_language(sheets)


def get_next_version(sheets: List[SafetySheet], taal: str) -> str:
    """
    Suggested version label for a new upload in a language.

    Example:
        >>> get_next_version([], "NL")
        '1.0'
    """
    current = get_latest_sheets_by_language(sheets).get(taal.upper())
    return suggest_next_version(current.versie if current else None)


def validate_document_file(file_path: Union[Path, str]) -> Path:
    """
    Validate a document selected for single upload.

    Rules:
    - Extension .pdf, .doc or .docx
    - Size at most 10 MB
    - PDF files must be readable

    Returns:
        Path object

    Raises:
        ValidationError: If invalid
    """
    path = Path(file_path)
    FileService(path.parent).validate_file(
        path,
        allowed_extensions=ALLOWED_DOCUMENT_EXTENSIONS,
        max_size_mb=MAX_DOCUMENT_SIZE_MB,
        extension_message=ERROR_MESSAGES["invalid_document"],
        size_message=ERROR_MESSAGES["document_too_large"].format(max_mb=MAX_DOCUMENT_SIZE_MB),
    )

    if path.suffix.lower() == ".pdf" and not validate_pdf(path):
        raise ValidationError(
            f"Bestand is geen geldige PDF: {path.name}",
            details={"file_path": str(path)},
        )

    return path


def upload_safety_sheet(
    db: DatabaseInterface,
    storage: StorageInterface,
    unieke_id: str,
    taal: str,
    versie: str,
    filename: str,
    data: bytes,
) -> SafetySheet:
    """
    Upload a new sheet version for one article and language.

    Steps:
    1. Upload to the version path (never overwrites; failure aborts)
    2. Upload to the language's 'latest' path (overwrites; failure is logged only)
    3. Insert the metadata row

    Args:
        db: Database instance (injected)
        storage: Storage instance (injected)
        unieke_id: Article unique ID
        taal: Language code
        versie: Version label (e.g. "2.0")
        filename: Original filename (stored as bestandsnaam)
        data: Document content

    Returns:
        Created SafetySheet

    Raises:
        ValidationError: If input is invalid
        StorageError: If the versioned upload fails
        DatabaseError: If the row insert fails
    """
    unieke_id = validate_unieke_id(unieke_id)
    taal = validate_taal(taal)
    versie = validate_versie(versie)

    extension = Path(filename).suffix.lower().lstrip(".")
    if f".{extension}" not in ALLOWED_DOCUMENT_EXTENSIONS:
        raise ValidationError(ERROR_MESSAGES["invalid_document"], details={"filename": filename})

    content_type = guess_content_type(filename)
    version_path = build_version_path(unieke_id, taal, versie, extension)
    latest_path = build_latest_path(unieke_id, taal, extension)

    storage.upload(version_path, data, content_type, upsert=False)

    try:
        storage.upload(latest_path, data, content_type, upsert=True)
    except StorageError as e:
        logger.warning(f"Latest copy upload failed for {latest_path}: {e}")

    sheet = SafetySheet(
        artikel_id=unieke_id,
        taal=taal,
        versie=versie,
        storage_path=version_path,
        bestandsnaam=filename,
        geupload_op=datetime.now(timezone.utc),
    )

    try:
        row = db.insert_safety_sheet(sheet.to_insert_row())
    except DatabaseError:
        logger.error(f"Metadata insert failed for {version_path}")
        raise
    except Exception as e:
        logger.exception(f"Error saving sheet metadata for {version_path}")
        raise DatabaseError(
            f"Fout bij opslaan veiligheidsblad: {e}",
            details={"storage_path": version_path},
        )

    logger.info(f"Uploaded safety sheet {unieke_id} {taal} V{versie}")
    return SafetySheet.from_row(row)


def get_sheet_url(
    storage: StorageInterface,
    storage_path: str,
    expires_in: int = SIGNED_URL_EXPIRY_SECONDS,
) -> str:
    """
    URL to open a sheet.

    Tries a signed URL first; falls back to the public URL if signing fails.
    """
    try:
        return storage.create_signed_url(storage_path, expires_in)
    except Exception as e:
        logger.warning(f"Signed URL failed for {storage_path}, using public URL: {e}")
        return storage.get_public_url(storage_path)
