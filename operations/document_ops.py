"""
Bulk Document Operations for Veiligheidsbladen Beheer.

Upload many safety sheets at once from a ZIP archive whose file names
follow <artikel_id>_<taal>_V<versie>.<ext>.

Flow:
1. scan_zip_archive() - read entries, parse names (invalid -> error)
2. validate_document_articles() - unknown article IDs -> error
3. upload_documents() - sequential upload of pending entries
4. get_document_summary() / describe_upload_outcome() - report

Every entry carries its own status; one failing file never stops the batch.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from config.constants import ERROR_MESSAGES, SUCCESS_MESSAGES
from data.interface import DatabaseInterface, StorageInterface
from domain.exceptions import ValidationError
from domain.models import DocumentEntry, SafetySheet
from domain.rules import build_latest_path, build_version_path, parse_document_filename
from services.file_service import guess_content_type
from services.zip_service import read_zip_entries, validate_zip_file
from .article_ops import get_existing_unique_ids

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, DocumentEntry], None]


def create_document_entry(filename: str, data: bytes) -> DocumentEntry:
    """
    Create entry for one archive file.

    Valid names start as 'pending', invalid names as 'error' with the
    parse message.
    """
    parsed = parse_document_filename(filename)
    entry = DocumentEntry(
        filename=filename,
        data=data,
        artikel_id=parsed.artikel_id,
        taal=parsed.taal,
        versie=parsed.versie,
        extensie=parsed.extensie,
    )
    if not parsed.is_valid:
        entry.mark_error(parsed.error)
    return entry


def scan_zip_archive(source: Union[Path, str, bytes]) -> List[DocumentEntry]:
    """
    Read a bulk upload archive.

    Args:
        source: Path to .zip (validated for name and size) or archive bytes

    Returns:
        One DocumentEntry per file in the archive

    Raises:
        ImportValidationError: If the archive is invalid or unreadable
    """
    if not isinstance(source, (bytes, bytearray)):
        source = validate_zip_file(source)

    entries = [create_document_entry(name, data) for name, data in read_zip_entries(source)]

    pending = sum(1 for e in entries if e.is_pending)
    logger.info(f"Scanned archive: {len(entries)} files, {pending} with valid names")
    return entries


def validate_document_articles(db: DatabaseInterface, entries: List[DocumentEntry]) -> List[DocumentEntry]:
    """
    Mark pending entries whose article does not exist as error.

    Issues one existence query for all distinct article IDs.

    Returns:
        The same entries (modified in place)

    Raises:
        DatabaseError: If the lookup fails (entries unchanged)
    """
    ids = sorted({e.artikel_id for e in entries if e.is_pending and e.artikel_id})
    if not ids:
        return entries

    existing = get_existing_unique_ids(db, ids)

    unknown = 0
    for entry in entries:
        if entry.is_pending and entry.artikel_id not in existing:
            entry.mark_error(ERROR_MESSAGES["unknown_article"].format(artikel_id=entry.artikel_id))
            unknown += 1

    if unknown:
        logger.warning(f"{unknown} files refer to unknown articles")
    return entries


def upload_document(
    db: DatabaseInterface,
    storage: StorageInterface,
    entry: DocumentEntry,
) -> DocumentEntry:
    """
    Upload one pending entry.

    Steps (first failure sets status 'error' with the stage as prefix):
    1. Version path, no overwrite ("Version upload: ...")
    2. Latest path, overwrite ("Latest upload: ...")
    3. Metadata row ("Database: ...")

    Returns:
        The entry with status 'success' or 'error'
    """
    entry.status = "uploading"
    entry.error = None

    content_type = guess_content_type(entry.filename)
    version_path = build_version_path(entry.artikel_id, entry.taal, entry.versie, entry.extensie)
    latest_path = build_latest_path(entry.artikel_id, entry.taal, entry.extensie)

    try:
        storage.upload(version_path, entry.data, content_type, upsert=False)
    except Exception as e:
        logger.warning(f"Version upload failed for {entry.filename}: {e}")
        entry.mark_error(f"Version upload: {getattr(e, 'message', e)}")
        return entry

    try:
        storage.upload(latest_path, entry.data, content_type, upsert=True)
    except Exception as e:
        logger.warning(f"Latest upload failed for {entry.filename}: {e}")
        entry.mark_error(f"Latest upload: {getattr(e, 'message', e)}")
        return entry

    sheet = SafetySheet(
        artikel_id=entry.artikel_id,
        taal=entry.taal,
        versie=entry.versie,
        storage_path=version_path,
        bestandsnaam=entry.filename,
        geupload_op=datetime.now(timezone.utc),
    )
    try:
        db.insert_safety_sheet(sheet.to_insert_row())
    except Exception as e:
        logger.warning(f"Metadata insert failed for {entry.filename}: {e}")
        entry.mark_error(f"Database: {getattr(e, 'message', e)}")
        return entry

    entry.status = "success"
    logger.info(f"Uploaded {entry.filename} -> {version_path}")
    return entry


def upload_documents(
    db: DatabaseInterface,
    storage: StorageInterface,
    entries: List[DocumentEntry],
    progress_callback: Optional[ProgressCallback] = None,
    start_callback: Optional[ProgressCallback] = None,
) -> Dict[str, Any]:
    """
    Upload all pending entries, strictly one after another.

    Args:
        db: Database instance (injected)
        storage: Storage instance (injected)
        entries: Scanned (and validated) entries
        progress_callback: Called with (index, total, entry) after each file
        start_callback: Called with (index, total, entry) when a file starts
                        (entry status is already 'uploading')

    Returns:
        Summary dict (see get_document_summary) plus 'uploaded' and
        'failed' for the files attempted in this batch

    Raises:
        ValidationError: If no entry is pending
    """
    pending = [e for e in entries if e.is_pending]
    if not pending:
        raise ValidationError(ERROR_MESSAGES["no_pending_files"])

    total = len(pending)
    logger.info(f"Uploading {total} documents")

    for index, entry in enumerate(pending, start=1):
        entry.status = "uploading"
        if start_callback:
            start_callback(index, total, entry)
        upload_document(db, storage, entry)
        if progress_callback:
            progress_callback(index, total, entry)

    summary = get_document_summary(entries)
    summary["uploaded"] = sum(1 for e in pending if e.status == "success")
    summary["failed"] = total - summary["uploaded"]
    logger.info(f"Bulk upload done: {summary['uploaded']} ok, {summary['failed']} failed")
    return summary


def get_document_summary(entries: List[DocumentEntry]) -> Dict[str, Any]:
    """
    Count entries per status.

    Returns:
        Dict with total and one count per status
        (pending, uploading, success, error)
    """
    summary = {status: 0 for status in DocumentEntry.STATUSES}
    for entry in entries:
        summary[entry.status] = summary.get(entry.status, 0) + 1
    summary["total"] = len(entries)
    return summary


def describe_upload_outcome(success: int, failed: int) -> str:
    """
    User message after a bulk upload.

    Example:
        >>> describe_upload_outcome(3, 0)
        'Alle 3 bestanden succesvol geüpload!'
    """
    if failed == 0:
        return SUCCESS_MESSAGES["upload_all_success"].format(count=success)
    if success == 0:
        return SUCCESS_MESSAGES["upload_all_failed"]
    return SUCCESS_MESSAGES["upload_partial"].format(success=success, failed=failed)
