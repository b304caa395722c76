"""
Business rules for Veiligheidsbladen Beheer.

These functions encode business logic and decision-making rules.
They are pure functions with no side effects.
"""

import math
import re
from typing import Dict, Iterable, List, Optional

from config.constants import (
    AUTH_ERROR_KEYWORDS,
    AUTH_ERROR_STATUSES,
    DOCUMENT_EXTENSIONS,
    ERROR_MESSAGES,
    LATEST_FOLDER,
    STORAGE_CATEGORY,
    STORAGE_FILE_STEM,
    TAAL_CODES,
)
from .models import Article, ParsedFileName, SafetySheet


VERSION_TOKEN_PATTERN = re.compile(r"^\d+$")


def _invalid(filename: str, reason: str, **fields) -> ParsedFileName:
    return ParsedFileName(
        filename=filename,
        is_valid=False,
        error=ERROR_MESSAGES[reason],
        reason=reason,
        **fields,
    )


def parse_document_filename(filename: str) -> ParsedFileName:
    """
    Parse a bulk upload filename into article ID, language and version.

    Expected pattern: <artikel_id>_<taal>_V<versie>.<ext>

    Checks, in order:
    1. Extension present (after the last dot)
    2. Extension is pdf, doc or docx (case-insensitive)
    3. Name splits on '_' into exactly 3 parts
    4. Version part is 'V' followed by digits
    5. Language (uppercased) is NL, EN, FR or DE

    Args:
        filename: Filename without directories (e.g. "ART001_NL_V1.pdf")

    Returns:
        ParsedFileName (is_valid=False with error/reason on failure)

    Example:
        >>> parse_document_filename("ART001_nl_V2.PDF")
        ParsedFileName(filename='ART001_nl_V2.PDF', artikel_id='ART001', taal='NL', versie='2', ...)
    """
    if "." not in filename:
        return _invalid(filename, "missing_extension")

    stem, extension = filename.rsplit(".", 1)
    extension = extension.lower()

    if extension not in DOCUMENT_EXTENSIONS:
        return _invalid(filename, "unsupported_extension", extensie=extension)

    parts = stem.split("_")
    if len(parts) != 3:
        return _invalid(filename, "wrong_field_count", extensie=extension)

    artikel_id, taal, version_token = parts

    if not version_token.startswith("V") or not VERSION_TOKEN_PATTERN.match(version_token[1:]):
        return _invalid(
            filename,
            "bad_version",
            artikel_id=artikel_id,
            taal=taal.upper(),
            extensie=extension,
        )

    taal = taal.upper()
    if taal not in TAAL_CODES:
        return _invalid(
            filename,
            "unsupported_language",
            artikel_id=artikel_id,
            extensie=extension,
        )

    return ParsedFileName(
        filename=filename,
        artikel_id=artikel_id,
        taal=taal,
        versie=version_token[1:],
        extensie=extension,
        is_valid=True,
    )


def get_latest_sheet(sheets: Iterable[SafetySheet], taal: str) -> Optional[SafetySheet]:
    """
    Get the current sheet for a language.

    The current sheet is the one with the most recent upload timestamp.
    Sheets without timestamp count as oldest.

    Args:
        sheets: Sheets of a single article
        taal: Language code

    Returns:
        Latest SafetySheet or None if no sheet exists for the language
    """
    candidates = [s for s in sheets if s.taal == taal.upper()]
    if not candidates:
        return None

    return max(
        candidates,
        key=lambda s: s.geupload_op.timestamp() if s.geupload_op else float("-inf"),
    )


def get_latest_sheets_by_language(
    sheets: Iterable[SafetySheet],
) -> Dict[str, Optional[SafetySheet]]:
    """
    Get the current sheet per language for one article.

    Returns:
        Dict with every language code as key (None if no sheet)
    """
    sheets = list(sheets)
    return {taal: get_latest_sheet(sheets, taal) for taal in TAAL_CODES}


def group_sheets_by_article(sheets: Iterable[SafetySheet]) -> Dict[str, List[SafetySheet]]:
    """Group sheets by artikel_id (preserves input order)."""
    grouped: Dict[str, List[SafetySheet]] = {}
    for sheet in sheets:
        grouped.setdefault(sheet.artikel_id, []).append(sheet)
    return grouped


def suggest_next_version(current_version: Optional[str]) -> str:
    """
    Suggest the version label for a new upload.

    Rules:
    - No current version: "1.0"
    - Otherwise: floor(current) + 1, formatted as "N.0"
    - Unparsable current version: "1.0"

    Example:
        >>> suggest_next_version("2.5")
        '3.0'
    """
    if not current_version:
        return "1.0"

    text = str(current_version).strip()
    if text[:1] in ("V", "v"):
        text = text[1:]

    try:
        value = float(text)
    except ValueError:
        return "1.0"

    if math.isnan(value) or math.isinf(value):
        return "1.0"

    return f"{math.floor(value) + 1}.0"


def _error_status(error) -> Optional[int]:
    for attr in ("status", "status_code", "code"):
        value = getattr(error, attr, None)
        if value is None and isinstance(error, dict):
            value = error.get(attr)
        if value is None:
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            continue
    return None


def is_auth_error(error) -> bool:
    """
    Classify an error as authentication/session related.

    Heuristic: message mentions refresh, token, unauthorized or invalid
    (case-insensitive), or status is 400, 401 or 403.

    Args:
        error: Exception or dict with 'message'/'status'

    Returns:
        True if the session should be considered invalid
    """
    if error is None:
        return False

    if isinstance(error, dict):
        message = str(error.get("message") or "")
    else:
        message = str(getattr(error, "message", None) or error)

    message = message.lower()
    if any(keyword in message for keyword in AUTH_ERROR_KEYWORDS):
        return True

    return _error_status(error) in AUTH_ERROR_STATUSES


def build_version_path(artikel_id: str, taal: str, versie: str, extension: str) -> str:
    """
    Object key for a specific sheet version.

    Example:
        >>> build_version_path("ART001", "NL", "2", "pdf")
        'veiligheidsbladen/ART001/NL/V2/veiligheidsblad.pdf'
    """
    return f"{STORAGE_CATEGORY}/{artikel_id}/{taal}/V{versie}/{STORAGE_FILE_STEM}.{extension.lower()}"


def build_latest_path(artikel_id: str, taal: str, extension: str) -> str:
    """
    Object key for the current sheet of a language (overwritten on every upload).

    Example:
        >>> build_latest_path("ART001", "NL", "pdf")
        'veiligheidsbladen/ART001/NL/latest/veiligheidsblad.pdf'
    """
    return f"{STORAGE_CATEGORY}/{artikel_id}/{taal}/{LATEST_FOLDER}/{STORAGE_FILE_STEM}.{extension.lower()}"


def matches_search(article: Article, term: str) -> bool:
    """
    Case-insensitive substring match on naam, unieke_id, references and EAN.

    An empty term matches everything.
    """
    term = (term or "").strip().lower()
    if not term:
        return True
    return any(term in value.lower() for value in article.search_fields())
