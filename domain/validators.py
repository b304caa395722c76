"""
Input validators for Veiligheidsbladen Beheer.

These validators ensure data integrity before it reaches the backend.
All validators raise ValidationError on failure.
"""

import re
from pathlib import Path
from typing import Optional, Union

from config.constants import (
    ERROR_MESSAGES,
    MAX_EAN_LENGTH,
    MAX_NAAM_LENGTH,
    MAX_REFERENCE_LENGTH,
    MAX_UNIEKE_ID_LENGTH,
    MIN_PASSWORD_LENGTH,
    TAAL_CODES,
)
from .exceptions import ValidationError


def validate_unieke_id(unieke_id: str) -> str:
    """
    Validate unique article ID.

    Rules:
    - Not empty
    - Max 100 characters
    - No path separators (used as storage folder name)

    Args:
        unieke_id: Unique ID to validate

    Returns:
        Cleaned ID (trimmed, preserves original case)

    Raises:
        ValidationError: If invalid
    """
    if not unieke_id or not str(unieke_id).strip():
        raise ValidationError("Unieke ID is verplicht")

    cleaned = str(unieke_id).strip()

    if len(cleaned) > MAX_UNIEKE_ID_LENGTH:
        raise ValidationError(
            f"Unieke ID is te lang: {len(cleaned)} tekens (max {MAX_UNIEKE_ID_LENGTH})",
            details={"unieke_id": cleaned},
        )

    if "/" in cleaned or "\\" in cleaned:
        raise ValidationError(
            f"Unieke ID mag geen '/' of '\\' bevatten: '{cleaned}'",
            details={"unieke_id": cleaned},
        )

    return cleaned


def validate_naam(naam: str) -> str:
    """
    Validate article name.

    Returns:
        Cleaned name (trimmed)

    Raises:
        ValidationError: If empty or too long
    """
    if not naam or not str(naam).strip():
        raise ValidationError("Naam is verplicht")

    cleaned = str(naam).strip()

    if len(cleaned) > MAX_NAAM_LENGTH:
        raise ValidationError(
            f"Naam is te lang: {len(cleaned)} tekens (max {MAX_NAAM_LENGTH})",
            details={"naam": cleaned[:50]},
        )

    return cleaned


def validate_reference(value: Optional[str], field_name: str = "referentie") -> Optional[str]:
    """
    Validate optional reference field (Rubix or manufacturer reference).

    Returns:
        Cleaned value, or None if empty

    Raises:
        ValidationError: If too long
    """
    if value is None:
        return None

    cleaned = str(value).strip()
    if not cleaned:
        return None

    if len(cleaned) > MAX_REFERENCE_LENGTH:
        raise ValidationError(
            f"{field_name} is te lang: {len(cleaned)} tekens (max {MAX_REFERENCE_LENGTH})",
            details={field_name: cleaned[:50]},
        )

    return cleaned


def validate_ean(ean: Optional[str]) -> Optional[str]:
    """
    Validate optional EAN barcode.

    Rules:
    - Empty is allowed (returns None)
    - Digits only, max 14 characters

    Raises:
        ValidationError: If invalid
    """
    if ean is None:
        return None

    cleaned = str(ean).strip()
    if not cleaned:
        return None

    if not cleaned.isdigit():
        raise ValidationError(
            f"EAN mag alleen cijfers bevatten: '{cleaned}'",
            details={"ean": cleaned},
        )

    if len(cleaned) > MAX_EAN_LENGTH:
        raise ValidationError(
            f"EAN is te lang: {len(cleaned)} cijfers (max {MAX_EAN_LENGTH})",
            details={"ean": cleaned},
        )

    return cleaned


def validate_taal(taal: str) -> str:
    """
    Validate language code.

    Returns:
        Uppercased language code (NL, EN, DE or FR)

    Raises:
        ValidationError: If not a supported language
    """
    cleaned = (taal or "").strip().upper()
    if cleaned not in TAAL_CODES:
        raise ValidationError(
            ERROR_MESSAGES["unsupported_language"],
            details={"taal": taal},
        )
    return cleaned


def validate_versie(versie: str) -> str:
    """
    Validate version label.

    Accepts "1", "2.0", "V3" (leading V is stripped).

    Returns:
        Version label without leading V

    Raises:
        ValidationError: If empty or not numeric
    """
    if not versie or not str(versie).strip():
        raise ValidationError("Versie is verplicht")

    cleaned = str(versie).strip()
    if cleaned[0] in ("V", "v"):
        cleaned = cleaned[1:]

    if not re.match(r"^\d+(\.\d+)?$", cleaned):
        raise ValidationError(
            f"Ongeldige versie: '{versie}' (bijvoorbeeld 1, 2.0)",
            details={"versie": versie},
        )

    return cleaned


def validate_email(email: str) -> str:
    """
    Validate email address (basic format check).

    Returns:
        Cleaned email (trimmed, lowercased)

    Raises:
        ValidationError: If empty or malformed
    """
    if not email or not email.strip():
        raise ValidationError(ERROR_MESSAGES["missing_fields"])

    cleaned = email.strip().lower()

    if not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", cleaned):
        raise ValidationError(
            f"Ongeldig e-mailadres: '{cleaned}'",
            details={"email": cleaned},
        )

    return cleaned


def validate_password(password: str) -> str:
    """
    Validate password.

    Raises:
        ValidationError: If empty or shorter than 6 characters
    """
    if not password:
        raise ValidationError(ERROR_MESSAGES["missing_fields"])

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            ERROR_MESSAGES["password_too_short"].format(min_length=MIN_PASSWORD_LENGTH)
        )

    return password


def validate_file_path(
    file_path: Union[Path, str],
    must_exist: bool = True,
    allowed_extensions: Optional[list] = None,
    error_message: Optional[str] = None,
) -> Path:
    """
    Validate file path.

    Args:
        file_path: File path to validate
        must_exist: If True, file must exist on disk
        allowed_extensions: List of allowed extensions (e.g., ['.pdf', '.csv'])
        error_message: Message used when the extension is not allowed

    Returns:
        Path object

    Raises:
        ValidationError: If invalid
    """
    if not file_path:
        raise ValidationError("Geen bestand geselecteerd")

    path = Path(file_path)

    if must_exist and not path.exists():
        raise ValidationError(
            f"Bestand bestaat niet: {path}",
            details={"file_path": str(path)},
        )

    if allowed_extensions:
        if path.suffix.lower() not in [ext.lower() for ext in allowed_extensions]:
            raise ValidationError(
                error_message or f"Ongeldige bestandsextensie: {path.suffix}",
                details={"file_path": str(path), "allowed": allowed_extensions},
            )

    return path


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename for safe storage.

    Removes/replaces characters that could cause filesystem issues.

    Args:
        filename: Original filename

    Returns:
        Safe filename
    """
    # Remove path separators
    cleaned = filename.replace("/", "_").replace("\\", "_")

    cleaned = re.sub(r'[<>:"|?*]', "_", cleaned)

    cleaned = cleaned.strip(". ")

    if len(cleaned) > 255:
        name, ext = cleaned.rsplit(".", 1) if "." in cleaned else (cleaned, "")
        cleaned = name[: 255 - len(ext) - 1] + "." + ext if ext else name[:255]

    return cleaned
