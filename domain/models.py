"""
Domain models for Veiligheidsbladen Beheer.

These dataclasses represent the core business entities.
They are framework-agnostic and have no dependencies on database or UI.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from config.constants import DEFAULT_USER_ROLE, TAAL_CODES


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a backend timestamp into an aware datetime.

    Accepts datetime objects and ISO 8601 strings (with 'Z' or offset).
    Naive values are treated as UTC.

    Returns:
        Aware datetime, or None for empty values
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(value: Optional[datetime]) -> str:
    """Format timestamp as ISO 8601 string ('' for None)."""
    return value.isoformat() if value else ""


def _clean_optional(value: Any) -> Optional[str]:
    """Empty or whitespace-only values become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class Article:
    """
    Catalogue article (row in 'artikelen').

    Identified by its externally supplied unieke_id. Read-only once created.
    """

    unieke_id: str
    naam: str
    referentie_rubix: Optional[str] = None
    referentie_fabrikant: Optional[str] = None
    ean: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate article data."""
        if not self.unieke_id:
            raise ValueError("unieke_id cannot be empty")
        if not self.naam:
            raise ValueError("naam cannot be empty")

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Article":
        """Build article from a backend row."""
        return cls(
            unieke_id=str(row["unieke_id"]),
            naam=str(row["naam"]),
            referentie_rubix=_clean_optional(row.get("referentie_rubix")),
            referentie_fabrikant=_clean_optional(row.get("referentie_fabrikant")),
            ean=_clean_optional(row.get("ean")),
            id=str(row["id"]) if row.get("id") is not None else None,
            created_at=parse_timestamp(row.get("created_at")),
            updated_at=parse_timestamp(row.get("updated_at")),
        )

    def to_insert_row(self) -> Dict[str, Any]:
        """Payload for inserting (backend assigns id and timestamps)."""
        return {
            "unieke_id": self.unieke_id,
            "naam": self.naam,
            "referentie_rubix": self.referentie_rubix,
            "referentie_fabrikant": self.referentie_fabrikant,
            "ean": self.ean,
        }

    def search_fields(self) -> List[str]:
        """Fields that take part in free-text search."""
        return [
            value
            for value in (
                self.naam,
                self.unieke_id,
                self.referentie_rubix,
                self.referentie_fabrikant,
                self.ean,
            )
            if value
        ]


@dataclass
class SafetySheet:
    """
    Uploaded safety data sheet version (row in 'veiligheidsbladen').

    Several versions per (artikel_id, taal) coexist; the current one is
    the most recently uploaded (see domain.rules.get_latest_sheet).
    """

    artikel_id: str  # unieke_id of the parent article
    taal: str
    versie: str
    storage_path: str
    bestandsnaam: str
    geupload_op: Optional[datetime] = None
    id: Optional[str] = None

    def __post_init__(self):
        """Validate safety sheet data."""
        if not self.artikel_id:
            raise ValueError("artikel_id cannot be empty")
        if self.taal not in TAAL_CODES:
            raise ValueError(f"taal must be one of {TAAL_CODES}")
        if not self.versie:
            raise ValueError("versie cannot be empty")

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SafetySheet":
        """Build safety sheet from a backend row."""
        return cls(
            artikel_id=str(row["artikel_id"]),
            taal=str(row["taal"]).upper(),
            versie=str(row["versie"]),
            storage_path=str(row.get("storage_path") or ""),
            bestandsnaam=str(row.get("bestandsnaam") or ""),
            geupload_op=parse_timestamp(row.get("geupload_op")),
            id=str(row["id"]) if row.get("id") is not None else None,
        )

    def to_insert_row(self) -> Dict[str, Any]:
        """Payload for inserting."""
        return {
            "artikel_id": self.artikel_id,
            "taal": self.taal,
            "versie": self.versie,
            "storage_path": self.storage_path,
            "bestandsnaam": self.bestandsnaam,
            "geupload_op": format_timestamp(self.geupload_op) or None,
        }

    @property
    def version_label(self) -> str:
        """Display label, e.g. 'V2'."""
        return f"V{self.versie}"


@dataclass
class ParsedFileName:
    """
    Result of parsing a bulk document filename.

    Pattern: <artikel_id>_<taal>_V<versie>.<ext>
    """

    filename: str
    artikel_id: Optional[str] = None
    taal: Optional[str] = None
    versie: Optional[str] = None
    extensie: Optional[str] = None
    is_valid: bool = False
    error: Optional[str] = None  # Dutch message for display
    reason: Optional[str] = None  # Machine-readable, key of ERROR_MESSAGES


@dataclass(eq=False)
class DocumentEntry:
    """One file found in a bulk upload archive (compared by identity)."""

    filename: str
    data: bytes = b""
    artikel_id: Optional[str] = None
    taal: Optional[str] = None
    versie: Optional[str] = None
    extensie: Optional[str] = None
    status: str = "pending"  # pending, uploading, success, error
    error: Optional[str] = None

    STATUSES = ("pending", "uploading", "success", "error")

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

    def mark_error(self, message: str):
        """Set status to error with message."""
        self.status = "error"
        self.error = message

    @property
    def size_kb(self) -> float:
        return len(self.data) / 1024


@dataclass
class ArticleImportRow:
    """Article row read from an import CSV (row_number as in the file, header = 1)."""

    row_number: int
    naam: str
    unieke_id: str
    referentie_rubix: Optional[str] = None
    referentie_fabrikant: Optional[str] = None
    ean: Optional[str] = None

    def to_insert_row(self) -> Dict[str, Any]:
        """Payload for inserting; empty optional values become None."""
        return {
            "unieke_id": self.unieke_id,
            "naam": self.naam,
            "referentie_rubix": _clean_optional(self.referentie_rubix),
            "referentie_fabrikant": _clean_optional(self.referentie_fabrikant),
            "ean": _clean_optional(self.ean),
        }


@dataclass
class ImportRowError:
    """Failed import row."""

    row: int
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"Rij {self.row}: {self.message}"


@dataclass
class DuplicateRow:
    """Import row skipped because its unieke_id already exists."""

    row: int
    unieke_id: str

    def __str__(self) -> str:
        return f"Rij {self.row}: {self.unieke_id}"


@dataclass
class ImportResult:
    """Outcome of a CSV article import."""

    success: int = 0
    errors: List[ImportRowError] = field(default_factory=list)
    duplicates: List[DuplicateRow] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.success + len(self.errors) + len(self.duplicates)


@dataclass
class AuthUser:
    """Signed-in user. Every signed-in user has the admin role."""

    id: str
    email: str
    role: str = DEFAULT_USER_ROLE
    created_at: Optional[datetime] = None


@dataclass
class AuthSession:
    """Authenticated session as returned by the auth service."""

    user: AuthUser
    access_token: str = ""
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None  # Unix timestamp

    @property
    def email(self) -> str:
        return self.user.email


@dataclass
class ConnectionStatus:
    """Result of a backend connection test."""

    session_ok: bool = False
    session_message: str = ""
    database_ok: bool = False
    database_message: str = ""
    user_email: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.session_ok and self.database_ok
