"""
Domain layer for Veiligheidsbladen Beheer.

This module contains core business entities, rules, and validators.
No dependencies on database, UI, or external frameworks.
"""

from .models import (
    Article,
    SafetySheet,
    ParsedFileName,
    DocumentEntry,
    ArticleImportRow,
    ImportRowError,
    DuplicateRow,
    ImportResult,
    AuthUser,
    AuthSession,
    ConnectionStatus,
)

from .exceptions import (
    SafetyDocsBaseException,
    DatabaseError,
    StorageError,
    AuthError,
    ImportValidationError,
    ValidationError,
    NotFoundError,
)

from .validators import (
    validate_unieke_id,
    validate_naam,
    validate_reference,
    validate_ean,
    validate_taal,
    validate_versie,
    validate_email,
    validate_password,
    validate_file_path,
    sanitize_filename,
)

from .rules import (
    parse_document_filename,
    get_latest_sheet,
    get_latest_sheets_by_language,
    group_sheets_by_article,
    suggest_next_version,
    is_auth_error,
    build_version_path,
    build_latest_path,
    matches_search,
)

__all__ = [
    # Models
    "Article",
    "SafetySheet",
    "ParsedFileName",
    "DocumentEntry",
    "ArticleImportRow",
    "ImportRowError",
    "DuplicateRow",
    "ImportResult",
    "AuthUser",
    "AuthSession",
    "ConnectionStatus",
    # Exceptions
    "SafetyDocsBaseException",
    "DatabaseError",
    "StorageError",
    "AuthError",
    "ImportValidationError",
    "ValidationError",
    "NotFoundError",
    # Validators
    "validate_unieke_id",
    "validate_naam",
    "validate_reference",
    "validate_ean",
    "validate_taal",
    "validate_versie",
    "validate_email",
    "validate_password",
    "validate_file_path",
    "sanitize_filename",
    # Rules
    "parse_document_filename",
    "get_latest_sheet",
    "get_latest_sheets_by_language",
    "group_sheets_by_article",
    "suggest_next_version",
    "is_auth_error",
    "build_version_path",
    "build_latest_path",
    "matches_search",
]
