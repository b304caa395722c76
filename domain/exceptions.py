"""
Custom exceptions for Veiligheidsbladen Beheer.

All exceptions inherit from SafetyDocsBaseException for easier catching.
Each exception includes a message and optional details dict.
"""

from typing import Optional


class SafetyDocsBaseException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """String representation with details if available."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class DatabaseError(SafetyDocsBaseException):
    """
    Database operation failed.

    Carries the store's diagnostic fields (code, details, hint) when the
    hosted backend reported them.
    """

    def __init__(
        self,
        message: str,
        details: dict = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message, details)
        self.code = code
        self.hint = hint

    def describe(self) -> str:
        """
        Multi-line description for error dialogs.

        Example:
            Fout bij laden artikelen: permission denied

            Code: 42501
            Details: ...
            Hint: ...
        """
        lines = [self.message, ""]
        lines.append(f"Code: {self.code or 'N/A'}")
        lines.append(f"Details: {self.details.get('details') or 'N/A'}")
        lines.append(f"Hint: {self.hint or 'N/A'}")
        return "\n".join(lines)


class StorageError(SafetyDocsBaseException):
    """Object storage operation failed."""
    pass


class AuthError(SafetyDocsBaseException):
    """Authentication failed or session is no longer valid."""

    def __init__(self, message: str, details: dict = None, status: Optional[int] = None):
        super().__init__(message, details)
        self.status = status


class ImportValidationError(SafetyDocsBaseException):
    """Import file validation failed."""
    pass


class ValidationError(SafetyDocsBaseException):
    """Data validation failed."""
    pass


class NotFoundError(SafetyDocsBaseException):
    """Requested resource not found."""
    pass
