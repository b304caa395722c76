"""
Application Context for Veiligheidsbladen Beheer.

Centralized application state and dependency injection.
"""

from dataclasses import dataclass, field, replace
from typing import Optional
from pathlib import Path

from data.interface import AuthInterface, DatabaseInterface, StorageInterface
from domain.exceptions import AuthError
from domain.models import AuthSession
from .constants import ERROR_MESSAGES
from .settings import Settings, get_settings


@dataclass
class AppContext:
    """
    Centralized application context.

    Contains all application-wide state and dependencies.
    Injected into UI layer and passed to operations.

    Key principles:
    - Immutable where possible (use with_* methods for changes)
    - All dependencies explicit (database, storage, auth, settings)
    - Session state lives here, not in globals: created at startup,
      replaced on sign-in, cleared on sign-out or auth failure

    Example:
        >>> from data import create_backend
        >>> backend = create_backend("memory")
        >>> ctx = create_app_context(backend.database, backend.storage, backend.auth)
        >>>
        >>> # After login
        >>> ctx = ctx.with_session(session)
        >>>
        >>> # Pass to operations
        >>> from operations import load_articles
        >>> articles = load_articles(ctx.database)
    """

    # Core dependencies (required)
    database: DatabaseInterface
    storage: StorageInterface
    auth: AuthInterface
    settings: Settings = field(default_factory=get_settings)

    # Session state (optional)
    session: Optional[AuthSession] = None

    # Application version
    app_version: str = field(default_factory=lambda: get_settings().app_version)

    @property
    def export_dir(self) -> Path:
        """Get export directory from settings."""
        return self.settings.export_dir

    @property
    def user_email(self) -> Optional[str]:
        """Email of the signed-in user (None if signed out)."""
        return self.session.email if self.session else None

    def with_session(self, session: AuthSession) -> "AppContext":
        """
        Create new context with session set.

        Immutable pattern - returns new instance instead of modifying self.

        Args:
            session: Authenticated session

        Returns:
            New AppContext instance with session set
        """
        return replace(self, session=session)

    def clear_session(self) -> "AppContext":
        """
        Create new context with session cleared.

        Returns:
            New AppContext instance with no session set
        """
        return replace(self, session=None)

    def has_session(self) -> bool:
        """Check if a user is signed in."""
        return self.session is not None

    def require_session(self) -> AuthSession:
        """
        Get current session or raise error.

        Returns:
            Current session

        Raises:
            AuthError: If nobody is signed in
        """
        if not self.has_session():
            raise AuthError(ERROR_MESSAGES["session_expired"], status=401)
        return self.session


def create_app_context(
    database: DatabaseInterface,
    storage: StorageInterface,
    auth: AuthInterface,
    settings: Optional[Settings] = None,
    session: Optional[AuthSession] = None,
) -> AppContext:
    """
    Factory function to create AppContext.

    Args:
        database: Database instance (required)
        storage: Storage instance (required)
        auth: Auth instance (required)
        settings: Settings instance (defaults to global settings)
        session: Session restored at startup, if any

    Returns:
        AppContext instance
    """
    if settings is None:
        settings = get_settings()

    return AppContext(
        database=database,
        storage=storage,
        auth=auth,
        settings=settings,
        session=session,
        app_version=settings.app_version,
    )
