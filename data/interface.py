"""
Backend Interfaces - Abstract Base Classes for the hosted backend.

This module defines the contract for all backend implementations in
Veiligheidsbladen Beheer. The application talks to three services:
- DatabaseInterface: table rows (artikelen, veiligheidsbladen)
- StorageInterface: object storage for sheet documents
- AuthInterface: email/password authentication and session state

Any backend (Supabase, in-memory) must implement these interfaces.
Rows are exchanged as plain dicts; operations convert them to domain models.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Set


class DatabaseInterface(ABC):
    """
    Abstract base class for table operations.

    Implementations raise domain.exceptions.DatabaseError on failure,
    carrying the store's code/details/hint where available.
    """

    # ==================== Article Operations ====================

    @abstractmethod
    def list_articles(
        self,
        order_by: str = "created_at",
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get all articles.

        Args:
            order_by: Column to sort on
            descending: Sort direction
            limit: Optional max number of rows

        Returns:
            List of article rows
        """
        pass

    @abstractmethod
    def get_article(self, unieke_id: str) -> Optional[Dict[str, Any]]:
        """
        Get article by unique ID.

        Returns:
            Article row or None if not found
        """
        pass

    @abstractmethod
    def find_existing_unique_ids(self, unieke_ids: Iterable[str]) -> Set[str]:
        """
        Check which unique IDs already exist.

        Args:
            unieke_ids: IDs to look up

        Returns:
            Subset of the given IDs that exist in the store
        """
        pass

    @abstractmethod
    def insert_article(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert an article.

        Args:
            row: Dict with unieke_id, naam and optional references/ean

        Returns:
            Inserted row (including id and timestamps)

        Raises:
            DatabaseError: On failure (code 23505 for duplicate unieke_id)
        """
        pass

    # ==================== Safety Sheet Operations ====================

    @abstractmethod
    def list_safety_sheets(
        self,
        order_by: str = "geupload_op",
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Get all safety sheet rows.

        Returns:
            List of sheet rows
        """
        pass

    @abstractmethod
    def get_safety_sheets_for_article(self, artikel_id: str) -> List[Dict[str, Any]]:
        """
        Get all sheet versions of one article (newest first).

        Args:
            artikel_id: unieke_id of the article

        Returns:
            List of sheet rows
        """
        pass

    @abstractmethod
    def insert_safety_sheet(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a safety sheet metadata row.

        Args:
            row: Dict with artikel_id, taal, versie, storage_path,
                 bestandsnaam, geupload_op

        Returns:
            Inserted row
        """
        pass

    # ==================== Utility Operations ====================

    @abstractmethod
    def ping(self) -> int:
        """
        Run a minimal query to verify connectivity.

        Returns:
            Number of rows returned by the check query
        """
        pass


class StorageInterface(ABC):
    """
    Abstract base class for object storage.

    Implementations raise domain.exceptions.StorageError on failure.
    """

    @abstractmethod
    def upload(
        self,
        path: str,
        data: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """
        Upload an object.

        Args:
            path: Object key within the bucket
            data: File contents
            content_type: MIME type
            upsert: Overwrite an existing object (False fails if it exists)

        Returns:
            Object key
        """
        pass

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        """Get the public URL of an object."""
        pass

    @abstractmethod
    def create_signed_url(self, path: str, expires_in: int) -> str:
        """
        Create a time-limited URL for an object.

        Args:
            path: Object key
            expires_in: Validity in seconds
        """
        pass

    @abstractmethod
    def download(self, path: str) -> bytes:
        """Download an object."""
        pass


class AuthSubscription(ABC):
    """Handle returned by AuthInterface.on_auth_state_change."""

    @abstractmethod
    def unsubscribe(self):
        pass


class AuthInterface(ABC):
    """
    Abstract base class for authentication.

    Sessions are returned as domain.models.AuthSession.
    Implementations raise domain.exceptions.AuthError on failure.
    """

    @abstractmethod
    def get_session(self):
        """
        Get the current session.

        Returns:
            AuthSession or None if not signed in
        """
        pass

    @abstractmethod
    def sign_in_with_password(self, email: str, password: str):
        """
        Sign in with email and password.

        Returns:
            AuthSession

        Raises:
            AuthError: If credentials are rejected
        """
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str):
        """
        Create an account.

        Returns:
            AuthUser of the created account
        """
        pass

    @abstractmethod
    def sign_out(self):
        """End the current session."""
        pass

    @abstractmethod
    def on_auth_state_change(
        self,
        callback: Callable[[str, Any], None],
    ) -> AuthSubscription:
        """
        Subscribe to auth events.

        Args:
            callback: Called with (event, session). Events include
                      SIGNED_IN, SIGNED_OUT, TOKEN_REFRESHED.

        Returns:
            Subscription with unsubscribe()
        """
        pass
