"""
Supabase backend for Veiligheidsbladen Beheer.

Implements DatabaseInterface (PostgREST tables), StorageInterface
(object storage bucket) and AuthInterface (GoTrue email/password) on top
of a single supabase-py client.

Error mapping:
- postgrest APIError -> DatabaseError (message, code, details, hint)
- storage failures   -> StorageError
- auth failures      -> AuthError (status when reported)
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from postgrest.exceptions import APIError
from supabase import Client, create_client

from config.constants import (
    ARTICLE_TABLE,
    CACHE_CONTROL_SECONDS,
    DEFAULT_USER_ROLE,
    IN_FILTER_CHUNK_SIZE,
    SAFETY_SHEET_TABLE,
    STORAGE_BUCKET,
)
from domain.exceptions import AuthError, DatabaseError, StorageError
from domain.models import AuthSession, AuthUser, parse_timestamp
from .interface import AuthInterface, AuthSubscription, DatabaseInterface, StorageInterface

logger = logging.getLogger(__name__)


def create_supabase_client(url: str, key: str) -> Client:
    """
    Create a supabase-py client.

    Args:
        url: Project URL (SUPABASE_URL)
        key: Anon key (SUPABASE_ANON_KEY)

    Raises:
        ValueError: If URL or key is missing
    """
    if not url or not key:
        raise ValueError("SUPABASE_URL en SUPABASE_ANON_KEY zijn verplicht")
    logger.info(f"Connecting to Supabase at {url}")
    return create_client(url, key)


def _database_error(action: str, error: Exception) -> DatabaseError:
    """Convert a PostgREST error into DatabaseError."""
    if isinstance(error, APIError):
        return DatabaseError(
            f"{action}: {error.message}",
            details={"details": error.details} if error.details else None,
            code=error.code,
            hint=error.hint,
        )
    return DatabaseError(f"{action}: {error}")


class SupabaseDatabase(DatabaseInterface):
    """Table access through PostgREST."""

    def __init__(self, client: Client):
        self.client = client

    def _select(self, table: str, action: str, build) -> List[Dict[str, Any]]:
        try:
            response = build(self.client.table(table).select("*")).execute()
        except Exception as e:
            logger.error(f"{action} failed: {e}")
            raise _database_error(action, e) from e
        return list(response.data or [])

    def _insert(self, table: str, row: Dict[str, Any], action: str) -> Dict[str, Any]:
        try:
            response = self.client.table(table).insert(row).execute()
        except Exception as e:
            logger.error(f"{action} failed: {e}")
            raise _database_error(action, e) from e

        if not response.data:
            raise DatabaseError(f"{action}: geen rij teruggegeven", details={"table": table})
        return response.data[0]

    # ==================== Article Operations ====================

    def list_articles(self, order_by="created_at", descending=True, limit=None):
        def build(query):
            query = query.order(order_by, desc=descending)
            return query.limit(limit) if limit else query

        return self._select(ARTICLE_TABLE, "Fout bij laden artikelen", build)

    def get_article(self, unieke_id):
        rows = self._select(
            ARTICLE_TABLE,
            "Fout bij laden artikel",
            lambda q: q.eq("unieke_id", unieke_id).limit(1),
        )
        return rows[0] if rows else None

    def find_existing_unique_ids(self, unieke_ids: Iterable[str]) -> Set[str]:
        ids = list(dict.fromkeys(i for i in unieke_ids if i))
        existing: Set[str] = set()

        for start in range(0, len(ids), IN_FILTER_CHUNK_SIZE):
            chunk = ids[start:start + IN_FILTER_CHUNK_SIZE]
            try:
                response = (
                    self.client.table(ARTICLE_TABLE)
                    .select("unieke_id")
                    .in_("unieke_id", chunk)
                    .execute()
                )
            except Exception as e:
                logger.error(f"Unique ID lookup failed: {e}")
                raise _database_error("Fout bij controleren artikelen", e) from e
            existing.update(row["unieke_id"] for row in response.data or [])

        return existing

    def insert_article(self, row):
        return self._insert(ARTICLE_TABLE, row, "Fout bij toevoegen artikel")

    # ==================== Safety Sheet Operations ====================

    def list_safety_sheets(self, order_by="geupload_op", descending=True, limit=None):
        def build(query):
            query = query.order(order_by, desc=descending)
            return query.limit(limit) if limit else query

        return self._select(SAFETY_SHEET_TABLE, "Fout bij laden veiligheidsbladen", build)

    def get_safety_sheets_for_article(self, artikel_id):
        return self._select(
            SAFETY_SHEET_TABLE,
            "Fout bij laden veiligheidsbladen",
            lambda q: q.eq("artikel_id", artikel_id).order("geupload_op", desc=True),
        )

    def insert_safety_sheet(self, row):
        return self._insert(SAFETY_SHEET_TABLE, row, "Fout bij opslaan veiligheidsblad")

    # ==================== Utility Operations ====================

    def ping(self):
        rows = self._select(ARTICLE_TABLE, "Database test mislukt", lambda q: q.limit(1))
        return len(rows)


class SupabaseStorage(StorageInterface):
    """Object storage in one Supabase bucket."""

    def __init__(self, client: Client, bucket: str = STORAGE_BUCKET):
        self.client = client
        self.bucket = bucket

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    def upload(self, path, data, content_type, upsert=False):
        try:
            self._bucket().upload(
                path=path,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": CACHE_CONTROL_SECONDS,
                    "upsert": "true" if upsert else "false",
                },
            )
        except Exception as e:
            logger.error(f"Upload to {path} failed: {e}")
            raise StorageError(
                getattr(e, "message", None) or str(e),
                details={"path": path, "bucket": self.bucket},
            ) from e

        logger.info(f"Uploaded {path} ({len(data)} bytes, upsert={upsert})")
        return path

    def get_public_url(self, path):
        url = self._bucket().get_public_url(path)
        # Older storage clients append a bare '?' to public URLs
        return url.rstrip("?")

    def create_signed_url(self, path, expires_in):
        try:
            result = self._bucket().create_signed_url(path, expires_in)
        except Exception as e:
            raise StorageError(
                getattr(e, "message", None) or str(e),
                details={"path": path},
            ) from e

        url = None
        if isinstance(result, dict):
            url = result.get("signedURL") or result.get("signedUrl")
        if not url:
            raise StorageError("Geen signed URL ontvangen", details={"path": path})
        return url

    def download(self, path):
        try:
            return self._bucket().download(path)
        except Exception as e:
            raise StorageError(
                getattr(e, "message", None) or str(e),
                details={"path": path},
            ) from e


def _to_user(user) -> AuthUser:
    return AuthUser(
        id=str(user.id),
        email=user.email or "",
        role=DEFAULT_USER_ROLE,
        created_at=parse_timestamp(getattr(user, "created_at", None)),
    )


def _to_session(session) -> Optional[AuthSession]:
    if session is None or session.user is None:
        return None
    return AuthSession(
        user=_to_user(session.user),
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
        expires_at=getattr(session, "expires_at", None),
    )


def _auth_error(error: Exception) -> AuthError:
    return AuthError(
        getattr(error, "message", None) or str(error),
        status=getattr(error, "status", None),
    )


class _SupabaseSubscription(AuthSubscription):
    def __init__(self, subscription):
        self._subscription = subscription

    def unsubscribe(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()


class SupabaseAuth(AuthInterface):
    """Email/password authentication through Supabase Auth."""

    def __init__(self, client: Client):
        self.client = client

    def get_session(self):
        try:
            return _to_session(self.client.auth.get_session())
        except Exception as e:
            raise _auth_error(e) from e

    def sign_in_with_password(self, email, password):
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise _auth_error(e) from e

        session = _to_session(response.session)
        if session is None:
            raise AuthError("Geen sessie ontvangen", status=401)
        return session

    def sign_up(self, email, password):
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            raise _auth_error(e) from e

        if response.user is None:
            raise AuthError("Account aanmaken mislukt")
        return _to_user(response.user)

    def sign_out(self):
        try:
            self.client.auth.sign_out()
        except Exception as e:
            raise _auth_error(e) from e

    def on_auth_state_change(self, callback):
        def handler(event, session):
            name = getattr(event, "value", event)
            callback(str(name), _to_session(session))

        subscription = self.client.auth.on_auth_state_change(handler)
        return _SupabaseSubscription(subscription)
