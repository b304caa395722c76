"""
In-memory backend for Veiligheidsbladen Beheer.

Implements DatabaseInterface, StorageInterface and AuthInterface without
any network access. Used for offline demos (VBB_BACKEND=memory) and as the
backend for operation and integration tests.

Behaves like the hosted backend where it matters:
- unieke_id is unique (DatabaseError with code 23505)
- storage refuses to overwrite an object unless upsert=True
- wrong credentials raise AuthError with status 400
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from config.constants import (
    ARTICLE_TABLE,
    DEFAULT_USER_ROLE,
    SAFETY_SHEET_TABLE,
    STORAGE_BUCKET,
    UNIQUE_VIOLATION_CODE,
)
from domain.exceptions import AuthError, DatabaseError, StorageError
from domain.models import AuthSession, AuthUser
from .interface import AuthInterface, AuthSubscription, DatabaseInterface, StorageInterface

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _sorted(rows: List[Dict[str, Any]], order_by: str, descending: bool, limit: Optional[int]):
    result = sorted(rows, key=lambda r: str(r.get(order_by) or ""), reverse=descending)
    if limit is not None:
        result = result[:limit]
    return [dict(r) for r in result]


class InMemoryDatabase(DatabaseInterface):
    """Dict-backed table store."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            ARTICLE_TABLE: [],
            SAFETY_SHEET_TABLE: [],
        }
        logger.info("In-memory database initialized")

    # ==================== Article Operations ====================

    def list_articles(self, order_by="created_at", descending=True, limit=None):
        return _sorted(self.tables[ARTICLE_TABLE], order_by, descending, limit)

    def get_article(self, unieke_id):
        for row in self.tables[ARTICLE_TABLE]:
            if row["unieke_id"] == unieke_id:
                return dict(row)
        return None

    def find_existing_unique_ids(self, unieke_ids: Iterable[str]) -> Set[str]:
        wanted = set(unieke_ids)
        return {row["unieke_id"] for row in self.tables[ARTICLE_TABLE] if row["unieke_id"] in wanted}

    def insert_article(self, row):
        if not row.get("unieke_id") or not row.get("naam"):
            raise DatabaseError(
                'null value in column violates not-null constraint',
                details={"details": "naam and unieke_id are required"},
                code="23502",
            )

        if self.get_article(row["unieke_id"]) is not None:
            raise DatabaseError(
                'duplicate key value violates unique constraint "artikelen_unieke_id_key"',
                details={"details": f"Key (unieke_id)=({row['unieke_id']}) already exists."},
                code=UNIQUE_VIOLATION_CODE,
            )

        now = _now_iso()
        stored = {
            "id": str(uuid.uuid4()),
            "unieke_id": row["unieke_id"],
            "naam": row["naam"],
            "referentie_rubix": row.get("referentie_rubix"),
            "referentie_fabrikant": row.get("referentie_fabrikant"),
            "ean": row.get("ean"),
            "created_at": now,
            "updated_at": now,
        }
        self.tables[ARTICLE_TABLE].append(stored)
        logger.debug(f"Inserted article {stored['unieke_id']}")
        return dict(stored)

    # ==================== Safety Sheet Operations ====================

    def list_safety_sheets(self, order_by="geupload_op", descending=True, limit=None):
        return _sorted(self.tables[SAFETY_SHEET_TABLE], order_by, descending, limit)

    def get_safety_sheets_for_article(self, artikel_id):
        rows = [r for r in self.tables[SAFETY_SHEET_TABLE] if r["artikel_id"] == artikel_id]
        return _sorted(rows, "geupload_op", True, None)

    def insert_safety_sheet(self, row):
        for column in ("artikel_id", "taal", "versie", "storage_path"):
            if not row.get(column):
                raise DatabaseError(
                    'null value in column violates not-null constraint',
                    details={"details": f"column {column} is required"},
                    code="23502",
                )

        stored = dict(row)
        stored["id"] = str(uuid.uuid4())
        stored["geupload_op"] = row.get("geupload_op") or _now_iso()
        self.tables[SAFETY_SHEET_TABLE].append(stored)
        logger.debug(f"Inserted safety sheet {stored['storage_path']}")
        return dict(stored)

    # ==================== Utility Operations ====================

    def ping(self):
        return min(len(self.tables[ARTICLE_TABLE]), 1)


class InMemoryStorage(StorageInterface):
    """Dict-backed object storage for one bucket."""

    def __init__(self, bucket: str = STORAGE_BUCKET):
        self.bucket = bucket
        self.objects: Dict[str, Tuple[bytes, str]] = {}

    def upload(self, path, data, content_type, upsert=False):
        if path in self.objects and not upsert:
            raise StorageError(
                "The resource already exists",
                details={"path": path, "bucket": self.bucket},
            )
        self.objects[path] = (bytes(data), content_type)
        logger.debug(f"Stored object {path} ({len(data)} bytes, upsert={upsert})")
        return path

    def get_public_url(self, path):
        return f"memory://{self.bucket}/{path}"

    def create_signed_url(self, path, expires_in):
        if path not in self.objects:
            raise StorageError("Object not found", details={"path": path})
        token = uuid.uuid4().hex
        return f"memory://{self.bucket}/{path}?token={token}&expires_in={expires_in}"

    def download(self, path):
        if path not in self.objects:
            raise StorageError("Object not found", details={"path": path})
        return self.objects[path][0]


class _Subscription(AuthSubscription):
    def __init__(self, listeners: List[Callable], callback: Callable):
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self):
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class InMemoryAuth(AuthInterface):
    """Email/password accounts held in memory."""

    def __init__(self):
        self._accounts: Dict[str, Tuple[str, AuthUser]] = {}
        self._session: Optional[AuthSession] = None
        self._listeners: List[Callable[[str, Any], None]] = []

    def _emit(self, event: str):
        for callback in list(self._listeners):
            callback(event, self._session)

    def get_session(self):
        return self._session

    def sign_in_with_password(self, email, password):
        account = self._accounts.get(email.strip().lower())
        if account is None or account[0] != password:
            raise AuthError("Invalid login credentials", status=400)

        self._session = AuthSession(
            user=account[1],
            access_token=uuid.uuid4().hex,
            refresh_token=uuid.uuid4().hex,
        )
        self._emit("SIGNED_IN")
        return self._session

    def sign_up(self, email, password):
        key = email.strip().lower()
        if key in self._accounts:
            raise AuthError("User already registered", status=422)

        user = AuthUser(
            id=str(uuid.uuid4()),
            email=key,
            role=DEFAULT_USER_ROLE,
            created_at=datetime.now(timezone.utc),
        )
        self._accounts[key] = (password, user)
        logger.info(f"Account created: {key}")
        return user

    def sign_out(self):
        self._session = None
        self._emit("SIGNED_OUT")

    def on_auth_state_change(self, callback):
        self._listeners.append(callback)
        return _Subscription(self._listeners, callback)
