"""
Unit tests for the Supabase backend.

The supabase-py client is replaced by a MagicMock; tests check the
queries issued and the error mapping.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from data.supabase_backend import SupabaseAuth, SupabaseDatabase, SupabaseStorage
from domain.exceptions import AuthError, DatabaseError, StorageError


# ==================== Fixtures ====================


@pytest.fixture
def client():
    """Mock supabase-py client."""
    return MagicMock()


@pytest.fixture
def db(client):
    return SupabaseDatabase(client)


@pytest.fixture
def storage(client):
    return SupabaseStorage(client, "safety-docs")


@pytest.fixture
def auth(client):
    return SupabaseAuth(client)


def _response(data):
    return SimpleNamespace(data=data)


# ==================== Database Tests ====================


def test_list_articles_query(db, client):
    """Test select with order, newest first."""
    query = client.table.return_value.select.return_value
    query.order.return_value.execute.return_value = _response([{"unieke_id": "VH-001"}])

    rows = db.list_articles()

    client.table.assert_called_with("artikelen")
    client.table.return_value.select.assert_called_with("*")
    query.order.assert_called_with("created_at", desc=True)
    assert rows == [{"unieke_id": "VH-001"}]


def test_list_articles_with_limit(db, client):
    """Test limit is applied after order."""
    ordered = client.table.return_value.select.return_value.order.return_value
    ordered.limit.return_value.execute.return_value = _response([])

    assert db.list_articles(limit=5) == []
    ordered.limit.assert_called_with(5)


def test_api_error_becomes_database_error(db, client):
    """PostgREST errors keep code, details and hint."""
    error = APIError({
        "message": "permission denied for table artikelen",
        "code": "42501",
        "details": "RLS policy",
        "hint": "Check policies",
    })
    client.table.return_value.select.return_value.order.return_value.execute.side_effect = error

    with pytest.raises(DatabaseError) as exc_info:
        db.list_articles()

    exc = exc_info.value
    assert exc.message == "Fout bij laden artikelen: permission denied for table artikelen"
    assert exc.code == "42501"
    assert exc.hint == "Check policies"
    assert "Code: 42501" in exc.describe()
    assert "Details: RLS policy" in exc.describe()


def test_find_existing_unique_ids_chunks(db, client):
    """IN-filters are sent in chunks of 100."""
    ids = [f"ID-{i}" for i in range(250)]
    in_query = client.table.return_value.select.return_value.in_
    in_query.return_value.execute.side_effect = [
        _response([{"unieke_id": "ID-1"}]),
        _response([{"unieke_id": "ID-150"}]),
        _response([]),
    ]

    existing = db.find_existing_unique_ids(ids)

    assert existing == {"ID-1", "ID-150"}
    assert in_query.call_count == 3
    assert [len(call.args[1]) for call in in_query.call_args_list] == [100, 100, 50]


def test_insert_article_returns_row(db, client):
    """Test insert returns the stored row."""
    client.table.return_value.insert.return_value.execute.return_value = _response(
        [{"id": "uuid-1", "unieke_id": "VH-001", "naam": "Helm"}]
    )

    row = db.insert_article({"unieke_id": "VH-001", "naam": "Helm"})

    client.table.return_value.insert.assert_called_with({"unieke_id": "VH-001", "naam": "Helm"})
    assert row["id"] == "uuid-1"


def test_insert_article_duplicate(db, client):
    """Test unique violation is reported with its code."""
    client.table.return_value.insert.return_value.execute.side_effect = APIError({
        "message": "duplicate key value violates unique constraint",
        "code": "23505",
    })

    with pytest.raises(DatabaseError) as exc_info:
        db.insert_article({"unieke_id": "VH-001", "naam": "Helm"})

    assert exc_info.value.code == "23505"
    assert exc_info.value.message.startswith("Fout bij toevoegen artikel")


def test_insert_without_returned_row(db, client):
    """Test insert that returns no data."""
    client.table.return_value.insert.return_value.execute.return_value = _response([])

    with pytest.raises(DatabaseError):
        db.insert_safety_sheet({"artikel_id": "VH-001"})


def test_sheets_for_article_query(db, client):
    """Test filter on artikel_id, newest first."""
    eq = client.table.return_value.select.return_value.eq
    eq.return_value.order.return_value.execute.return_value = _response([])

    db.get_safety_sheets_for_article("VH-001")

    client.table.assert_called_with("veiligheidsbladen")
    eq.assert_called_with("artikel_id", "VH-001")
    eq.return_value.order.assert_called_with("geupload_op", desc=True)


# ==================== Storage Tests ====================


def test_upload_file_options(storage, client):
    """Test content type, cache control and upsert flag."""
    bucket = client.storage.from_.return_value

    storage.upload("veiligheidsbladen/VH-001/NL/V1/veiligheidsblad.pdf", b"%PDF", "application/pdf")

    client.storage.from_.assert_called_with("safety-docs")
    kwargs = bucket.upload.call_args.kwargs
    assert kwargs["file"] == b"%PDF"
    assert kwargs["file_options"] == {
        "content-type": "application/pdf",
        "cache-control": "3600",
        "upsert": "false",
    }


def test_upload_upsert_and_error(storage, client):
    """Test upsert flag and error mapping."""
    bucket = client.storage.from_.return_value

    storage.upload("a.pdf", b"x", "application/pdf", upsert=True)
    assert bucket.upload.call_args.kwargs["file_options"]["upsert"] == "true"

    bucket.upload.side_effect = Exception("The resource already exists")
    with pytest.raises(StorageError, match="already exists"):
        storage.upload("a.pdf", b"x", "application/pdf")


def test_get_public_url_strips_trailing_question_mark(storage, client):
    """Test public URL cleanup."""
    client.storage.from_.return_value.get_public_url.return_value = "https://x/a.pdf?"

    assert storage.get_public_url("a.pdf") == "https://x/a.pdf"


def test_create_signed_url(storage, client):
    """Test both response key spellings."""
    bucket = client.storage.from_.return_value

    bucket.create_signed_url.return_value = {"signedURL": "https://x/signed"}
    assert storage.create_signed_url("a.pdf", 60) == "https://x/signed"
    bucket.create_signed_url.assert_called_with("a.pdf", 60)

    bucket.create_signed_url.return_value = {"signedUrl": "https://x/signed2"}
    assert storage.create_signed_url("a.pdf", 60) == "https://x/signed2"

    bucket.create_signed_url.return_value = {}
    with pytest.raises(StorageError):
        storage.create_signed_url("a.pdf", 60)


# ==================== Auth Tests ====================


def _gotrue_session(email="admin@example.com"):
    user = SimpleNamespace(id="user-1", email=email, created_at="2025-01-01T10:00:00Z")
    return SimpleNamespace(
        user=user,
        access_token="access",
        refresh_token="refresh",
        expires_at=1735725600,
    )


def test_get_session(auth, client):
    """Test session conversion."""
    client.auth.get_session.return_value = _gotrue_session()

    session = auth.get_session()

    assert session.email == "admin@example.com"
    assert session.user.role == "admin"
    assert session.access_token == "access"


def test_get_session_none(auth, client):
    """Test no persisted session."""
    client.auth.get_session.return_value = None

    assert auth.get_session() is None


def test_sign_in_with_password(auth, client):
    """Test credentials are passed as dict."""
    client.auth.sign_in_with_password.return_value = SimpleNamespace(session=_gotrue_session())

    session = auth.sign_in_with_password("admin@example.com", "geheim123")

    client.auth.sign_in_with_password.assert_called_with(
        {"email": "admin@example.com", "password": "geheim123"}
    )
    assert session.refresh_token == "refresh"


def test_sign_in_error_keeps_status(auth, client):
    """Test auth error mapping."""
    error = Exception("Invalid login credentials")
    error.status = 400
    client.auth.sign_in_with_password.side_effect = error

    with pytest.raises(AuthError) as exc_info:
        auth.sign_in_with_password("admin@example.com", "fout")

    assert exc_info.value.status == 400


def test_on_auth_state_change(auth, client):
    """Test callback receives event name and converted session."""
    received = []
    auth.on_auth_state_change(lambda event, session: received.append((event, session)))

    handler = client.auth.on_auth_state_change.call_args.args[0]
    handler("TOKEN_REFRESHED", _gotrue_session())
    handler("SIGNED_OUT", None)

    assert received[0][0] == "TOKEN_REFRESHED"
    assert received[0][1].email == "admin@example.com"
    assert received[1] == ("SIGNED_OUT", None)
