"""
Unit tests for the in-memory backend.

Tests cover table constraints, storage overwrite rules and auth events.
"""

import pytest

from config.constants import UNIQUE_VIOLATION_CODE
from data import create_backend
from data.memory_backend import InMemoryAuth, InMemoryDatabase, InMemoryStorage
from domain.exceptions import AuthError, DatabaseError, StorageError


# ==================== Fixtures ====================


@pytest.fixture
def db():
    """Create in-memory database for testing."""
    return InMemoryDatabase()


@pytest.fixture
def storage():
    """Create in-memory storage for testing."""
    return InMemoryStorage("test-bucket")


@pytest.fixture
def auth():
    """Create in-memory auth with one account."""
    service = InMemoryAuth()
    service.sign_up("admin@example.com", "geheim123")
    return service


# ==================== Database Tests ====================


def test_insert_article_assigns_id_and_timestamps(db):
    """Test backend-assigned fields."""
    row = db.insert_article({"unieke_id": "VH-001", "naam": "Helm"})

    assert row["id"]
    assert row["created_at"]
    assert row["updated_at"] == row["created_at"]
    assert row["referentie_rubix"] is None


def test_insert_article_duplicate_unique_id(db):
    """Test unique constraint on unieke_id."""
    db.insert_article({"unieke_id": "VH-001", "naam": "Helm"})

    with pytest.raises(DatabaseError) as exc_info:
        db.insert_article({"unieke_id": "VH-001", "naam": "Andere helm"})

    assert exc_info.value.code == UNIQUE_VIOLATION_CODE
    assert "VH-001" in exc_info.value.details["details"]


def test_insert_article_requires_fields(db):
    """Test not-null constraint."""
    with pytest.raises(DatabaseError) as exc_info:
        db.insert_article({"unieke_id": "VH-001"})

    assert exc_info.value.code == "23502"


def test_list_articles_ordering_and_limit(db):
    """Test ordering on a column and limit."""
    db.tables["artikelen"].extend([
        {"id": "1", "unieke_id": "A", "naam": "a", "created_at": "2025-01-01T00:00:00+00:00"},
        {"id": "2", "unieke_id": "B", "naam": "b", "created_at": "2025-03-01T00:00:00+00:00"},
        {"id": "3", "unieke_id": "C", "naam": "c", "created_at": "2025-02-01T00:00:00+00:00"},
    ])

    assert [r["unieke_id"] for r in db.list_articles()] == ["B", "C", "A"]
    assert [r["unieke_id"] for r in db.list_articles(descending=False, limit=2)] == ["A", "C"]


def test_list_articles_returns_copies(db):
    """Changing a returned row does not change the table."""
    db.insert_article({"unieke_id": "VH-001", "naam": "Helm"})

    db.list_articles()[0]["naam"] = "Gewijzigd"

    assert db.get_article("VH-001")["naam"] == "Helm"


def test_find_existing_unique_ids(db):
    """Test existence lookup."""
    db.insert_article({"unieke_id": "VH-001", "naam": "Helm"})
    db.insert_article({"unieke_id": "VB-003", "naam": "Bril"})

    assert db.find_existing_unique_ids(["VH-001", "XX-999"]) == {"VH-001"}
    assert db.find_existing_unique_ids([]) == set()


def test_safety_sheets_per_article(db):
    """Test sheet insert and per-article listing (newest first)."""
    db.insert_safety_sheet({
        "artikel_id": "VH-001", "taal": "NL", "versie": "1",
        "storage_path": "p1", "bestandsnaam": "a.pdf",
        "geupload_op": "2025-01-01T00:00:00+00:00",
    })
    db.insert_safety_sheet({
        "artikel_id": "VH-001", "taal": "NL", "versie": "2",
        "storage_path": "p2", "bestandsnaam": "b.pdf",
        "geupload_op": "2025-02-01T00:00:00+00:00",
    })
    db.insert_safety_sheet({
        "artikel_id": "VB-003", "taal": "EN", "versie": "1",
        "storage_path": "p3", "bestandsnaam": "c.pdf",
    })

    rows = db.get_safety_sheets_for_article("VH-001")

    assert [r["versie"] for r in rows] == ["2", "1"]
    assert len(db.list_safety_sheets()) == 3


def test_insert_safety_sheet_requires_fields(db):
    """Test not-null constraint on sheets."""
    with pytest.raises(DatabaseError):
        db.insert_safety_sheet({"artikel_id": "VH-001", "taal": "NL", "versie": "1"})


def test_ping(db):
    """Test ping returns at most one row."""
    assert db.ping() == 0
    db.insert_article({"unieke_id": "A", "naam": "a"})
    db.insert_article({"unieke_id": "B", "naam": "b"})
    assert db.ping() == 1


# ==================== Storage Tests ====================


def test_upload_without_upsert_refuses_overwrite(storage):
    """Existing objects are only replaced with upsert=True."""
    storage.upload("a/b.pdf", b"one", "application/pdf")

    with pytest.raises(StorageError, match="already exists"):
        storage.upload("a/b.pdf", b"two", "application/pdf")

    storage.upload("a/b.pdf", b"three", "application/pdf", upsert=True)
    assert storage.download("a/b.pdf") == b"three"


def test_urls(storage):
    """Test public and signed URLs."""
    storage.upload("a/b.pdf", b"data", "application/pdf")

    assert storage.get_public_url("a/b.pdf") == "memory://test-bucket/a/b.pdf"
    assert storage.create_signed_url("a/b.pdf", 60).startswith("memory://test-bucket/a/b.pdf?token=")

    with pytest.raises(StorageError):
        storage.create_signed_url("missing.pdf", 60)


# ==================== Auth Tests ====================


def test_sign_in_success(auth):
    """Test sign in creates a session."""
    session = auth.sign_in_with_password("Admin@Example.com", "geheim123")

    assert session.email == "admin@example.com"
    assert session.user.role == "admin"
    assert auth.get_session() is session


def test_sign_in_wrong_password(auth):
    """Test rejected credentials."""
    with pytest.raises(AuthError) as exc_info:
        auth.sign_in_with_password("admin@example.com", "fout")

    assert exc_info.value.status == 400
    assert auth.get_session() is None


def test_sign_up_duplicate(auth):
    """Test registering an existing email."""
    with pytest.raises(AuthError) as exc_info:
        auth.sign_up("admin@example.com", "anders123")

    assert exc_info.value.status == 422


def test_auth_events(auth):
    """Test subscription receives sign in/out events until unsubscribed."""
    events = []
    subscription = auth.on_auth_state_change(lambda event, session: events.append(event))

    auth.sign_in_with_password("admin@example.com", "geheim123")
    auth.sign_out()
    subscription.unsubscribe()
    auth.sign_in_with_password("admin@example.com", "geheim123")

    assert events == ["SIGNED_IN", "SIGNED_OUT"]


# ==================== Factory Tests ====================


def test_create_backend_memory():
    """Test factory for the offline backend."""
    backend = create_backend("memory", bucket="docs")

    assert isinstance(backend.database, InMemoryDatabase)
    assert isinstance(backend.auth, InMemoryAuth)
    assert backend.storage.bucket == "docs"


def test_create_backend_unknown():
    """Test unknown backend name."""
    with pytest.raises(ValueError):
        create_backend("sqlite")


def test_create_backend_supabase_requires_credentials():
    """Test missing URL/key."""
    with pytest.raises(ValueError):
        create_backend("supabase", url=None, key=None)
