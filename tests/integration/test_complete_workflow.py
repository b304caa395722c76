"""
Integration tests for complete workflow.

Tests the end-to-end flow from account creation through CSV import,
bulk document upload and export, on the in-memory backend.
"""

import io
import zipfile
from datetime import date

import pytest

from config.app_context import create_app_context
from config.settings import Settings
from data import create_backend
from domain.exceptions import AuthError
from operations import (
    build_template_csv,
    check_connection,
    export_all,
    filter_articles,
    get_import_summary,
    get_initial_session,
    get_latest_sheets,
    get_next_version,
    handle_operation_error,
    import_articles,
    load_all_sheets,
    load_articles,
    load_sheets_for_article,
    parse_articles_csv,
    scan_zip_archive,
    sign_in,
    sign_up,
    upload_documents,
    upload_safety_sheet,
    validate_document_articles,
)


# ==================== Fixtures ====================


@pytest.fixture
def backend():
    """Create in-memory backend for testing."""
    return create_backend("memory")


@pytest.fixture
def app_context(backend, tmp_path):
    """Signed-in application context."""
    sign_up(backend.auth, "admin@example.com", "geheim123")
    session = sign_in(backend.auth, "admin@example.com", "geheim123")

    settings = Settings(backend="memory", export_dir=tmp_path / "exports")
    return create_app_context(
        backend.database,
        backend.storage,
        backend.auth,
        settings=settings,
        session=session,
    )


@pytest.fixture
def documents_zip():
    """Bulk upload archive for the template articles."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("VH-001_NL_V1.pdf", b"%PDF helm nl")
        archive.writestr("VH-001_EN_V1.pdf", b"%PDF helm en")
        archive.writestr("bladen/WH-002_DE_V3.docx", b"docx handschoen")
        archive.writestr("XX-999_NL_V1.pdf", b"%PDF onbekend")
        archive.writestr("README.txt", b"uitleg")
    return buffer.getvalue()


# ==================== Workflow Tests ====================


def test_complete_workflow_end_to_end(app_context, documents_zip, tmp_path):
    """
    Test complete workflow:
    1. Restore session
    2. Import articles from template
    3. Bulk upload documents
    4. Upload next version manually
    5. Check latest sheets
    6. Export everything
    """
    db, storage = app_context.database, app_context.storage

    # Step 1: Session survives a restart
    restored = get_initial_session(app_context.auth, timeout=1.0)
    assert restored.email == app_context.user_email == "admin@example.com"

    # Step 2: Import template articles
    rows = parse_articles_csv(build_template_csv())
    summary = get_import_summary(import_articles(db, rows))
    assert summary["success"] == 3
    assert summary["duplicate_count"] == 0

    articles = load_articles(db)
    assert {a.unieke_id for a in articles} == {"VH-001", "WH-002", "VB-003"}
    assert [a.unieke_id for a in filter_articles(articles, "latex")] == ["WH-002"]

    # Step 3: Bulk upload
    entries = validate_document_articles(db, scan_zip_archive(documents_zip))
    result = upload_documents(db, storage, entries)

    assert result["uploaded"] == 3
    assert result["failed"] == 0
    assert result["error"] == 2  # XX-999 unknown, README.txt invalid name
    assert len(load_all_sheets(db)) == 3

    # Step 4: Next Dutch version for the helmet
    helmet_sheets = load_sheets_for_article(db, "VH-001")
    assert get_next_version(helmet_sheets, "NL") == "2.0"

    upload_safety_sheet(db, storage, "VH-001", "FR", "1.0", "helm_fr.pdf", b"%PDF helm fr")

    # Step 5: Latest per language
    latest = get_latest_sheets(load_sheets_for_article(db, "VH-001"))
    assert latest["NL"].versie == "1"
    assert latest["EN"].bestandsnaam == "VH-001_EN_V1.pdf"
    assert latest["FR"].versie == "1.0"
    assert latest["DE"] is None
    assert storage.download("veiligheidsbladen/WH-002/DE/latest/veiligheidsblad.docx") == b"docx handschoen"

    # Step 6: Export
    files = export_all(db, date(2025, 3, 1))
    assert files["artikelen_export_2025-03-01.csv"][1] == 3
    assert files["veiligheidsbladen_export_2025-03-01.csv"][1] == 4

    sheet_csv = files["veiligheidsbladen_export_2025-03-01.csv"][0].decode("utf-8-sig")
    assert "Veiligheidshelm Standaard" in sheet_csv
    assert "Werkhandschoenen Latex" in sheet_csv


def test_workflow_reimport_reports_duplicates(app_context):
    """Importing the same file twice inserts nothing the second time."""
    db = app_context.database
    import_articles(db, parse_articles_csv(build_template_csv()))

    summary = get_import_summary(import_articles(db, parse_articles_csv(build_template_csv())))

    assert summary["success"] == 0
    assert summary["duplicates"] == ["Rij 2: VH-001", "Rij 3: WH-002", "Rij 4: VB-003"]
    assert len(load_articles(db)) == 3


def test_workflow_bulk_upload_twice(app_context, documents_zip):
    """Uploading the same archive again fails per file on existing versions."""
    db, storage = app_context.database, app_context.storage
    import_articles(db, parse_articles_csv(build_template_csv()))

    upload_documents(db, storage, validate_document_articles(db, scan_zip_archive(documents_zip)))
    second = upload_documents(db, storage, validate_document_articles(db, scan_zip_archive(documents_zip)))

    assert second["uploaded"] == 0
    assert second["failed"] == 3
    assert len(load_all_sheets(db)) == 3


# ==================== Session Tests ====================


def test_workflow_auth_error_ends_session(app_context):
    """An auth failure during work clears the session everywhere."""
    error = AuthError("JWT expired", status=401)

    context = handle_operation_error(app_context, error)

    assert not context.has_session()
    assert get_initial_session(context.auth, timeout=1.0) is None
    with pytest.raises(AuthError):
        context.require_session()

    status = check_connection(context.auth, context.database)
    assert status.session_message == "Geen actieve sessie"
    assert status.database_ok
