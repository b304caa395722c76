"""
Unit tests for business rules.

Tests cover bulk upload filename parsing, latest-version derivation,
version suggestions, auth error classification and storage paths.
"""

from datetime import datetime, timedelta, timezone

import pytest

from config.constants import ERROR_MESSAGES
from domain.exceptions import AuthError, DatabaseError
from domain.models import Article, SafetySheet
from domain.rules import (
    build_latest_path,
    build_version_path,
    get_latest_sheet,
    get_latest_sheets_by_language,
    group_sheets_by_article,
    is_auth_error,
    matches_search,
    parse_document_filename,
    suggest_next_version,
)


# ==================== Fixtures ====================


@pytest.fixture
def sheets():
    """Three NL versions and one EN version of ART001."""
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def sheet(taal, versie, days):
        return SafetySheet(
            artikel_id="ART001",
            taal=taal,
            versie=versie,
            storage_path=build_version_path("ART001", taal, versie, "pdf"),
            bestandsnaam=f"ART001_{taal}_V{versie}.pdf",
            geupload_op=base + timedelta(days=days),
        )

    return [
        sheet("NL", "1", 0),
        sheet("NL", "3", 10),
        sheet("NL", "2", 5),
        sheet("EN", "1", 2),
    ]


# ==================== Filename Parsing Tests ====================


def test_parse_filename_valid_example():
    """Test the canonical valid filename."""
    parsed = parse_document_filename("ART001_NL_V1.pdf")

    assert parsed.is_valid is True
    assert parsed.artikel_id == "ART001"
    assert parsed.taal == "NL"
    assert parsed.versie == "1"
    assert parsed.extensie == "pdf"
    assert parsed.error is None


def test_parse_filename_unsupported_language():
    """Test unknown language code."""
    parsed = parse_document_filename("ART2_XX_V1.pdf")

    assert parsed.is_valid is False
    assert parsed.reason == "unsupported_language"
    assert parsed.error == ERROR_MESSAGES["unsupported_language"]


def test_parse_filename_wrong_field_count():
    """Test name without underscores."""
    parsed = parse_document_filename("noUnderscore.pdf")

    assert parsed.is_valid is False
    assert parsed.reason == "wrong_field_count"


def test_parse_filename_missing_version_prefix():
    """Test version token without leading V."""
    parsed = parse_document_filename("ART1_NL_1.pdf")

    assert parsed.is_valid is False
    assert parsed.reason == "bad_version"
    assert parsed.artikel_id == "ART1"


def test_parse_filename_unsupported_extension():
    """Test executable file."""
    parsed = parse_document_filename("file.exe")

    assert parsed.is_valid is False
    assert parsed.reason == "unsupported_extension"


def test_parse_filename_missing_extension():
    """Test name without dot."""
    parsed = parse_document_filename("ART001_NL_V1")

    assert parsed.is_valid is False
    assert parsed.reason == "missing_extension"


@pytest.mark.parametrize("artikel_id", ["ART001", "CHEM-42", "x"])
@pytest.mark.parametrize("taal", ["NL", "EN", "FR", "DE", "nl", "De"])
@pytest.mark.parametrize("versie", ["1", "2", "10"])
@pytest.mark.parametrize("extension", ["pdf", "doc", "docx", "PDF"])
def test_parse_filename_valid_pattern(artikel_id, taal, versie, extension):
    """Every ID_LANG_Vn.ext with a supported language and extension parses."""
    parsed = parse_document_filename(f"{artikel_id}_{taal}_V{versie}.{extension}")

    assert parsed.is_valid is True
    assert parsed.artikel_id == artikel_id
    assert parsed.taal == taal.upper()
    assert parsed.versie == versie
    assert parsed.extensie == extension.lower()


def test_parse_filename_version_must_be_numeric():
    """Test V followed by letters."""
    assert parse_document_filename("ART001_NL_Vx.pdf").reason == "bad_version"
    assert parse_document_filename("ART001_NL_V.pdf").reason == "bad_version"


def test_parse_filename_too_many_parts():
    """Test underscore inside the article ID."""
    parsed = parse_document_filename("ART_001_NL_V1.pdf")

    assert parsed.is_valid is False
    assert parsed.reason == "wrong_field_count"


# ==================== Latest Version Tests ====================


def test_get_latest_sheet_uses_upload_time(sheets):
    """Latest is the most recently uploaded, not the highest version."""
    sheets[1].geupload_op, sheets[2].geupload_op = sheets[2].geupload_op, sheets[1].geupload_op

    latest = get_latest_sheet(sheets, "NL")

    assert latest.versie == "2"


def test_get_latest_sheet_none_for_missing_language(sheets):
    """Test language without uploads."""
    assert get_latest_sheet(sheets, "FR") is None


def test_get_latest_sheet_without_timestamp_is_oldest(sheets):
    """Sheets without timestamp never win from dated ones."""
    undated = SafetySheet("ART001", "NL", "9", "p", "f.pdf", geupload_op=None)

    latest = get_latest_sheet(sheets + [undated], "nl")

    assert latest.versie == "3"


def test_get_latest_sheets_by_language(sheets):
    """Every language appears as key."""
    latest = get_latest_sheets_by_language(sheets)

    assert list(latest.keys()) == ["NL", "EN", "DE", "FR"]
    assert latest["NL"].versie == "3"
    assert latest["EN"].versie == "1"
    assert latest["DE"] is None
    assert latest["FR"] is None


def test_group_sheets_by_article(sheets):
    """Test grouping by article ID."""
    other = SafetySheet("ART002", "DE", "1", "p", "f.pdf")

    grouped = group_sheets_by_article(sheets + [other])

    assert set(grouped) == {"ART001", "ART002"}
    assert len(grouped["ART001"]) == 4
    assert grouped["ART002"] == [other]


# ==================== Version Suggestion Tests ====================


@pytest.mark.parametrize(
    "current, expected",
    [
        (None, "1.0"),
        ("", "1.0"),
        ("1", "2.0"),
        ("2.5", "3.0"),
        ("V4", "5.0"),
        ("abc", "1.0"),
        ("nan", "1.0"),
        ("inf", "1.0"),
    ],
)
def test_suggest_next_version(current, expected):
    """Test next version suggestion."""
    assert suggest_next_version(current) == expected


# ==================== Auth Error Tests ====================


@pytest.mark.parametrize(
    "error",
    [
        AuthError("Invalid Refresh Token: Refresh Token Not Found"),
        DatabaseError("JWT token expired"),
        Exception("Unauthorized"),
        AuthError("something", status=401),
        {"message": "boom", "status": 403},
        {"message": "boom", "code": "400"},
    ],
)
def test_is_auth_error_true(error):
    """Test errors classified as auth related."""
    assert is_auth_error(error) is True


@pytest.mark.parametrize(
    "error",
    [
        None,
        DatabaseError("duplicate key value violates unique constraint", code="23505"),
        Exception("Network unreachable"),
        AuthError("server error", status=500),
        {"message": "not found", "status": 404},
    ],
)
def test_is_auth_error_false(error):
    """Test errors not classified as auth related."""
    assert is_auth_error(error) is False


# ==================== Storage Path Tests ====================


def test_build_version_path():
    """Test versioned object key."""
    assert build_version_path("ART001", "NL", "2", "PDF") == (
        "veiligheidsbladen/ART001/NL/V2/veiligheidsblad.pdf"
    )


def test_build_latest_path():
    """Test latest object key."""
    assert build_latest_path("ART001", "EN", "docx") == (
        "veiligheidsbladen/ART001/EN/latest/veiligheidsblad.docx"
    )


# ==================== Search Tests ====================


def test_matches_search():
    """Test case-insensitive search over all text fields."""
    article = Article(
        unieke_id="VH-001",
        naam="Veiligheidshelm",
        referentie_rubix="RUB-9",
        referentie_fabrikant="FAB-X",
        ean="1234567890123",
    )

    assert matches_search(article, "") is True
    assert matches_search(article, "helm") is True
    assert matches_search(article, "vh-0") is True
    assert matches_search(article, "rub-9") is True
    assert matches_search(article, "fab-x") is True
    assert matches_search(article, "45678") is True
    assert matches_search(article, "handschoen") is False
