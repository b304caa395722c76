"""
Unit tests for ZIP Service.
"""

import io
import zipfile

import pytest

from domain.exceptions import ImportValidationError
from domain.rules import parse_document_filename
from operations.document_ops import scan_zip_archive
from services import zip_service
from services.zip_service import build_example_zip, read_zip_entries, validate_zip_file


# ==================== Validation Tests ====================


def test_validate_zip_file_success(tmp_path):
    """Test valid archive name, case-insensitive."""
    path = tmp_path / "bladen.ZIP"
    path.write_bytes(build_example_zip())

    assert validate_zip_file(path) == path


def test_validate_zip_file_wrong_extension(tmp_path):
    """Test other file types."""
    path = tmp_path / "bladen.7z"
    path.write_bytes(b"x")

    with pytest.raises(ImportValidationError, match="Alleen ZIP bestanden zijn toegestaan"):
        validate_zip_file(path)


def test_validate_zip_file_missing(tmp_path):
    """Test missing archive."""
    with pytest.raises(ImportValidationError, match="bestaat niet"):
        validate_zip_file(tmp_path / "weg.zip")


def test_validate_zip_file_too_large(tmp_path):
    """Test archive above 50 MB."""
    path = tmp_path / "groot.zip"
    with open(path, "wb") as f:
        f.truncate(51 * 1024 * 1024)

    with pytest.raises(ImportValidationError) as exc_info:
        validate_zip_file(path)

    assert "50" in exc_info.value.message
    assert exc_info.value.details["size_mb"] == 51.0


# ==================== Read Tests ====================


def test_read_zip_entries_skips_folders_and_macos_files(tmp_path):
    """Test basenames, directory entries and __MACOSX."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("submap/", b"")
        archive.writestr("submap/ART001_NL_V1.pdf", b"one")
        archive.writestr("__MACOSX/submap/._ART001_NL_V1.pdf", b"fork")
        archive.writestr("ART002_DE_V3.docx", b"two")

    entries = read_zip_entries(buffer.getvalue())

    assert entries == [("ART001_NL_V1.pdf", b"one"), ("ART002_DE_V3.docx", b"two")]

    path = tmp_path / "bladen.zip"
    path.write_bytes(buffer.getvalue())
    assert read_zip_entries(path) == entries


def test_read_zip_entries_bad_archive():
    """Test unreadable content."""
    with pytest.raises(ImportValidationError, match="Kon ZIP bestand niet lezen"):
        read_zip_entries(b"dit is geen zip")


def _single_entry_zip(content=b"%PDF inhoud"):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("ART001_NL_V1.pdf", content)
    return bytearray(buffer.getvalue())


def _patch_headers(data, local_offset, central_offset, patch):
    """Apply patch(data, position) to the local and central header field."""
    for signature, offset in ((b"PK\x03\x04", local_offset), (b"PK\x01\x02", central_offset)):
        position = data.find(signature)
        patch(data, position + offset)
    return bytes(data)


def _set_encrypted_flag(data, position):
    data[position] |= 0x01


def _set_unknown_compression(data, position):
    data[position:position + 2] = (99).to_bytes(2, "little")


def test_read_zip_entries_encrypted_entry():
    """Password protected entries are reported, not raised as RuntimeError."""
    content = _patch_headers(_single_entry_zip(), 6, 8, _set_encrypted_flag)

    with pytest.raises(ImportValidationError, match="Kon ZIP bestand niet lezen") as exc_info:
        read_zip_entries(content)

    assert exc_info.value.details["error"] == "RuntimeError"

    with pytest.raises(ImportValidationError):
        scan_zip_archive(content)


def test_read_zip_entries_unsupported_compression():
    """Unknown compression method is reported as unreadable archive."""
    content = _patch_headers(_single_entry_zip(), 8, 10, _set_unknown_compression)

    with pytest.raises(ImportValidationError) as exc_info:
        read_zip_entries(content)

    assert exc_info.value.details["error"] == "NotImplementedError"


def test_read_zip_entries_uncompressed_size_limit(monkeypatch):
    """Archives that expand beyond the limit are rejected before extraction."""
    monkeypatch.setattr(zip_service, "MAX_ZIP_UNCOMPRESSED_MB", 0.01)
    content = bytes(_single_entry_zip(b"0" * (64 * 1024)))

    assert len(content) < 10 * 1024

    with pytest.raises(ImportValidationError, match="Uitgepakte inhoud") as exc_info:
        read_zip_entries(content)

    assert exc_info.value.details["uncompressed_mb"] == 0.1


# ==================== Example Archive Tests ====================


def test_build_example_zip():
    """Example archive holds three valid names and a README."""
    entries = dict(read_zip_entries(build_example_zip()))

    assert set(entries) == {"ART001_NL_V1.pdf", "ART001_EN_V1.pdf", "ART002_NL_V2.pdf", "README.txt"}
    assert b"{artikel_id}_{taal}_V{versie}.{extensie}" in entries["README.txt"]

    parsed = [parse_document_filename(name) for name in entries if name.endswith(".pdf")]
    assert all(p.is_valid for p in parsed)
    assert not parse_document_filename("README.txt").is_valid
