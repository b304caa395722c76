"""
Unit tests for CSV Service.

Tests cover tolerant article CSV reading and CSV writing with BOM.
"""

import pytest

from domain.exceptions import ImportValidationError, ValidationError
from services.csv_service import BOM, CsvReader, write_csv


# ==================== Reading Tests ====================


def test_read_articles_basic():
    """Test reading required and optional columns."""
    content = (
        "naam,unieke_id,referentie_rubix,referentie_fabrikant,ean\n"
        "Helm,VH-001,RUB-1,FAB-1,1234567890123\n"
        "Bril,VB-003,,,\n"
    )

    rows = CsvReader(content).read_articles()

    assert len(rows) == 2
    assert rows[0].naam == "Helm"
    assert rows[0].unieke_id == "VH-001"
    assert rows[0].referentie_rubix == "RUB-1"
    assert rows[0].referentie_fabrikant == "FAB-1"
    assert rows[0].ean == "1234567890123"
    assert rows[1].referentie_rubix is None
    assert rows[1].ean is None


def test_read_articles_row_numbers_match_file():
    """Header is row 1, first data row is row 2."""
    content = "naam,unieke_id\nA,ID-1\nB,ID-2\nC,ID-3\n"

    rows = CsvReader(content).read_articles()

    assert [r.row_number for r in rows] == [2, 3, 4]


def test_read_articles_header_case_and_order():
    """Test columns in any order and letter case."""
    content = "EAN,Unieke_ID,NAAM\n00123,X-1,Handschoen\n"

    rows = CsvReader(content).read_articles()

    assert rows[0].naam == "Handschoen"
    assert rows[0].unieke_id == "X-1"
    assert rows[0].ean == "00123"  # Leading zeros kept


def test_read_articles_strips_quotes_and_whitespace():
    """Test quoted values with surrounding spaces."""
    content = 'naam,unieke_id\n"Helm, geel",   "VH-001"\n'

    rows = CsvReader(content).read_articles()

    assert rows[0].naam == "Helm, geel"
    assert rows[0].unieke_id == "VH-001"


def test_read_articles_keeps_quotes_inside_values():
    """Escaped quotes at the start or end of a value are kept."""
    content = 'naam,unieke_id,referentie_rubix\n"Helm ""Pro""",VH-001,"""A"" serie"\n'

    rows = CsvReader(content).read_articles()

    assert rows[0].naam == 'Helm "Pro"'
    assert rows[0].referentie_rubix == '"A" serie'


def test_read_articles_accepts_bom_bytes():
    """Test UTF-8 content with byte order mark."""
    content = (BOM + "naam,unieke_id\nVeiligheidsbril,VB-003\n").encode("utf-8")

    rows = CsvReader(content).read_articles()

    assert rows[0].naam == "Veiligheidsbril"


def test_read_articles_ragged_rows():
    """Missing cells become empty, surplus cells are dropped."""
    content = (
        "naam,unieke_id,referentie_rubix\n"
        "Helm,VH-001\n"
        "Bril,VB-003,RUB-3,extra,cells\n"
    )

    rows = CsvReader(content).read_articles()

    assert len(rows) == 2
    assert rows[0].referentie_rubix is None
    assert rows[1].referentie_rubix == "RUB-3"


def test_read_articles_skips_rows_without_required_values():
    """Rows without naam or unieke_id are skipped."""
    content = "naam,unieke_id\nHelm,VH-001\n,NO-NAME\nNo id,\n"

    rows = CsvReader(content).read_articles()

    assert [r.unieke_id for r in rows] == ["VH-001"]


def test_read_articles_ignores_unknown_columns():
    """Test extra columns."""
    content = "naam,opmerking,unieke_id\nHelm,nieuw,VH-001\n"

    rows = CsvReader(content).read_articles()

    assert rows[0].unieke_id == "VH-001"


def test_read_articles_missing_required_column():
    """Test missing unieke_id column."""
    content = "naam,ean\nHelm,123\n"

    with pytest.raises(ImportValidationError) as exc_info:
        CsvReader(content).read_articles()

    assert "unieke_id" in exc_info.value.message
    assert exc_info.value.details["missing"] == ["unieke_id"]


def test_read_articles_empty_file():
    """Test empty content and header-only content."""
    with pytest.raises(ImportValidationError):
        CsvReader("").read_articles()

    with pytest.raises(ImportValidationError):
        CsvReader("naam,unieke_id\n").read_articles()


def test_from_file_requires_csv_extension(tmp_path):
    """Test non-CSV file."""
    path = tmp_path / "artikelen.txt"
    path.write_text("naam,unieke_id\nA,B\n")

    with pytest.raises(ValidationError):
        CsvReader.from_file(path)


def test_from_file_reads_content(tmp_path):
    """Test reading from disk."""
    path = tmp_path / "artikelen.csv"
    path.write_text("naam,unieke_id\nHelm,VH-001\n", encoding="utf-8")

    reader = CsvReader.from_file(path)

    assert reader.source == "artikelen.csv"
    assert reader.read_articles()[0].unieke_id == "VH-001"


# ==================== Writing Tests ====================


def test_write_csv_prepends_bom():
    """Exported files start with a byte order mark."""
    content = write_csv([{"naam": "Helm", "unieke_id": "VH-001"}], ["naam", "unieke_id"])

    assert content.startswith(BOM.encode("utf-8"))
    assert content.decode("utf-8").lstrip(BOM).splitlines() == ["naam,unieke_id", "Helm,VH-001"]


def test_write_csv_quotes_special_values():
    """Commas and quotes are quoted, embedded quotes doubled."""
    rows = [{"naam": 'Helm "Pro", geel', "unieke_id": "VH-001"}]

    text = write_csv(rows, ["naam", "unieke_id"]).decode("utf-8")

    assert '"Helm ""Pro"", geel",VH-001' in text


def test_write_csv_none_becomes_empty():
    """Test None values and column order."""
    rows = [{"unieke_id": "VH-001", "naam": "Helm", "ean": None}]

    text = write_csv(rows, ["naam", "unieke_id", "ean"]).decode("utf-8").lstrip(BOM)

    assert text.splitlines()[1] == "Helm,VH-001,"


def test_write_then_read_preserves_values():
    """Test written CSV can be read back."""
    rows = [
        {"naam": 'Helm "Pro", geel', "unieke_id": "VH-001", "ean": "0012"},
        {"naam": "Bril", "unieke_id": "VB-003", "ean": None},
    ]

    content = write_csv(rows, ["naam", "unieke_id", "ean"])
    parsed = CsvReader(content).read_articles()

    assert [(r.naam, r.unieke_id, r.ean) for r in parsed] == [
        ('Helm "Pro", geel', "VH-001", "0012"),
        ("Bril", "VB-003", None),
    ]
