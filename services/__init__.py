"""
Services layer for Veiligheidsbladen Beheer.

Infrastructure services that support operations and UI layers.
"""

from .csv_service import CsvReader, write_csv
from .zip_service import validate_zip_file, read_zip_entries, build_example_zip
from .file_service import FileService, guess_content_type
from .pdf_utils import validate_pdf

__all__ = [
    # CSV
    "CsvReader",
    "write_csv",
    # ZIP
    "validate_zip_file",
    "read_zip_entries",
    "build_example_zip",
    # Files
    "FileService",
    "guess_content_type",
    # PDF
    "validate_pdf",
]
