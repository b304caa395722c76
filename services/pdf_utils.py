"""
PDF Utilities for safety sheet uploads.

Checks that uploaded PDF documents can be opened before they are sent
to object storage.
"""

import io
import logging
from pathlib import Path
from typing import Union

from pypdf import PdfReader

logger = logging.getLogger(__name__)


def _open(source: Union[Path, bytes]) -> PdfReader:
    if isinstance(source, (bytes, bytearray)):
        return PdfReader(io.BytesIO(source))
    return PdfReader(str(source))


def validate_pdf(source: Union[Path, bytes]) -> bool:
    """
    Check that a file is a readable PDF.

    Args:
        source: Path to PDF or PDF bytes

    Returns:
        True if valid PDF with at least one page, False otherwise
    """
    if isinstance(source, Path):
        if not source.exists():
            logger.warning(f"File does not exist: {source}")
            return False
        if source.suffix.lower() != ".pdf":
            logger.warning(f"Not a PDF: {source}")
            return False

    try:
        return len(_open(source).pages) > 0
    except Exception as e:
        logger.warning(f"Invalid PDF: {e}")
        return False
