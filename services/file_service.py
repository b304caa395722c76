"""
File Service for Veiligheidsbladen Beheer.

Handles local file operations - validating selected files, reading
documents for upload and saving exports.
"""

import logging
import mimetypes
from pathlib import Path
from typing import List, Optional, Union

from domain.exceptions import ValidationError
from domain.validators import sanitize_filename
from config.constants import DOCUMENT_CONTENT_TYPES

logger = logging.getLogger(__name__)


def guess_content_type(filename: str) -> str:
    """
    Determine MIME type for an upload.

    Known document extensions map to fixed types; anything else falls
    back to mimetypes, then application/octet-stream.
    """
    extension = Path(filename).suffix.lower().lstrip(".")
    if extension in DOCUMENT_CONTENT_TYPES:
        return DOCUMENT_CONTENT_TYPES[extension]
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


class FileService:
    """
    Service for local file operations.

    Handles:
    - File validation (existence, extension, size)
    - Reading selected files
    - Saving exports without overwriting existing files
    """

    def __init__(self, base_dir: Union[Path, str]):
        """
        Initialize file service.

        Args:
            base_dir: Directory where exports are written
        """
        self.base_dir = Path(base_dir)

    def validate_file(
        self,
        file_path: Path,
        allowed_extensions: Optional[List[str]] = None,
        max_size_mb: Optional[float] = None,
        extension_message: Optional[str] = None,
        size_message: Optional[str] = None,
    ) -> bool:
        """
        Validate file exists and meets requirements.

        Args:
            file_path: Path to file to validate
            allowed_extensions: List of allowed extensions (e.g., ['.pdf', '.csv'])
            max_size_mb: Maximum file size in MB
            extension_message: Message when the extension is not allowed
            size_message: Message when the file is too large

        Returns:
            True if valid

        Raises:
            ValidationError: If file is invalid

        Example:
            >>> service = FileService(Path('./exports'))
            >>> service.validate_file(Path('blad.pdf'), ['.pdf'], 10)
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise ValidationError(
                f"Bestand bestaat niet: {file_path}",
                details={"file_path": str(file_path)}
            )

        if not file_path.is_file():
            raise ValidationError(
                f"Geen bestand: {file_path}",
                details={"file_path": str(file_path)}
            )

        if allowed_extensions:
            if file_path.suffix.lower() not in [ext.lower() for ext in allowed_extensions]:
                raise ValidationError(
                    extension_message
                    or f"Ongeldig bestandstype: {file_path.suffix}. Toegestaan: {', '.join(allowed_extensions)}",
                    details={"file_path": str(file_path), "allowed": allowed_extensions}
                )

        if max_size_mb:
            file_size_mb = file_path.stat().st_size / (1024 * 1024)
            if file_size_mb > max_size_mb:
                raise ValidationError(
                    size_message or f"Bestand is te groot: {file_size_mb:.1f} MB (max {max_size_mb} MB)",
                    details={"file_path": str(file_path), "size_mb": round(file_size_mb, 1)}
                )

        return True

    def read_bytes(self, file_path: Path) -> bytes:
        """
        Read a selected file.

        Raises:
            ValidationError: If the file cannot be read
        """
        try:
            return Path(file_path).read_bytes()
        except OSError as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise ValidationError(
                f"Kon bestand niet lezen: {e}",
                details={"file_path": str(file_path)}
            )

    def save_bytes(self, filename: str, data: bytes) -> Path:
        """
        Write data to base_dir without overwriting.

        An existing file with the same name gets a counter suffix:
        artikelen_export_2025-01-01.csv -> artikelen_export_2025-01-01_1.csv

        Args:
            filename: Target filename
            data: File contents

        Returns:
            Path to written file
        """
        self.base_dir.mkdir(parents=True, exist_ok=True)
        dest_path = self.base_dir / sanitize_filename(filename)

        if dest_path.exists():
            counter = 1
            stem = dest_path.stem
            suffix = dest_path.suffix
            while dest_path.exists():
                dest_path = self.base_dir / f"{stem}_{counter}{suffix}"
                counter += 1

        dest_path.write_bytes(data)
        logger.info(f"Saved {dest_path} ({len(data)} bytes)")
        return dest_path
