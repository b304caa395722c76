"""
ZIP Service for Veiligheidsbladen Beheer.

Reads bulk upload archives and builds the example archive.
"""

import io
import logging
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import List, Tuple, Union

from config.constants import ERROR_MESSAGES, MAX_ZIP_SIZE_MB, MAX_ZIP_UNCOMPRESSED_MB
from domain.exceptions import ImportValidationError

logger = logging.getLogger(__name__)

# macOS archive tools add resource forks under this folder
IGNORED_PREFIXES = ("__MACOSX/",)

# Encrypted entries raise RuntimeError, unknown compression NotImplementedError
UNREADABLE_ZIP_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    RuntimeError,
    NotImplementedError,
    zlib.error,
    EOFError,
)

EXAMPLE_FILES = [
    ("ART001_NL_V1.pdf", "Voorbeeld Nederlands veiligheidsblad voor artikel ART001"),
    ("ART001_EN_V1.pdf", "Example English safety data sheet for article ART001"),
    ("ART002_NL_V2.pdf", "Voorbeeld Nederlands veiligheidsblad voor artikel ART002"),
    (
        "README.txt",
        """Voorbeeld ZIP bestand voor bulk document upload

Naamconventie:
{artikel_id}_{taal}_V{versie}.{extensie}

Voorbeelden:
- ART001_NL_V1.pdf
- ART002_EN_V2.docx
- CHEM001_DE_V3.pdf

Ondersteunde talen: NL, EN, FR, DE
Ondersteunde bestanden: PDF, DOC, DOCX
Maximum bestandsgrootte: 50MB per ZIP

Vervang deze voorbeeldbestanden door uw eigen PDF/DOC documenten.""",
    ),
]


def validate_zip_file(file_path: Union[Path, str]) -> Path:
    """
    Validate a bulk upload archive on disk.

    Rules:
    - Name ends with .zip (case-insensitive)
    - Size at most 50 MB

    Returns:
        Path object

    Raises:
        ImportValidationError: If invalid
    """
    path = Path(file_path)

    if not path.name.lower().endswith(".zip"):
        raise ImportValidationError(ERROR_MESSAGES["invalid_zip"], details={"file": path.name})

    if not path.is_file():
        raise ImportValidationError(f"Bestand bestaat niet: {path}", details={"file": str(path)})

    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > MAX_ZIP_SIZE_MB:
        raise ImportValidationError(
            ERROR_MESSAGES["zip_too_large"].format(max_mb=MAX_ZIP_SIZE_MB),
            details={"file": path.name, "size_mb": round(size_mb, 1)},
        )

    return path


def read_zip_entries(source: Union[Path, str, bytes]) -> List[Tuple[str, bytes]]:
    """
    Read all file entries of an archive.

    Directory entries and macOS resource forks are skipped. Entry names are
    reduced to their basename (folders inside the archive are ignored).
    The declared uncompressed sizes are checked before anything is extracted.

    Args:
        source: Path to archive or archive bytes

    Returns:
        List of (filename, content) in archive order

    Raises:
        ImportValidationError: If the archive cannot be read (corrupt,
                               encrypted, unsupported compression) or its
                               content exceeds MAX_ZIP_UNCOMPRESSED_MB
    """
    if isinstance(source, (bytes, bytearray)):
        handle = io.BytesIO(source)
        name = "<zip>"
    else:
        handle = Path(source)
        name = handle.name

    entries = []
    try:
        with zipfile.ZipFile(handle) as archive:
            members = [
                (PurePosixPath(info.filename).name, info)
                for info in archive.infolist()
                if not info.is_dir() and not info.filename.startswith(IGNORED_PREFIXES)
            ]
            members = [(filename, info) for filename, info in members if filename]

            total_mb = sum(info.file_size for _, info in members) / (1024 * 1024)
            if total_mb > MAX_ZIP_UNCOMPRESSED_MB:
                raise ImportValidationError(
                    ERROR_MESSAGES["zip_content_too_large"].format(max_mb=MAX_ZIP_UNCOMPRESSED_MB),
                    details={"file": name, "uncompressed_mb": round(total_mb, 1)},
                )

            for filename, info in members:
                entries.append((filename, archive.read(info)))
    except UNREADABLE_ZIP_ERRORS as e:
        logger.warning(f"Unreadable archive {name}: {e}")
        raise ImportValidationError(
            f"Kon ZIP bestand niet lezen: {e}",
            details={"file": name, "error": type(e).__name__},
        )

    logger.info(f"Read {len(entries)} files from {name}")
    return entries


def build_example_zip() -> bytes:
    """
    Build the example archive shown to users.

    Contains three correctly named sample files and a README explaining
    the naming convention.

    Returns:
        ZIP file content
    """
    zip_buffer = io.BytesIO()

    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
        for filename, content in EXAMPLE_FILES:
            zip_file.writestr(filename, content)

    logger.debug(f"Built example ZIP with {len(EXAMPLE_FILES)} files")
    return zip_buffer.getvalue()
