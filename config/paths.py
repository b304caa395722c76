"""
Path Configuration for Veiligheidsbladen Beheer.

Centralized path management for exports and downloads.
"""

from pathlib import Path
import logging
import sys

logger = logging.getLogger(__name__)


def get_app_root() -> Path:
    """
    Get application root directory.

    Returns:
        - Production (frozen executable): Directory where the executable is located
        - Development (script): Project root
    """
    if getattr(sys, 'frozen', False):
        # Running as frozen executable
        app_root = Path(sys.executable).parent
        logger.debug(f"Running as executable, app root: {app_root}")
    else:
        # __file__ = <root>/config/paths.py
        app_root = Path(__file__).parent.parent
        logger.debug(f"Running as script, app root: {app_root}")

    return app_root


def get_default_export_dir() -> Path:
    """
    Get default directory for CSV exports, templates and example archives.

    Structure (relative to executable or project root):
        {app_root}/
        └── exports/

    Returns:
        Path to 'exports' directory (not created here)
    """
    return get_app_root() / "exports"

