"""
Error presentation for Veiligheidsbladen Beheer.

Maps application exceptions to message boxes.
"""

import logging

try:
    from PySide6.QtWidgets import QMessageBox
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False

from domain.exceptions import (
    DatabaseError,
    ImportValidationError,
    NotFoundError,
    SafetyDocsBaseException,
    ValidationError,
)

logger = logging.getLogger(__name__)


def format_error(error: Exception) -> str:
    """
    Text for an error dialog.

    DatabaseError includes code, details and hint; other application
    errors show their message only.
    """
    if isinstance(error, DatabaseError):
        return error.describe()
    if isinstance(error, SafetyDocsBaseException):
        return error.message
    return str(error)


def show_error(parent, title: str, error: Exception, retry: bool = False) -> bool:
    """
    Show an error dialog.

    Validation problems are shown as warnings, everything else as critical.

    Args:
        parent: Parent widget
        title: Dialog title
        error: Exception to show
        retry: Offer a 'Opnieuw proberen' button

    Returns:
        True if the user chose to retry
    """
    text = format_error(error)

    if isinstance(error, (ValidationError, ImportValidationError, NotFoundError)):
        QMessageBox.warning(parent, title, text)
        return False

    logger.error(f"{title}: {error}")

    if not retry:
        QMessageBox.critical(parent, title, text)
        return False

    box = QMessageBox(parent)
    box.setIcon(QMessageBox.Critical)
    box.setWindowTitle(title)
    box.setText(text)
    retry_button = box.addButton("Opnieuw proberen", QMessageBox.AcceptRole)
    box.addButton("Sluiten", QMessageBox.RejectRole)
    box.exec()
    return box.clickedButton() is retry_button
