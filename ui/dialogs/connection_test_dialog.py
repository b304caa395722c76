"""
Connection Test Dialog for Veiligheidsbladen Beheer.

Shows whether the auth service and the database respond.
"""

import logging

try:
    from PySide6.QtWidgets import (
        QDialog, QVBoxLayout, QLabel, QPushButton, QDialogButtonBox
    )
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QDialog = object

from data.interface import AuthInterface, DatabaseInterface
from operations.auth_ops import check_connection
from ui.styles import ERROR_STYLE, SUCCESS_STYLE

logger = logging.getLogger(__name__)


class ConnectionTestDialog(QDialog):
    """Runs check_connection() and displays the result per service."""

    def __init__(self, auth: AuthInterface, database: DatabaseInterface, parent=None):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.auth = auth
        self.database = database

        self._setup_ui()
        self.run_test()

    def _setup_ui(self):
        self.setWindowTitle("Verbinding testen")
        self.setMinimumWidth(420)

        layout = QVBoxLayout()

        self.session_label = QLabel()
        self.session_label.setWordWrap(True)
        layout.addWidget(self.session_label)

        self.database_label = QLabel()
        self.database_label.setWordWrap(True)
        layout.addWidget(self.database_label)

        self.btn_retry = QPushButton("Opnieuw testen")
        self.btn_retry.clicked.connect(self.run_test)
        layout.addWidget(self.btn_retry)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)

    def run_test(self):
        status = check_connection(self.auth, self.database)
        logger.info(f"Connection test: session_ok={status.session_ok}, database_ok={status.database_ok}")

        self.session_label.setText(f"Auth: {status.session_message}")
        self.session_label.setStyleSheet(SUCCESS_STYLE if status.session_ok else ERROR_STYLE)

        self.database_label.setText(f"Database: {status.database_message}")
        self.database_label.setStyleSheet(SUCCESS_STYLE if status.database_ok else ERROR_STYLE)
