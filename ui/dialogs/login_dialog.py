"""
Login Dialog for Veiligheidsbladen Beheer.

Sign in with email and password, or create an account.
"""

import logging
from typing import Optional

try:
    from PySide6.QtWidgets import (
        QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
        QLabel, QPushButton, QLineEdit, QMessageBox
    )
    from PySide6.QtCore import Qt
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QDialog = object

from config.constants import APP_NAME, MIN_PASSWORD_LENGTH, PRIMARY_COLOR, SUCCESS_MESSAGES
from data.interface import AuthInterface
from domain.exceptions import AuthError, ValidationError
from domain.models import AuthSession
from operations.auth_ops import sign_in, sign_up
from ui.styles import ERROR_STYLE, HINT_STYLE, SUCCESS_STYLE

logger = logging.getLogger(__name__)


class LoginDialog(QDialog):
    """
    Login / account creation dialog.

    Accepted only after a successful sign in; the session is then
    available as `session`.
    """

    def __init__(self, auth: AuthInterface, parent=None):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.auth = auth
        self.session: Optional[AuthSession] = None
        self.register_mode = False

        self._setup_ui()

    def _setup_ui(self):
        """Setup UI components."""
        self.setWindowTitle(f"{APP_NAME} - Inloggen")
        self.setModal(True)
        self.setMinimumWidth(380)

        layout = QVBoxLayout()

        title = QLabel(APP_NAME)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(f"font-size: 16pt; font-weight: bold; color: {PRIMARY_COLOR};")
        layout.addWidget(title)

        self.subtitle = QLabel("Log in om verder te gaan")
        self.subtitle.setAlignment(Qt.AlignCenter)
        self.subtitle.setStyleSheet(HINT_STYLE)
        layout.addWidget(self.subtitle)

        form = QFormLayout()
        self.email_edit = QLineEdit()
        self.email_edit.setPlaceholderText("naam@bedrijf.nl")
        form.addRow("E-mail:", self.email_edit)

        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        self.password_edit.setPlaceholderText(f"Minimaal {MIN_PASSWORD_LENGTH} tekens")
        self.password_edit.returnPressed.connect(self._submit)
        form.addRow("Wachtwoord:", self.password_edit)
        layout.addLayout(form)

        self.message_label = QLabel("")
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

        self.btn_submit = QPushButton("Inloggen")
        self.btn_submit.clicked.connect(self._submit)
        layout.addWidget(self.btn_submit)

        toggle_row = QHBoxLayout()
        toggle_row.addStretch()
        self.btn_toggle = QPushButton("Nog geen account? Registreren")
        self.btn_toggle.setFlat(True)
        self.btn_toggle.setStyleSheet(f"color: {PRIMARY_COLOR}; background: transparent;")
        self.btn_toggle.clicked.connect(self._toggle_mode)
        toggle_row.addWidget(self.btn_toggle)
        toggle_row.addStretch()
        layout.addLayout(toggle_row)

        self.setLayout(layout)

    def _toggle_mode(self):
        """Switch between login and registration."""
        self.register_mode = not self.register_mode
        if self.register_mode:
            self.subtitle.setText("Maak een nieuw account aan")
            self.btn_submit.setText("Account aanmaken")
            self.btn_toggle.setText("Al een account? Inloggen")
        else:
            self.subtitle.setText("Log in om verder te gaan")
            self.btn_submit.setText("Inloggen")
            self.btn_toggle.setText("Nog geen account? Registreren")
        self._show_message("")

    def _show_message(self, text: str, style: str = ERROR_STYLE):
        self.message_label.setText(text)
        self.message_label.setStyleSheet(style)

    def _submit(self):
        """Sign in or create account."""
        email = self.email_edit.text()
        password = self.password_edit.text()

        self.btn_submit.setEnabled(False)
        try:
            if self.register_mode:
                sign_up(self.auth, email, password)
                self._toggle_mode()
                self.password_edit.clear()
                self._show_message(SUCCESS_MESSAGES["account_created"], SUCCESS_STYLE)
                return

            self.session = sign_in(self.auth, email, password)
            logger.info(f"Login dialog accepted for {self.session.email}")
            self.accept()

        except (ValidationError, AuthError) as e:
            self._show_message(e.message)

        except Exception as e:
            logger.exception("Unexpected error during login")
            QMessageBox.critical(self, "Onverwachte fout", f"Er is een fout opgetreden:\n\n{e}")

        finally:
            self.btn_submit.setEnabled(True)
