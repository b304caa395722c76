"""
Safety Sheet Upload Dialog for Veiligheidsbladen Beheer.

Upload a new version of a safety data sheet for one article.
"""

import logging
from pathlib import Path
from typing import List, Optional

try:
    from PySide6.QtWidgets import (
        QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
        QLabel, QPushButton, QLineEdit, QComboBox,
        QFileDialog, QDialogButtonBox
    )
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QDialog = object

from config.constants import (
    ALLOWED_DOCUMENT_EXTENSIONS,
    MAX_DOCUMENT_SIZE_MB,
    SUCCESS_MESSAGES,
    TALEN,
)
from data.interface import DatabaseInterface, StorageInterface
from domain.exceptions import DatabaseError, StorageError, ValidationError
from domain.models import Article, SafetySheet
from operations.sheet_ops import get_next_version, upload_safety_sheet, validate_document_file
from services.file_service import FileService
from ui.errors import show_error
from ui.styles import HINT_STYLE

logger = logging.getLogger(__name__)


class SafetySheetUploadDialog(QDialog):
    """
    Dialog for uploading a safety sheet version.

    Features:
    - Language selection (preselected when opened from a language row)
    - Suggested next version number
    - File selection (PDF/DOC/DOCX, max 10 MB)
    """

    def __init__(
        self,
        article: Article,
        sheets: List[SafetySheet],
        database: DatabaseInterface,
        storage: StorageInterface,
        taal: Optional[str] = None,
        parent=None,
        error_handler=None,
    ):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.article = article
        self.sheets = sheets
        self.database = database
        self.storage = storage
        self.error_handler = error_handler

        self.selected_file: Optional[Path] = None
        self.uploaded_sheet: Optional[SafetySheet] = None

        self._setup_ui()
        if taal:
            index = self.taal_combo.findData(taal)
            if index >= 0:
                self.taal_combo.setCurrentIndex(index)
        self._update_version_suggestion()

    def _setup_ui(self):
        """Setup UI components."""
        self.setWindowTitle(f"Veiligheidsblad uploaden - {self.article.unieke_id}")
        self.setModal(True)
        self.setMinimumWidth(500)

        layout = QVBoxLayout()

        info_label = QLabel(
            f"<b>Artikel:</b> {self.article.naam}<br>"
            f"<b>Unieke ID:</b> {self.article.unieke_id}"
        )
        info_label.setWordWrap(True)
        layout.addWidget(info_label)

        form_layout = QFormLayout()

        self.taal_combo = QComboBox()
        for code, name in TALEN.items():
            self.taal_combo.addItem(f"{code} - {name}", code)
        self.taal_combo.currentIndexChanged.connect(self._update_version_suggestion)
        form_layout.addRow("Taal*:", self.taal_combo)

        self.versie_edit = QLineEdit()
        form_layout.addRow("Versie*:", self.versie_edit)

        file_row = QHBoxLayout()
        self.file_edit = QLineEdit()
        self.file_edit.setReadOnly(True)
        self.file_edit.setPlaceholderText("Geen bestand geselecteerd...")
        file_row.addWidget(self.file_edit)

        self.btn_browse = QPushButton("Bladeren...")
        self.btn_browse.clicked.connect(self._browse_file)
        file_row.addWidget(self.btn_browse)
        form_layout.addRow("Bestand*:", file_row)

        layout.addLayout(form_layout)

        hint_label = QLabel(
            f"PDF, DOC of DOCX, maximaal {MAX_DOCUMENT_SIZE_MB}MB.\n"
            "De vorige versie blijft bewaard; de nieuwe versie wordt de actuele."
        )
        hint_label.setStyleSheet(HINT_STYLE)
        hint_label.setWordWrap(True)
        layout.addWidget(hint_label)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Uploaden")
        buttons.button(QDialogButtonBox.Cancel).setText("Annuleren")
        buttons.accepted.connect(self._accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)

    def selected_taal(self) -> str:
        return self.taal_combo.currentData()

    def _update_version_suggestion(self):
        """Prefill the version with the next number for the selected language."""
        self.versie_edit.setText(get_next_version(self.sheets, self.selected_taal()))

    def _browse_file(self):
        """Browse for document."""
        ext_filter = " ".join(f"*{ext}" for ext in ALLOWED_DOCUMENT_EXTENSIONS)

        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Kies veiligheidsblad",
            "",
            f"Documenten ({ext_filter})"
        )

        if not file_path:
            return

        try:
            self.selected_file = validate_document_file(file_path)
            self.file_edit.setText(str(self.selected_file))
            logger.info(f"Selected file: {self.selected_file}")
        except ValidationError as e:
            self.selected_file = None
            self.file_edit.clear()
            show_error(self, "Ongeldig bestand", e)

    def _accept(self):
        """Upload and accept."""
        try:
            if not self.selected_file:
                raise ValidationError("Geen bestand geselecteerd")

            data = FileService(self.selected_file.parent).read_bytes(self.selected_file)
            self.uploaded_sheet = upload_safety_sheet(
                self.database,
                self.storage,
                unieke_id=self.article.unieke_id,
                taal=self.selected_taal(),
                versie=self.versie_edit.text(),
                filename=self.selected_file.name,
                data=data,
            )
            logger.info(
                SUCCESS_MESSAGES["sheet_uploaded"].format(
                    taal=self.uploaded_sheet.taal, versie=self.uploaded_sheet.versie
                )
            )
            self.accept()

        except ValidationError as e:
            show_error(self, "Validatiefout", e)

        except (DatabaseError, StorageError) as e:
            if self.error_handler and self.error_handler(e, "Upload mislukt"):
                self.reject()
                return
            show_error(self, "Upload mislukt", e)

        except Exception as e:
            logger.exception("Unexpected error uploading safety sheet")
            show_error(self, "Onverwachte fout", e)
