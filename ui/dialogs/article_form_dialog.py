"""
Article Form Dialog for Veiligheidsbladen Beheer.

Create a new catalogue article.
"""

import logging
from typing import Optional

try:
    from PySide6.QtWidgets import (
        QDialog, QVBoxLayout, QFormLayout, QLabel,
        QLineEdit, QDialogButtonBox
    )
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QDialog = object

from data.interface import DatabaseInterface
from domain.exceptions import DatabaseError, ValidationError
from domain.models import Article
from operations.article_ops import create_article
from ui.errors import show_error
from ui.styles import HINT_STYLE

logger = logging.getLogger(__name__)


class ArticleFormDialog(QDialog):
    """
    Dialog for adding an article.

    Fields: naam*, unieke_id*, referentie_rubix, referentie_fabrikant, ean.
    On success the created article is available as `article`.
    """

    def __init__(self, database: DatabaseInterface, parent=None, error_handler=None):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.database = database
        self.error_handler = error_handler
        self.article: Optional[Article] = None

        self._setup_ui()

    def _setup_ui(self):
        """Setup UI components."""
        self.setWindowTitle("Nieuw artikel")
        self.setModal(True)
        self.setMinimumWidth(420)

        layout = QVBoxLayout()
        form = QFormLayout()

        self.naam_edit = QLineEdit()
        form.addRow("Naam*:", self.naam_edit)

        self.unieke_id_edit = QLineEdit()
        self.unieke_id_edit.setPlaceholderText("bijv. VH-001")
        form.addRow("Unieke ID*:", self.unieke_id_edit)

        self.rubix_edit = QLineEdit()
        form.addRow("Referentie Rubix:", self.rubix_edit)

        self.fabrikant_edit = QLineEdit()
        form.addRow("Referentie fabrikant:", self.fabrikant_edit)

        self.ean_edit = QLineEdit()
        form.addRow("EAN:", self.ean_edit)

        layout.addLayout(form)

        hint = QLabel("* verplicht veld. De unieke ID kan later niet worden gewijzigd.")
        hint.setStyleSheet(HINT_STYLE)
        layout.addWidget(hint)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Toevoegen")
        buttons.button(QDialogButtonBox.Cancel).setText("Annuleren")
        buttons.accepted.connect(self._accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)

    def get_form(self) -> dict:
        return {
            "naam": self.naam_edit.text(),
            "unieke_id": self.unieke_id_edit.text(),
            "referentie_rubix": self.rubix_edit.text(),
            "referentie_fabrikant": self.fabrikant_edit.text(),
            "ean": self.ean_edit.text(),
        }

    def _accept(self):
        """Validate, insert and accept."""
        try:
            self.article = create_article(self.database, self.get_form())
            self.accept()

        except ValidationError as e:
            show_error(self, "Validatiefout", e)

        except DatabaseError as e:
            if self.error_handler and self.error_handler(e, "Fout bij toevoegen artikel"):
                self.reject()
                return
            show_error(self, "Fout bij toevoegen artikel", e)

        except Exception as e:
            logger.exception("Unexpected error creating article")
            show_error(self, "Onverwachte fout", e)
