"""
Safety Sheet Panel Widget for Veiligheidsbladen Beheer.

Shows the current safety sheet per language for one article, with
buttons to open a sheet or upload a new version. Also provides the
compact language badges used in the article table.
"""

import logging
from typing import Dict, Optional

try:
    from PySide6.QtWidgets import (
        QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
        QLabel, QPushButton, QGroupBox
    )
    from PySide6.QtCore import Qt, Signal
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QWidget = object
    Signal = object

from config.constants import TALEN
from domain.models import Article, SafetySheet
from ui.styles import HINT_STYLE, badge_style

logger = logging.getLogger(__name__)


class LanguageBadges(QWidget):
    """Row of language badges, e.g. [NL V2] [EN V1] [DE] [FR]."""

    def __init__(self, latest: Dict[str, Optional[SafetySheet]], parent=None):
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.setSpacing(4)

        for taal in TALEN:
            sheet = latest.get(taal)
            text = f"{taal} {sheet.version_label}" if sheet else taal
            badge = QLabel(text)
            badge.setStyleSheet(badge_style(sheet is not None))
            badge.setToolTip(sheet.bestandsnaam if sheet else f"Geen {TALEN[taal]} veiligheidsblad")
            layout.addWidget(badge)

        layout.addStretch()


class SafetySheetPanel(QWidget):
    """
    Per-language overview for the selected article.

    Signals:
        view_requested(object): SafetySheet to open
        upload_requested(str): language code to upload for
    """

    view_requested = Signal(object)
    upload_requested = Signal(str)

    def __init__(self, parent=None):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.article: Optional[Article] = None
        self.latest: Dict[str, Optional[SafetySheet]] = {}

        self._setup_ui()
        self.show_article(None, {})

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.group = QGroupBox("Veiligheidsbladen")
        group_layout = QVBoxLayout()

        self.article_label = QLabel()
        self.article_label.setWordWrap(True)
        group_layout.addWidget(self.article_label)

        self.grid = QGridLayout()
        self.rows = {}
        for row, (taal, name) in enumerate(TALEN.items()):
            name_label = QLabel(f"<b>{taal}</b> {name}")
            info_label = QLabel()
            info_label.setStyleSheet(HINT_STYLE)

            btn_view = QPushButton("Bekijken")
            btn_view.clicked.connect(lambda checked=False, t=taal: self._on_view(t))

            btn_upload = QPushButton("Uploaden")
            btn_upload.clicked.connect(lambda checked=False, t=taal: self.upload_requested.emit(t))

            self.grid.addWidget(name_label, row, 0)
            self.grid.addWidget(info_label, row, 1)
            self.grid.addWidget(btn_view, row, 2)
            self.grid.addWidget(btn_upload, row, 3)
            self.rows[taal] = (info_label, btn_view, btn_upload)

        self.grid.setColumnStretch(1, 1)
        group_layout.addLayout(self.grid)
        self.group.setLayout(group_layout)
        layout.addWidget(self.group)

    def show_article(self, article: Optional[Article], latest: Dict[str, Optional[SafetySheet]]):
        """Display the current sheets of an article (None clears the panel)."""
        self.article = article
        self.latest = latest

        if article is None:
            self.article_label.setText("Selecteer een artikel om de veiligheidsbladen te zien.")
        else:
            refs = " | ".join(
                f"{label}: {value}"
                for label, value in (
                    ("Rubix", article.referentie_rubix),
                    ("Fabrikant", article.referentie_fabrikant),
                    ("EAN", article.ean),
                )
                if value
            )
            self.article_label.setText(
                f"<b>{article.naam}</b> ({article.unieke_id})" + (f"<br>{refs}" if refs else "")
            )

        for taal, (info_label, btn_view, btn_upload) in self.rows.items():
            sheet = latest.get(taal)
            if sheet:
                uploaded = sheet.geupload_op.strftime("%d-%m-%Y %H:%M") if sheet.geupload_op else "-"
                info_label.setText(f"{sheet.version_label} - {sheet.bestandsnaam} ({uploaded})")
            else:
                info_label.setText("Geen veiligheidsblad")
            btn_view.setEnabled(sheet is not None)
            btn_upload.setEnabled(article is not None)
            btn_upload.setText("Bijwerken" if sheet else "Uploaden")

    def _on_view(self, taal: str):
        sheet = self.latest.get(taal)
        if sheet:
            self.view_requested.emit(sheet)
