"""
Articles Tab for Veiligheidsbladen Beheer.

Searchable article list with per-language safety sheet status.
"""

import logging
from typing import Dict, List, Optional

try:
    from PySide6.QtWidgets import (
        QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
        QLineEdit, QTableWidget, QTableWidgetItem, QHeaderView,
        QAbstractItemView, QSplitter
    )
    from PySide6.QtCore import Qt, QUrl
    from PySide6.QtGui import QDesktopServices
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QWidget = object

from config.app_context import AppContext
from domain.exceptions import SafetyDocsBaseException
from domain.models import Article, SafetySheet
from domain.rules import group_sheets_by_article
from operations.article_ops import filter_articles, get_article_count_label, load_articles
from operations.sheet_ops import get_latest_sheets, get_sheet_url, load_all_sheets
from ui.dialogs import ArticleFormDialog, SafetySheetUploadDialog
from ui.errors import show_error
from ui.styles import HINT_STYLE
from ui.widgets import LanguageBadges, SafetySheetPanel

logger = logging.getLogger(__name__)

COLUMNS = ["Unieke ID", "Naam", "Ref. Rubix", "Ref. fabrikant", "EAN", "Veiligheidsbladen"]


class ArticlesTab(QWidget):
    """
    Articles tab.

    Features:
    - Article table (newest first) with language badges
    - Free-text search over naam, unieke ID, references and EAN
    - Detail panel per language: open current sheet, upload new version
    - Add article
    """

    def __init__(self, context: AppContext, parent=None, error_handler=None):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.context = context
        self.error_handler = error_handler
        self.articles: List[Article] = []
        self.visible_articles: List[Article] = []
        self.sheets_by_article: Dict[str, List[SafetySheet]] = {}

        self._setup_ui()
        self.load_articles()

    def _setup_ui(self):
        """Setup UI components."""
        layout = QVBoxLayout(self)

        top_row = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Zoek op naam, unieke ID, referentie of EAN...")
        self.search_edit.textChanged.connect(self._apply_filter)
        top_row.addWidget(self.search_edit, 1)

        self.btn_refresh = QPushButton("Vernieuwen")
        self.btn_refresh.clicked.connect(self.load_articles)
        top_row.addWidget(self.btn_refresh)

        self.btn_add = QPushButton("Nieuw artikel")
        self.btn_add.setProperty("accent", True)
        self.btn_add.clicked.connect(self._add_article)
        top_row.addWidget(self.btn_add)
        layout.addLayout(top_row)

        self.count_label = QLabel()
        self.count_label.setStyleSheet(HINT_STYLE)
        layout.addWidget(self.count_label)

        splitter = QSplitter(Qt.Vertical)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        self.table.itemSelectionChanged.connect(self._on_selection_changed)
        splitter.addWidget(self.table)

        self.sheet_panel = SafetySheetPanel()
        self.sheet_panel.view_requested.connect(self._view_sheet)
        self.sheet_panel.upload_requested.connect(self._upload_sheet)
        splitter.addWidget(self.sheet_panel)

        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        layout.addWidget(splitter, 1)

    def _handle_error(self, error: Exception, title: str, retry: bool = False) -> bool:
        """Route error to the window (auth) or show it. Returns True on retry."""
        if self.error_handler and self.error_handler(error, title):
            return False
        return show_error(self, title, error, retry=retry)

    def load_articles(self):
        """Load articles and sheets from the backend."""
        try:
            self.articles = load_articles(self.context.database)
            sheets = load_all_sheets(self.context.database)
            self.sheets_by_article = group_sheets_by_article(sheets)
        except SafetyDocsBaseException as e:
            if self._handle_error(e, "Fout bij laden artikelen", retry=True):
                self.load_articles()
            return
        except Exception as e:
            logger.exception("Unexpected error loading articles")
            show_error(self, "Onverwachte fout", e)
            return

        logger.info(f"Articles tab loaded {len(self.articles)} articles")
        self._apply_filter()

    def _apply_filter(self):
        selected = self.selected_article()
        self.visible_articles = filter_articles(self.articles, self.search_edit.text())
        self._populate_table()
        self.count_label.setText(get_article_count_label(len(self.visible_articles), len(self.articles)))

        if selected:
            for row, article in enumerate(self.visible_articles):
                if article.unieke_id == selected.unieke_id:
                    self.table.selectRow(row)
                    return
        self.sheet_panel.show_article(None, {})

    def _populate_table(self):
        self.table.setRowCount(len(self.visible_articles))
        for row, article in enumerate(self.visible_articles):
            values = [
                article.unieke_id,
                article.naam,
                article.referentie_rubix or "",
                article.referentie_fabrikant or "",
                article.ean or "",
            ]
            for col, value in enumerate(values):
                self.table.setItem(row, col, QTableWidgetItem(value))

            latest = get_latest_sheets(self.sheets_by_article.get(article.unieke_id, []))
            self.table.setCellWidget(row, len(values), LanguageBadges(latest))

        self.table.resizeColumnToContents(0)

    def selected_article(self) -> Optional[Article]:
        rows = self.table.selectionModel().selectedRows() if self.table.selectionModel() else []
        if not rows:
            return None
        index = rows[0].row()
        if index < len(self.visible_articles):
            return self.visible_articles[index]
        return None

    def _on_selection_changed(self):
        article = self.selected_article()
        if article is None:
            self.sheet_panel.show_article(None, {})
            return
        latest = get_latest_sheets(self.sheets_by_article.get(article.unieke_id, []))
        self.sheet_panel.show_article(article, latest)

    def _add_article(self):
        dialog = ArticleFormDialog(self.context.database, parent=self, error_handler=self.error_handler)
        if dialog.exec() and dialog.article:
            logger.info(f"Article added: {dialog.article.unieke_id}")
            self.load_articles()

    def _view_sheet(self, sheet: SafetySheet):
        try:
            url = get_sheet_url(
                self.context.storage,
                sheet.storage_path,
                self.context.settings.signed_url_expiry,
            )
        except Exception as e:
            self._handle_error(e, "Kan veiligheidsblad niet openen")
            return

        logger.info(f"Opening sheet {sheet.storage_path}")
        QDesktopServices.openUrl(QUrl(url))

    def _upload_sheet(self, taal: str):
        article = self.sheet_panel.article
        if article is None:
            return

        dialog = SafetySheetUploadDialog(
            article,
            self.sheets_by_article.get(article.unieke_id, []),
            self.context.database,
            self.context.storage,
            taal=taal,
            parent=self,
            error_handler=self.error_handler,
        )
        if dialog.exec():
            self.load_articles()
