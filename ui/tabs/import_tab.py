"""
Import Tab for Veiligheidsbladen Beheer.

CSV article import: template download, preview, import with a report
of failed rows and skipped duplicates.
"""

import logging
from pathlib import Path
from typing import List, Optional

try:
    from PySide6.QtWidgets import (
        QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
        QGroupBox, QFileDialog, QMessageBox, QTableWidget,
        QTableWidgetItem, QHeaderView, QAbstractItemView, QTextEdit
    )
    from PySide6.QtCore import Signal
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QWidget = object
    Signal = object

from config.app_context import AppContext
from config.constants import CSV_PREVIEW_ROWS, SUCCESS_MESSAGES, TEMPLATE_FILENAME
from domain.exceptions import SafetyDocsBaseException
from domain.models import ArticleImportRow
from operations.import_ops import (
    build_template_csv,
    get_import_summary,
    import_articles,
    parse_articles_csv,
    preview_rows,
)
from ui.errors import show_error
from ui.styles import ERROR_STYLE, HINT_STYLE, SUCCESS_STYLE

logger = logging.getLogger(__name__)

PREVIEW_COLUMNS = ["Rij", "Naam", "Unieke ID", "Ref. Rubix", "Ref. fabrikant", "EAN"]


class ImportTab(QWidget):
    """
    Import tab.

    Signals:
        articles_imported(): Emitted after at least one article was added
    """

    articles_imported = Signal()

    def __init__(self, context: AppContext, parent=None, error_handler=None):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.context = context
        self.error_handler = error_handler
        self.csv_path: Optional[Path] = None
        self.rows: List[ArticleImportRow] = []

        self._setup_ui()

    def _setup_ui(self):
        """Setup UI components."""
        layout = QVBoxLayout(self)

        # Step 1: template
        template_group = QGroupBox("1. Template")
        template_layout = QHBoxLayout()
        template_info = QLabel(
            "Verplichte kolommen: naam, unieke_id. "
            "Optioneel: referentie_rubix, referentie_fabrikant, ean."
        )
        template_info.setWordWrap(True)
        template_info.setStyleSheet(HINT_STYLE)
        template_layout.addWidget(template_info, 1)
        btn_template = QPushButton("Template downloaden")
        btn_template.clicked.connect(self._save_template)
        template_layout.addWidget(btn_template)
        template_group.setLayout(template_layout)
        layout.addWidget(template_group)

        # Step 2: file + preview
        file_group = QGroupBox("2. CSV-bestand")
        file_layout = QVBoxLayout()

        file_row = QHBoxLayout()
        self.file_label = QLabel("Geen bestand gekozen")
        self.file_label.setStyleSheet(HINT_STYLE)
        file_row.addWidget(self.file_label, 1)
        btn_choose = QPushButton("Bestand kiezen...")
        btn_choose.clicked.connect(self._choose_file)
        file_row.addWidget(btn_choose)
        file_layout.addLayout(file_row)

        self.preview_label = QLabel()
        file_layout.addWidget(self.preview_label)

        self.preview_table = QTableWidget(0, len(PREVIEW_COLUMNS))
        self.preview_table.setHorizontalHeaderLabels(PREVIEW_COLUMNS)
        self.preview_table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.preview_table.verticalHeader().setVisible(False)
        self.preview_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        file_layout.addWidget(self.preview_table)

        file_group.setLayout(file_layout)
        layout.addWidget(file_group, 1)

        # Step 3: import + result
        result_group = QGroupBox("3. Importeren")
        result_layout = QVBoxLayout()

        self.btn_import = QPushButton("Importeren")
        self.btn_import.setProperty("accent", True)
        self.btn_import.setEnabled(False)
        self.btn_import.clicked.connect(self.run_import)
        result_layout.addWidget(self.btn_import)

        self.result_label = QLabel()
        self.result_label.setWordWrap(True)
        result_layout.addWidget(self.result_label)

        self.details_text = QTextEdit()
        self.details_text.setReadOnly(True)
        self.details_text.setMaximumHeight(150)
        self.details_text.hide()
        result_layout.addWidget(self.details_text)

        result_group.setLayout(result_layout)
        layout.addWidget(result_group)

    def _save_template(self):
        default = str(self.context.export_dir / TEMPLATE_FILENAME)
        path, _ = QFileDialog.getSaveFileName(self, "Template opslaan", default, "CSV (*.csv)")
        if not path:
            return
        try:
            Path(path).write_bytes(build_template_csv())
        except OSError as e:
            show_error(self, "Opslaan mislukt", e)
            return
        logger.info(f"Template saved to {path}")

    def _choose_file(self):
        path, _ = QFileDialog.getOpenFileName(self, "Kies CSV-bestand", "", "CSV (*.csv)")
        if path:
            self.load_file(Path(path))

    def load_file(self, path: Path):
        """Parse CSV file and show preview."""
        self._reset()
        try:
            self.rows = parse_articles_csv(path)
        except SafetyDocsBaseException as e:
            self.file_label.setText(path.name)
            show_error(self, "Ongeldig CSV-bestand", e)
            return

        self.csv_path = path
        self.file_label.setText(str(path))

        shown = preview_rows(self.rows, CSV_PREVIEW_ROWS)
        self.preview_label.setText(f"Voorbeeld: {len(shown)} van {len(self.rows)} rijen")
        self.preview_table.setRowCount(len(shown))
        for row, item in enumerate(shown):
            values = [
                str(item.row_number),
                item.naam,
                item.unieke_id,
                item.referentie_rubix or "",
                item.referentie_fabrikant or "",
                item.ean or "",
            ]
            for col, value in enumerate(values):
                self.preview_table.setItem(row, col, QTableWidgetItem(value))

        self.btn_import.setEnabled(bool(self.rows))

    def _reset(self):
        self.csv_path = None
        self.rows = []
        self.preview_table.setRowCount(0)
        self.preview_label.clear()
        self.result_label.clear()
        self.details_text.clear()
        self.details_text.hide()
        self.btn_import.setEnabled(False)

    def run_import(self):
        """Import parsed rows and show the result."""
        if not self.rows:
            return

        self.btn_import.setEnabled(False)
        try:
            result = import_articles(self.context.database, self.rows)
        except SafetyDocsBaseException as e:
            self.btn_import.setEnabled(True)
            if self.error_handler and self.error_handler(e, "Import mislukt"):
                return
            show_error(self, "Import mislukt", e)
            return

        summary = get_import_summary(result)
        self._show_summary(summary)

        if summary["success"]:
            self.articles_imported.emit()

    def _show_summary(self, summary: dict):
        lines = [SUCCESS_MESSAGES["import_done"].format(count=summary["success"])]
        if summary["duplicate_count"]:
            lines.append(f"{summary['duplicate_count']} duplicaten overgeslagen")
        if summary["error_count"]:
            lines.append(f"{summary['error_count']} rijen met fouten")

        self.result_label.setText(" | ".join(lines))
        self.result_label.setStyleSheet(ERROR_STYLE if summary["error_count"] else SUCCESS_STYLE)

        details = summary["errors"] + summary["duplicates"]
        if details:
            self.details_text.setPlainText("\n".join(details))
            self.details_text.show()

        if summary["error_count"]:
            QMessageBox.warning(self, "Import voltooid met fouten", " | ".join(lines))
