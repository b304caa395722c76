"""
Documents Tab for Veiligheidsbladen Beheer.

Bulk upload of safety sheets from a ZIP archive. File names must follow
<artikel_id>_<taal>_V<versie>.<ext>, e.g. ART-001_NL_V1.pdf.
"""

import logging
from pathlib import Path
from typing import List

try:
    from PySide6.QtWidgets import (
        QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
        QGroupBox, QFileDialog, QMessageBox, QTableWidget,
        QTableWidgetItem, QHeaderView, QAbstractItemView, QProgressBar
    )
    from PySide6.QtCore import QThread, Signal
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QWidget = object
    QThread = object
    Signal = object

from config.app_context import AppContext
from config.constants import EXAMPLE_ZIP_FILENAME
from domain.exceptions import SafetyDocsBaseException
from domain.models import DocumentEntry
from operations.document_ops import (
    describe_upload_outcome,
    get_document_summary,
    scan_zip_archive,
    upload_documents,
    validate_document_articles,
)
from services.zip_service import build_example_zip
from ui.errors import show_error
from ui.styles import ERROR_STYLE, HINT_STYLE, STATUS_LABELS, SUCCESS_STYLE, status_style

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ["Bestand", "Artikel", "Taal", "Versie", "Grootte", "Status", "Melding"]
STATUS_COLUMN = 5
MESSAGE_COLUMN = 6


class DocumentUploadWorker(QThread):
    """
    Worker thread for bulk document upload.

    Uploads run sequentially in the background so the table can follow
    the progress per file. Signals carry the table row of the entry.
    """

    # Signals
    started_file = Signal(int)  # (row)
    progress = Signal(int, int, int)  # (row, index, total)
    finished = Signal(dict)  # (summary)
    error = Signal(str)  # (error_message)

    def __init__(self, database, storage, entries: List[DocumentEntry]):
        """Initialize worker thread."""
        super().__init__()

        self.database = database
        self.storage = storage
        self.entries = entries
        # Identity lookup: two entries may compare equal
        self._rows = {id(entry): row for row, entry in enumerate(entries)}

    def run(self):
        """Run bulk upload."""
        try:
            summary = upload_documents(
                self.database,
                self.storage,
                self.entries,
                progress_callback=lambda index, total, entry: self.progress.emit(
                    self._rows[id(entry)], index, total
                ),
                start_callback=lambda index, total, entry: self.started_file.emit(
                    self._rows[id(entry)]
                ),
            )
            self.finished.emit(summary)
        except Exception as e:
            logger.exception("Bulk upload failed")
            self.error.emit(str(e))


class DocumentsTab(QWidget):
    """
    Documents tab.

    Steps:
    1. Optionally save example archive
    2. Choose ZIP -> entries scanned and checked against existing articles
    3. Upload pending entries, status per file
    """

    documents_uploaded = Signal()

    def __init__(self, context: AppContext, parent=None, error_handler=None):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.context = context
        self.error_handler = error_handler
        self.entries: List[DocumentEntry] = []
        self.worker = None

        self._setup_ui()

    def _setup_ui(self):
        """Setup UI components."""
        layout = QVBoxLayout(self)

        # Naming convention + example
        info_group = QGroupBox("Bestandsnamen")
        info_layout = QHBoxLayout()
        info = QLabel(
            "Gebruik het formaat <b>ARTIKEL-ID_TAAL_VVERSIE.pdf</b>, bijvoorbeeld "
            "ART-001_NL_V1.pdf. Talen: NL, EN, DE, FR. Toegestaan: .pdf, .doc, .docx."
        )
        info.setWordWrap(True)
        info_layout.addWidget(info, 1)
        btn_example = QPushButton("Voorbeeld-ZIP downloaden")
        btn_example.clicked.connect(self._save_example)
        info_layout.addWidget(btn_example)
        info_group.setLayout(info_layout)
        layout.addWidget(info_group)

        # Archive
        zip_group = QGroupBox("ZIP-bestand")
        zip_layout = QVBoxLayout()

        file_row = QHBoxLayout()
        self.file_label = QLabel("Geen bestand gekozen")
        self.file_label.setStyleSheet(HINT_STYLE)
        file_row.addWidget(self.file_label, 1)
        self.btn_choose = QPushButton("ZIP kiezen...")
        self.btn_choose.clicked.connect(self._choose_zip)
        file_row.addWidget(self.btn_choose)
        zip_layout.addLayout(file_row)

        self.table = QTableWidget(0, len(TABLE_COLUMNS))
        self.table.setHorizontalHeaderLabels(TABLE_COLUMNS)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(MESSAGE_COLUMN, QHeaderView.Stretch)
        zip_layout.addWidget(self.table)

        self.counts_label = QLabel()
        self.counts_label.setStyleSheet(HINT_STYLE)
        zip_layout.addWidget(self.counts_label)

        zip_group.setLayout(zip_layout)
        layout.addWidget(zip_group, 1)

        # Upload
        upload_row = QHBoxLayout()
        self.progress_bar = QProgressBar()
        self.progress_bar.setValue(0)
        upload_row.addWidget(self.progress_bar, 1)
        self.btn_upload = QPushButton("Uploaden")
        self.btn_upload.setProperty("accent", True)
        self.btn_upload.setEnabled(False)
        self.btn_upload.clicked.connect(self.start_upload)
        upload_row.addWidget(self.btn_upload)
        layout.addLayout(upload_row)

        self.summary_label = QLabel()
        self.summary_label.setWordWrap(True)
        layout.addWidget(self.summary_label)

    def _save_example(self):
        default = str(self.context.export_dir / EXAMPLE_ZIP_FILENAME)
        path, _ = QFileDialog.getSaveFileName(self, "Voorbeeld opslaan", default, "ZIP (*.zip)")
        if not path:
            return
        try:
            Path(path).write_bytes(build_example_zip())
        except OSError as e:
            show_error(self, "Opslaan mislukt", e)
            return
        logger.info(f"Example archive saved to {path}")

    def _choose_zip(self):
        path, _ = QFileDialog.getOpenFileName(self, "Kies ZIP-bestand", "", "ZIP (*.zip)")
        if path:
            self.load_archive(Path(path))

    def load_archive(self, path: Path):
        """Scan archive and check article IDs."""
        self.summary_label.clear()
        self.progress_bar.setValue(0)
        try:
            entries = scan_zip_archive(path)
            validate_document_articles(self.context.database, entries)
        except SafetyDocsBaseException as e:
            if self.error_handler and self.error_handler(e, "ZIP-bestand laden mislukt"):
                return
            show_error(self, "ZIP-bestand laden mislukt", e)
            return

        self.entries = entries
        self.file_label.setText(str(path))
        self._populate_table()
        self._update_counts()

    def _populate_table(self):
        self.table.setRowCount(len(self.entries))
        for row, entry in enumerate(self.entries):
            values = [
                entry.filename,
                entry.artikel_id or "",
                entry.taal or "",
                f"V{entry.versie}" if entry.versie else "",
                f"{entry.size_kb:.1f} KB",
            ]
            for col, value in enumerate(values):
                self.table.setItem(row, col, QTableWidgetItem(value))
            self._update_row(row, entry)
        self.table.resizeColumnsToContents()

    def _update_row(self, row: int, entry: DocumentEntry):
        status_item = QTableWidgetItem(STATUS_LABELS.get(entry.status, entry.status))
        self.table.setItem(row, STATUS_COLUMN, status_item)
        label = QLabel(STATUS_LABELS.get(entry.status, entry.status))
        label.setStyleSheet(status_style(entry.status))
        self.table.setCellWidget(row, STATUS_COLUMN, label)
        self.table.setItem(row, MESSAGE_COLUMN, QTableWidgetItem(entry.error or ""))

    def _update_counts(self):
        summary = get_document_summary(self.entries)
        self.counts_label.setText(
            f"{summary['total']} bestanden: {summary['pending']} klaar voor upload, "
            f"{summary['success']} geüpload, {summary['error']} met fout"
        )
        self.btn_upload.setEnabled(summary["pending"] > 0 and self.worker is None)

    def start_upload(self):
        """Upload pending entries in a worker thread."""
        if not any(e.is_pending for e in self.entries):
            return

        self.btn_upload.setEnabled(False)
        self.btn_choose.setEnabled(False)
        self.progress_bar.setValue(0)

        self.worker = DocumentUploadWorker(self.context.database, self.context.storage, self.entries)
        self.worker.started_file.connect(self._on_file_started)
        self.worker.progress.connect(self._on_progress)
        self.worker.finished.connect(self._on_finished)
        self.worker.error.connect(self._on_error)
        self.worker.start()

    def _on_file_started(self, row: int):
        self._update_row(row, self.entries[row])
        self._update_counts()

    def _on_progress(self, row: int, index: int, total: int):
        self.progress_bar.setValue(int(index / total * 100))
        self._update_row(row, self.entries[row])
        self._update_counts()

    def _on_finished(self, summary: dict):
        self._finish_worker()
        self._update_counts()

        message = describe_upload_outcome(summary["uploaded"], summary["failed"])
        self.summary_label.setText(message)
        self.summary_label.setStyleSheet(ERROR_STYLE if summary["failed"] else SUCCESS_STYLE)

        if summary["uploaded"]:
            self.documents_uploaded.emit()

    def _on_error(self, message: str):
        self._finish_worker()
        self._update_counts()
        QMessageBox.critical(self, "Upload mislukt", message)

    def _finish_worker(self):
        if self.worker is not None:
            self.worker.wait()
            self.worker = None
        self.btn_choose.setEnabled(True)
