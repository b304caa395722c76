"""
Export Tab for Veiligheidsbladen Beheer.

Writes articles and/or safety sheets to dated CSV files.
"""

import logging
from pathlib import Path

try:
    from PySide6.QtWidgets import (
        QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
        QGroupBox, QFileDialog, QMessageBox
    )
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QWidget = object

from config.app_context import AppContext
from config.constants import SUCCESS_MESSAGES
from domain.exceptions import SafetyDocsBaseException
from operations.export_ops import run_export
from services.file_service import FileService
from ui.errors import show_error
from ui.styles import HINT_STYLE

logger = logging.getLogger(__name__)


class ExportTab(QWidget):
    """
    Export tab.

    One button per export kind. Files are saved in the chosen folder
    (default: settings.export_dir) without overwriting existing files.
    """

    def __init__(self, context: AppContext, parent=None, error_handler=None):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.context = context
        self.error_handler = error_handler
        self.output_dir: Path = context.export_dir

        self._setup_ui()

    def _setup_ui(self):
        """Setup UI components."""
        layout = QVBoxLayout(self)

        # Destination
        dir_group = QGroupBox("Doelmap")
        dir_layout = QHBoxLayout()
        self.dir_label = QLabel(str(self.output_dir))
        self.dir_label.setStyleSheet(HINT_STYLE)
        dir_layout.addWidget(self.dir_label, 1)
        btn_choose = QPushButton("Wijzigen...")
        btn_choose.clicked.connect(self._choose_dir)
        dir_layout.addWidget(btn_choose)
        dir_group.setLayout(dir_layout)
        layout.addWidget(dir_group)

        # Exports
        export_group = QGroupBox("Exporteren naar CSV")
        export_layout = QVBoxLayout()

        info = QLabel(
            "Bestanden worden opgeslagen als UTF-8 CSV met BOM, "
            "zodat ze correct openen in Excel."
        )
        info.setWordWrap(True)
        info.setStyleSheet(HINT_STYLE)
        export_layout.addWidget(info)

        buttons = QHBoxLayout()
        for kind, label in (
            ("artikelen", "Artikelen exporteren"),
            ("veiligheidsbladen", "Veiligheidsbladen exporteren"),
            ("alles", "Alles exporteren"),
        ):
            btn = QPushButton(label)
            btn.clicked.connect(lambda checked=False, k=kind: self.export(k))
            buttons.addWidget(btn)
        export_layout.addLayout(buttons)

        self.result_label = QLabel()
        self.result_label.setWordWrap(True)
        export_layout.addWidget(self.result_label)

        export_group.setLayout(export_layout)
        layout.addWidget(export_group)
        layout.addStretch()

    def _choose_dir(self):
        directory = QFileDialog.getExistingDirectory(self, "Kies doelmap", str(self.output_dir))
        if directory:
            self.output_dir = Path(directory)
            self.dir_label.setText(directory)

    def export(self, kind: str):
        """Run export of the given kind and save the files."""
        try:
            files = run_export(self.context.database, kind)
            service = FileService(self.output_dir)
            saved = [service.save_bytes(name, content) for name, (content, _count) in files.items()]
        except SafetyDocsBaseException as e:
            if self.error_handler and self.error_handler(e, "Export mislukt"):
                return
            show_error(self, "Export mislukt", e)
            return
        except OSError as e:
            logger.error(f"Could not write export: {e}")
            show_error(self, "Export mislukt", e)
            return

        total = sum(count for _content, count in files.values())
        names = ", ".join(path.name for path in saved)
        logger.info(f"Export '{kind}' saved: {names}")
        self.result_label.setText(SUCCESS_MESSAGES["export_done"].format(count=total, filename=names))
        QMessageBox.information(self, "Export voltooid", f"Opgeslagen in {self.output_dir}:\n{names}")
