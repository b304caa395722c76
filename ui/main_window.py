"""
Main Window for Veiligheidsbladen Beheer.

Tab-based UI shown after sign-in:
- Tab 1: Artikelen (articles and safety sheets)
- Tab 2: Export (CSV export)
- Tab 3: Import (CSV article import)
- Tab 4: Documenten (bulk upload from ZIP)
"""

import logging

try:
    from PySide6.QtWidgets import (
        QMainWindow, QTabWidget, QWidget, QVBoxLayout,
        QToolBar, QMessageBox, QLabel, QSizePolicy
    )
    from PySide6.QtCore import Qt, Signal
    from PySide6.QtGui import QAction
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QMainWindow = object
    Signal = object

from config import APP_NAME, APP_VERSION, ERROR_MESSAGES
from config.app_context import AppContext
from domain.rules import is_auth_error
from operations.auth_ops import handle_operation_error, sign_out

logger = logging.getLogger(__name__)

TAB_NAMES = ["Artikelen", "Export", "Import", "Documenten"]


class MainWindow(QMainWindow):
    """
    Main application window with tab-based UI.

    Features:
    - Four tabs: Artikelen, Export, Import, Documenten
    - Toolbar with signed-in user, connection test and sign out
    - Central auth error handling: any tab that hits an auth error
      ends the session and returns to the login screen

    Signals:
        signed_out(): User signed out or the session was invalidated
        closed(): Window closed by the user
    """

    signed_out = Signal()
    closed = Signal()

    def __init__(self, context: AppContext, parent=None):
        """
        Initialize main window.

        Args:
            context: AppContext with backends and an active session
            parent: Parent widget
        """
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__(parent)

        self.context = context
        self._closing_for_session = False

        try:
            context.require_session()
            logger.info(f"MainWindow initialized for user: {context.user_email}")
        except Exception as e:
            logger.error(f"MainWindow requires a session: {e}")
            raise

        self._setup_ui()
        self._create_tabs()
        self._setup_toolbar()
        self._setup_statusbar()

        logger.info("MainWindow initialized successfully")

    def _setup_ui(self):
        """Setup main window properties."""
        self.setWindowTitle(f"{APP_NAME} - v{APP_VERSION}")

        self.resize(
            self.context.settings.window_width,
            self.context.settings.window_height,
        )

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        self.main_layout = QVBoxLayout(central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

    def _create_tabs(self):
        """Create tab widget with the four tabs."""
        # Import tab classes here to avoid circular imports
        from ui.tabs import ArticlesTab, DocumentsTab, ExportTab, ImportTab

        self.tab_widget = QTabWidget()
        self.tab_widget.setTabPosition(QTabWidget.North)
        self.tab_widget.setMovable(False)

        self.articles_tab = ArticlesTab(self.context, parent=self, error_handler=self.handle_error)
        self.tab_widget.addTab(self.articles_tab, TAB_NAMES[0])

        self.export_tab = ExportTab(self.context, parent=self, error_handler=self.handle_error)
        self.tab_widget.addTab(self.export_tab, TAB_NAMES[1])

        self.import_tab = ImportTab(self.context, parent=self, error_handler=self.handle_error)
        self.tab_widget.addTab(self.import_tab, TAB_NAMES[2])

        self.documents_tab = DocumentsTab(self.context, parent=self, error_handler=self.handle_error)
        self.tab_widget.addTab(self.documents_tab, TAB_NAMES[3])

        # New data elsewhere -> refresh article list
        self.import_tab.articles_imported.connect(self.articles_tab.load_articles)
        self.documents_tab.documents_uploaded.connect(self.articles_tab.load_articles)

        self.main_layout.addWidget(self.tab_widget)

        logger.debug(f"Tabs created: {', '.join(TAB_NAMES)}")

    def _setup_toolbar(self):
        """Create toolbar with user info and session actions."""
        toolbar = QToolBar("Navigatie")
        toolbar.setMovable(False)
        self.addToolBar(Qt.TopToolBarArea, toolbar)

        test_action = QAction("Verbinding testen", self)
        test_action.triggered.connect(self._test_connection)
        toolbar.addAction(test_action)

        toolbar.addSeparator()

        spacer = QWidget()
        spacer.setSizePolicy(
            QSizePolicy.Expanding,
            QSizePolicy.Preferred
        )
        toolbar.addWidget(spacer)

        self.user_label = QLabel(f"<b>{self.context.user_email or ''}</b>")
        toolbar.addWidget(self.user_label)

        logout_action = QAction("Uitloggen", self)
        logout_action.triggered.connect(self._sign_out_clicked)
        toolbar.addAction(logout_action)

    def _setup_statusbar(self):
        """Create status bar."""
        self.tab_widget.currentChanged.connect(self._update_statusbar)
        self._update_statusbar(0)

    def _update_statusbar(self, index: int):
        """Update status bar when tab changes."""
        if 0 <= index < len(TAB_NAMES):
            self.statusBar().showMessage(f"Actief tabblad: {TAB_NAMES[index]}")

    def handle_error(self, error: Exception, title: str) -> bool:
        """
        Central handling for errors raised by backend calls.

        Auth-classified errors end the session and return to the login
        screen.

        Returns:
            True if the error was handled here, False if the caller
            should show it
        """
        if not is_auth_error(error):
            return False

        logger.warning(f"{title}: session invalidated ({error})")
        self.context = handle_operation_error(self.context, error)
        QMessageBox.warning(self, "Sessie verlopen", ERROR_MESSAGES["session_expired"])
        self.end_session()
        return True

    def _test_connection(self):
        from ui.dialogs import ConnectionTestDialog

        dialog = ConnectionTestDialog(self.context.auth, self.context.database, parent=self)
        dialog.exec()

    def _sign_out_clicked(self):
        reply = QMessageBox.question(
            self,
            "Uitloggen",
            "Weet je zeker dat je wilt uitloggen?",
            QMessageBox.Yes | QMessageBox.No,
        )
        if reply != QMessageBox.Yes:
            return

        sign_out(self.context.auth)
        self.context = self.context.clear_session()
        self.end_session()

    def end_session(self):
        """Close the window and report the ended session (once)."""
        if self._closing_for_session:
            return
        self._closing_for_session = True
        self.signed_out.emit()
        self.close()

    def closeEvent(self, event):
        """Handle window close event."""
        logger.info("MainWindow closing")
        if not self._closing_for_session:
            self.closed.emit()
        event.accept()
