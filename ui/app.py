"""
Application controller for Veiligheidsbladen Beheer.

Owns the session lifecycle:
1. Restore persisted session (bounded wait)
2. No session -> LoginDialog
3. MainWindow until sign-out or auth error -> back to 2
"""

import logging

try:
    from PySide6.QtWidgets import QDialog
    from PySide6.QtCore import QObject, Qt, Signal
    PYSIDE6_AVAILABLE = True
except ImportError:
    PYSIDE6_AVAILABLE = False
    QObject = object
    Signal = object

from config.app_context import AppContext
from operations.auth_ops import get_initial_session

logger = logging.getLogger(__name__)


class SafetyDocsApp(QObject):
    """
    Switches between login screen and main window.

    Auth events from the backend may arrive on another thread; they are
    re-emitted through auth_event so handling happens on the GUI thread.
    Session changes are handled queued, after the triggering slot returned.
    """

    auth_event = Signal(str)

    def __init__(self, context: AppContext, qt_app):
        if not PYSIDE6_AVAILABLE:
            raise EnvironmentError(
                "PySide6 is not installed. Install with: pip install PySide6"
            )

        super().__init__()

        self.context = context
        self.qt_app = qt_app
        # Window switches via login dialog; quit explicitly
        qt_app.setQuitOnLastWindowClosed(False)
        self.window = None

        self.auth_event.connect(self._on_auth_event, Qt.QueuedConnection)
        self._subscription = context.auth.on_auth_state_change(
            lambda event, session: self.auth_event.emit(event)
        )

    def start(self) -> bool:
        """
        Show the first screen.

        Returns:
            False if the user closed the login screen without signing in
        """
        session = get_initial_session(self.context.auth, self.context.settings.session_timeout)
        if session:
            self.context = self.context.with_session(session)
            self._show_main_window()
            return True
        return self._show_login()

    def _show_login(self) -> bool:
        from ui.dialogs import LoginDialog

        dialog = LoginDialog(self.context.auth)
        if dialog.exec() != QDialog.Accepted or dialog.session is None:
            logger.info("Login cancelled")
            return False

        self.context = self.context.with_session(dialog.session)
        self._show_main_window()
        return True

    def _show_main_window(self):
        from ui.main_window import MainWindow

        self.window = MainWindow(self.context)
        self.window.signed_out.connect(self._on_signed_out, Qt.QueuedConnection)
        self.window.closed.connect(self.qt_app.quit)
        self.window.show()

    def _on_signed_out(self):
        logger.info("Session ended, showing login")
        self.context = self.context.clear_session()
        window, self.window = self.window, None
        if window is not None:
            window.deleteLater()
        if not self._show_login():
            self.qt_app.quit()

    def _on_auth_event(self, event: str):
        if event == "TOKEN_REFRESHED":
            logger.info("Auth token refreshed")
        elif event == "SIGNED_OUT" and self.window is not None:
            logger.info("Signed out by auth service")
            self.window.end_session()
        else:
            logger.debug(f"Auth event: {event}")

    def shutdown(self):
        """Release the auth subscription."""
        try:
            self._subscription.unsubscribe()
        except Exception as e:
            logger.warning(f"Could not unsubscribe from auth events: {e}")


def run_app(context: AppContext, qt_app) -> int:
    """
    Run the GUI event loop.

    Returns:
        Exit code
    """
    controller = SafetyDocsApp(context, qt_app)
    if not controller.start():
        controller.shutdown()
        return 0

    exit_code = qt_app.exec()
    controller.shutdown()
    return exit_code


__all__ = ["SafetyDocsApp", "run_app"]
