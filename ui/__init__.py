"""
UI package for Veiligheidsbladen Beheer.

PySide6-based Qt application.
"""

from .main_window import MainWindow
from .app import SafetyDocsApp, run_app

__all__ = [
    "MainWindow",
    "SafetyDocsApp",
    "run_app",
]
