"""
UI Styles for Veiligheidsbladen Beheer.

Centralized Qt stylesheet definitions and small style helpers.
"""

from config.constants import (
    ACCENT_COLOR,
    ERROR_COLOR,
    MUTED_COLOR,
    PRIMARY_COLOR,
    SUCCESS_COLOR,
    WARNING_COLOR,
)


# ==================== Qt Stylesheet ====================

MAIN_STYLESHEET = f"""
QMainWindow, QDialog {{
    background-color: #f5f6fa;
    font-family: 'Segoe UI', Arial, sans-serif;
    font-size: 10pt;
}}

QToolBar {{
    background-color: {PRIMARY_COLOR};
    border: none;
    spacing: 8px;
    padding: 4px;
}}

QToolBar QLabel {{
    color: white;
}}

QPushButton {{
    background-color: {PRIMARY_COLOR};
    color: white;
    border: none;
    padding: 8px 16px;
    border-radius: 4px;
    font-weight: bold;
}}

QPushButton:hover {{
    background-color: #0a2f73;
}}

QPushButton:disabled {{
    background-color: #cccccc;
    color: #666666;
}}

QPushButton[accent="true"] {{
    background-color: {ACCENT_COLOR};
    color: {PRIMARY_COLOR};
}}

QLineEdit, QComboBox {{
    border: 1px solid #cccccc;
    border-radius: 4px;
    padding: 6px;
    background-color: white;
}}

QLineEdit:focus, QComboBox:focus {{
    border: 2px solid {PRIMARY_COLOR};
}}

QTableWidget {{
    border: 1px solid #cccccc;
    border-radius: 4px;
    background-color: white;
    gridline-color: #e0e0e0;
}}

QTableWidget::item:selected {{
    background-color: {PRIMARY_COLOR};
    color: white;
}}

QHeaderView::section {{
    background-color: #eef0f5;
    padding: 6px;
    border: none;
    font-weight: bold;
}}

QGroupBox {{
    font-weight: bold;
    border: 1px solid #d0d4de;
    border-radius: 6px;
    margin-top: 12px;
    padding-top: 10px;
}}

QGroupBox::title {{
    subcontrol-origin: margin;
    left: 10px;
    color: {PRIMARY_COLOR};
}}

QTabBar::tab {{
    padding: 8px 18px;
}}

QTabBar::tab:selected {{
    border-bottom: 3px solid {ACCENT_COLOR};
    font-weight: bold;
}}
"""

# ==================== Status Colors ====================

STATUS_COLORS = {
    "pending": MUTED_COLOR,
    "uploading": WARNING_COLOR,
    "success": SUCCESS_COLOR,
    "error": ERROR_COLOR,
}

STATUS_LABELS = {
    "pending": "Wachtend",
    "uploading": "Uploaden...",
    "success": "Geüpload",
    "error": "Fout",
}

HINT_STYLE = f"color: {MUTED_COLOR}; font-size: 9pt;"
ERROR_STYLE = f"color: {ERROR_COLOR}; font-weight: bold;"
SUCCESS_STYLE = f"color: {SUCCESS_COLOR}; font-weight: bold;"


def badge_style(present: bool) -> str:
    """Stylesheet for a language badge (filled when a sheet exists)."""
    if present:
        return (
            f"background-color: {SUCCESS_COLOR}; color: white; "
            "border-radius: 8px; padding: 2px 6px; font-size: 8pt;"
        )
    return (
        "background-color: #e0e0e0; color: #888888; "
        "border-radius: 8px; padding: 2px 6px; font-size: 8pt;"
    )


def status_style(status: str) -> str:
    """Stylesheet for an upload status label."""
    color = STATUS_COLORS.get(status, MUTED_COLOR)
    return f"color: {color}; font-weight: bold;"


# ==================== Palette ====================

LIGHT_PALETTE = {
    "Window": "#ffffff",
    "WindowText": "#000000",
    "Base": "#ffffff",
    "AlternateBase": "#f5f5f5",
    "ToolTipBase": "#ffffff",
    "ToolTipText": "#000000",
    "Text": "#000000",
    "Button": "#ffffff",
    "ButtonText": "#000000",
    "BrightText": ERROR_COLOR,
    "Link": PRIMARY_COLOR,
    "Highlight": PRIMARY_COLOR,
    "HighlightedText": "#ffffff",
}


def build_light_palette():
    """Light QPalette matching MAIN_STYLESHEET."""
    from PySide6.QtGui import QColor, QPalette

    palette = QPalette()
    for role, color in LIGHT_PALETTE.items():
        palette.setColor(getattr(QPalette.ColorRole, role), QColor(color))
    return palette
