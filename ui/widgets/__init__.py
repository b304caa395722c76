"""
Reusable widgets for Veiligheidsbladen Beheer.
"""

from .sheet_panel import LanguageBadges, SafetySheetPanel

__all__ = [
    "LanguageBadges",
    "SafetySheetPanel",
]
