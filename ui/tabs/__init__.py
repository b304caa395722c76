"""
Tabs package for the Veiligheidsbladen Beheer MainWindow.

Contains:
- ArticlesTab: Article list, search, safety sheets per language
- ExportTab: CSV export of articles and safety sheets
- ImportTab: CSV article import
- DocumentsTab: Bulk safety sheet upload from ZIP
"""

from .articles_tab import ArticlesTab
from .export_tab import ExportTab
from .import_tab import ImportTab
from .documents_tab import DocumentsTab

__all__ = ["ArticlesTab", "ExportTab", "ImportTab", "DocumentsTab"]
