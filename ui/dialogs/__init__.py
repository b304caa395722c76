"""
Dialogs for Veiligheidsbladen Beheer.
"""

from .login_dialog import LoginDialog
from .article_form_dialog import ArticleFormDialog
from .sheet_upload_dialog import SafetySheetUploadDialog
from .connection_test_dialog import ConnectionTestDialog

__all__ = [
    "LoginDialog",
    "ArticleFormDialog",
    "SafetySheetUploadDialog",
    "ConnectionTestDialog",
]
