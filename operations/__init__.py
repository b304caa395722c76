"""
Operations layer for Veiligheidsbladen Beheer.

Business logic operations - pure functions with dependency injection.
Backends (database, storage, auth) are passed in explicitly.
"""

from .article_ops import (
    load_articles,
    create_article,
    validate_article_form,
    filter_articles,
    get_existing_unique_ids,
    get_article_count_label,
)

from .sheet_ops import (
    load_sheets_for_article,
    load_all_sheets,
    get_latest_sheets,
    get_next_version,
    validate_document_file,
    upload_safety_sheet,
    get_sheet_url,
)

from .import_ops import (
    validate_import_file,
    parse_articles_csv,
    preview_rows,
    import_articles,
    get_import_summary,
    build_template_csv,
)

from .export_ops import (
    export_filename,
    export_articles,
    export_safety_sheets,
    export_all,
    run_export,
)

from .document_ops import (
    create_document_entry,
    scan_zip_archive,
    validate_document_articles,
    upload_document,
    upload_documents,
    get_document_summary,
    describe_upload_outcome,
)

from .auth_ops import (
    get_initial_session,
    sign_in,
    sign_up,
    sign_out,
    handle_operation_error,
    check_connection,
)

__all__ = [
    # Article Operations
    "load_articles",
    "create_article",
    "validate_article_form",
    "filter_articles",
    "get_existing_unique_ids",
    "get_article_count_label",
    # Safety Sheet Operations
    "load_sheets_for_article",
    "load_all_sheets",
    "get_latest_sheets",
    "get_next_version",
    "validate_document_file",
    "upload_safety_sheet",
    "get_sheet_url",
    # Import Operations
    "validate_import_file",
    "parse_articles_csv",
    "preview_rows",
    "import_articles",
    "get_import_summary",
    "build_template_csv",
    # Export Operations
    "export_filename",
    "export_articles",
    "export_safety_sheets",
    "export_all",
    "run_export",
    # Bulk Document Operations
    "create_document_entry",
    "scan_zip_archive",
    "validate_document_articles",
    "upload_document",
    "upload_documents",
    "get_document_summary",
    "describe_upload_outcome",
    # Auth Operations
    "get_initial_session",
    "sign_in",
    "sign_up",
    "sign_out",
    "handle_operation_error",
    "check_connection",
]
