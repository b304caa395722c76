"""
Application constants for Veiligheidsbladen Beheer.

Centralized location for all application-wide constants.
"""

# ==================== Application Info ====================

APP_NAME = "Veiligheidsbladen Beheer"
APP_VERSION = "1.0.0"
APP_ORGANIZATION = "Safety Documentation"

# ==================== Backend ====================

ARTICLE_TABLE = "artikelen"
SAFETY_SHEET_TABLE = "veiligheidsbladen"

STORAGE_BUCKET = "safety-docs"
STORAGE_CATEGORY = "veiligheidsbladen"
LATEST_FOLDER = "latest"
STORAGE_FILE_STEM = "veiligheidsblad"
CACHE_CONTROL_SECONDS = "3600"
SIGNED_URL_EXPIRY_SECONDS = 3600

# PostgREST keeps query strings short; IN-filters are sent in chunks
IN_FILTER_CHUNK_SIZE = 100

# Unique constraint violation (Postgres SQLSTATE)
UNIQUE_VIOLATION_CODE = "23505"

# ==================== Auth ====================

SESSION_TIMEOUT_SECONDS = 5.0
MIN_PASSWORD_LENGTH = 6
DEFAULT_USER_ROLE = "admin"

AUTH_ERROR_KEYWORDS = ["refresh", "token", "unauthorized", "invalid"]
AUTH_ERROR_STATUSES = [400, 401, 403]

# ==================== Languages ====================

# Order is the display order in the UI
TALEN = {
    "NL": "Nederlands",
    "EN": "English",
    "DE": "Deutsch",
    "FR": "Français",
}
TAAL_CODES = list(TALEN.keys())

# ==================== File Extensions ====================

DOCUMENT_EXTENSIONS = ["pdf", "doc", "docx"]
ALLOWED_DOCUMENT_EXTENSIONS = [".pdf", ".doc", ".docx"]
CSV_EXTENSIONS = [".csv"]
ZIP_EXTENSIONS = [".zip"]

DOCUMENT_CONTENT_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

# ==================== Validation Limits ====================

MAX_ZIP_SIZE_MB = 50
MAX_ZIP_UNCOMPRESSED_MB = 500  # Sum of entry sizes after extraction
MAX_CSV_SIZE_MB = 5
MAX_DOCUMENT_SIZE_MB = 10

MAX_UNIEKE_ID_LENGTH = 100
MAX_NAAM_LENGTH = 255
MAX_REFERENCE_LENGTH = 100
MAX_EAN_LENGTH = 14

CSV_PREVIEW_ROWS = 10

# ==================== CSV Columns ====================

ARTICLE_REQUIRED_COLUMNS = ["naam", "unieke_id"]
ARTICLE_OPTIONAL_COLUMNS = ["referentie_rubix", "referentie_fabrikant", "ean"]

ARTICLE_EXPORT_COLUMNS = [
    "unieke_id",
    "naam",
    "referentie_rubix",
    "referentie_fabrikant",
    "ean",
    "created_at",
    "updated_at",
]

SAFETY_SHEET_EXPORT_COLUMNS = [
    "veiligheidsblad_id",
    "artikel_unieke_id",
    "artikel_naam",
    "taal",
    "versie",
    "bestandsnaam",
    "storage_path",
    "geupload_op",
]

EXPORT_KINDS = ["artikelen", "veiligheidsbladen", "alles"]

TEMPLATE_FILENAME = "artikelen_template.csv"
EXAMPLE_ZIP_FILENAME = "voorbeeld-veiligheidsbladen.zip"

# ==================== UI Colors ====================

PRIMARY_COLOR = "#051e50"
ACCENT_COLOR = "#ffd700"
SUCCESS_COLOR = "#28a745"
WARNING_COLOR = "#ffc107"
ERROR_COLOR = "#dc3545"
MUTED_COLOR = "#6c757d"

# ==================== Messages ====================

ERROR_MESSAGES = {
    "missing_extension": "Geen bestandsextensie gevonden",
    "unsupported_extension": "Alleen PDF, DOC en DOCX bestanden zijn toegestaan",
    "wrong_field_count": "Bestandsnaam moet format hebben: {artikel_id}_{taal}_V{versie}",
    "bad_version": "Versie moet format hebben: V{nummer} (bijvoorbeeld V1, V2)",
    "unsupported_language": "Taal moet zijn: NL, EN, FR of DE",
    "unknown_article": "Artikel ID '{artikel_id}' bestaat niet in de database",
    "invalid_zip": "Alleen ZIP bestanden zijn toegestaan",
    "zip_too_large": "ZIP bestand is te groot (max {max_mb}MB)",
    "zip_content_too_large": "Uitgepakte inhoud van ZIP bestand is te groot (max {max_mb}MB)",
    "invalid_csv": "Alleen CSV bestanden zijn toegestaan",
    "csv_too_large": "Bestand is te groot (max {max_mb}MB)",
    "csv_empty": "CSV bestand moet minimaal een header en één data rij bevatten",
    "csv_missing_columns": "Verplichte kolommen ontbreken: {columns}",
    "invalid_document": "Alleen PDF en Word documenten zijn toegestaan",
    "document_too_large": "Bestand is te groot (max {max_mb}MB)",
    "no_data": "Geen gegevens beschikbaar",
    "missing_fields": "Vul alle velden in",
    "password_too_short": "Wachtwoord moet minimaal {min_length} tekens bevatten",
    "login_failed": "Onjuiste email of wachtwoord",
    "auth_timeout": "Auth timeout",
    "session_expired": "Je sessie is verlopen. Log opnieuw in.",
    "no_pending_files": "Geen bestanden om te uploaden",
}

SUCCESS_MESSAGES = {
    "account_created": "Account aangemaakt! Je kunt nu inloggen.",
    "article_created": "Artikel '{naam}' toegevoegd",
    "sheet_uploaded": "Veiligheidsblad {taal} versie {versie} geüpload",
    "import_done": "{count} artikelen geïmporteerd",
    "export_done": "{count} rijen geëxporteerd naar {filename}",
    "upload_all_success": "Alle {count} bestanden succesvol geüpload!",
    "upload_partial": "{success} bestanden geüpload, {failed} mislukt",
    "upload_all_failed": "Alle uploads zijn mislukt",
}
