"""
Configuration package for Veiligheidsbladen Beheer.

Exports:
- Settings: Application settings
- Constants: Application constants

AppContext lives in config.app_context (it depends on the data layer,
which itself imports config.constants).
"""

from .settings import Settings, get_settings, reset_settings
from .constants import (
    APP_NAME,
    APP_VERSION,
    APP_ORGANIZATION,
    TALEN,
    TAAL_CODES,
    ERROR_MESSAGES,
    SUCCESS_MESSAGES,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reset_settings",
    # Constants
    "APP_NAME",
    "APP_VERSION",
    "APP_ORGANIZATION",
    "TALEN",
    "TAAL_CODES",
    "ERROR_MESSAGES",
    "SUCCESS_MESSAGES",
]
