"""
Application settings for Veiligheidsbladen Beheer.

Loads settings from environment variables or uses defaults.
Provides centralized configuration management.
"""

import os
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field

from .constants import (
    APP_VERSION,
    STORAGE_BUCKET,
    SESSION_TIMEOUT_SECONDS,
    SIGNED_URL_EXPIRY_SECONDS,
)
from .paths import get_default_export_dir

BACKENDS = ("supabase", "memory")


@dataclass
class Settings:
    """
    Application settings.

    Can be loaded from environment variables or initialized with defaults.
    """

    # Application info
    app_version: str = APP_VERSION

    # Backend settings
    backend: str = "supabase"  # "supabase" or "memory" (offline demo)
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    storage_bucket: str = STORAGE_BUCKET

    # Auth settings
    session_timeout: float = SESSION_TIMEOUT_SECONDS
    signed_url_expiry: int = SIGNED_URL_EXPIRY_SECONDS

    # Exports (CSV, template, example ZIP)
    export_dir: Path = field(default_factory=get_default_export_dir)

    # UI settings
    window_width: int = 1200
    window_height: int = 800

    # Debug settings
    debug_mode: bool = False
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        Environment variables:
        - SUPABASE_URL: Project URL of the hosted backend
        - SUPABASE_ANON_KEY: Public (anon) API key
        - VBB_BACKEND: "supabase" (default) or "memory"
        - VBB_STORAGE_BUCKET: Object storage bucket for documents
        - VBB_EXPORT_DIR: Default directory for exports
        - VBB_SESSION_TIMEOUT: Seconds to wait for the initial session
        - VBB_DEBUG: Enable debug mode (true/false)
        - VBB_LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR)

        Returns:
            Settings instance with values from environment or defaults
        """
        export_dir = os.getenv("VBB_EXPORT_DIR")
        return cls(
            backend=os.getenv("VBB_BACKEND", "supabase").lower(),
            supabase_url=os.getenv("SUPABASE_URL"),
            supabase_anon_key=os.getenv("SUPABASE_ANON_KEY"),
            storage_bucket=os.getenv("VBB_STORAGE_BUCKET", STORAGE_BUCKET),
            session_timeout=float(os.getenv("VBB_SESSION_TIMEOUT", SESSION_TIMEOUT_SECONDS)),
            export_dir=Path(export_dir) if export_dir else get_default_export_dir(),
            debug_mode=os.getenv("VBB_DEBUG", "false").lower() == "true",
            log_level=os.getenv("VBB_LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> List[str]:
        """
        Check settings for problems that prevent startup.

        Returns:
            List of problem descriptions (empty if settings are usable)
        """
        problems = []
        if self.backend not in BACKENDS:
            problems.append(f"Onbekende backend: {self.backend}")
        if self.backend == "supabase":
            if not self.supabase_url:
                problems.append("SUPABASE_URL ontbreekt")
            if not self.supabase_anon_key:
                problems.append("SUPABASE_ANON_KEY ontbreekt")
        return problems

    def to_dict(self) -> dict:
        """Convert settings to dictionary for serialization (key omitted)."""
        return {
            "app_version": self.app_version,
            "backend": self.backend,
            "supabase_url": self.supabase_url,
            "storage_bucket": self.storage_bucket,
            "session_timeout": self.session_timeout,
            "signed_url_expiry": self.signed_url_expiry,
            "export_dir": str(self.export_dir),
            "window_width": self.window_width,
            "window_height": self.window_height,
            "debug_mode": self.debug_mode,
            "log_level": self.log_level,
        }


# Global settings instance (lazy-loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get global settings instance.

    Lazy-loaded on first call. Loads from environment variables.

    Returns:
        Settings instance

    Example:
        >>> from config.settings import get_settings
        >>> settings = get_settings()
        >>> print(settings.storage_bucket)
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings():
    """
    Reset global settings instance.

    Useful for testing - forces reload from environment on next get_settings() call.
    """
    global _settings
    _settings = None
