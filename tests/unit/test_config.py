"""
Unit tests for configuration and application context.
"""

from pathlib import Path

import pytest

from config.app_context import create_app_context
from config.settings import Settings, get_settings, reset_settings
from data import create_backend
from domain.exceptions import AuthError


ENV_VARS = [
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "VBB_BACKEND",
    "VBB_STORAGE_BUCKET",
    "VBB_EXPORT_DIR",
    "VBB_SESSION_TIMEOUT",
    "VBB_DEBUG",
    "VBB_LOG_LEVEL",
]


# ==================== Fixtures ====================


@pytest.fixture
def clean_env(monkeypatch):
    """Environment without any app variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield monkeypatch
    reset_settings()


@pytest.fixture
def backend():
    return create_backend("memory")


# ==================== Settings Tests ====================


def test_settings_defaults(clean_env):
    """Test values without environment."""
    settings = Settings.from_env()

    assert settings.backend == "supabase"
    assert settings.storage_bucket == "safety-docs"
    assert settings.session_timeout == 5.0
    assert settings.window_width == 1200
    assert settings.window_height == 800
    assert settings.debug_mode is False
    assert settings.export_dir.name == "exports"


def test_settings_from_env(clean_env, tmp_path):
    """Test environment overrides."""
    clean_env.setenv("SUPABASE_URL", "https://project.supabase.co")
    clean_env.setenv("SUPABASE_ANON_KEY", "anon-key")
    clean_env.setenv("VBB_BACKEND", "MEMORY")
    clean_env.setenv("VBB_STORAGE_BUCKET", "documenten")
    clean_env.setenv("VBB_EXPORT_DIR", str(tmp_path))
    clean_env.setenv("VBB_SESSION_TIMEOUT", "2.5")
    clean_env.setenv("VBB_DEBUG", "True")
    clean_env.setenv("VBB_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.backend == "memory"
    assert settings.supabase_url == "https://project.supabase.co"
    assert settings.storage_bucket == "documenten"
    assert settings.export_dir == Path(tmp_path)
    assert settings.session_timeout == 2.5
    assert settings.debug_mode is True
    assert settings.log_level == "DEBUG"


def test_settings_validate():
    """Test startup problems."""
    assert Settings(backend="supabase").validate() == [
        "SUPABASE_URL ontbreekt",
        "SUPABASE_ANON_KEY ontbreekt",
    ]
    assert Settings(backend="supabase", supabase_url="u", supabase_anon_key="k").validate() == []
    assert Settings(backend="memory").validate() == []
    assert Settings(backend="sqlite").validate() == ["Onbekende backend: sqlite"]


def test_settings_to_dict_omits_key():
    """The API key is never serialized."""
    data = Settings(supabase_url="u", supabase_anon_key="geheim").to_dict()

    assert data["supabase_url"] == "u"
    assert "supabase_anon_key" not in data
    assert "geheim" not in str(data)


def test_get_settings_cached(clean_env):
    """Test lazy global instance and reset."""
    first = get_settings()
    assert get_settings() is first

    reset_settings()
    assert get_settings() is not first


# ==================== App Context Tests ====================


def test_app_context_session_lifecycle(backend, tmp_path):
    """with_session/clear_session return new contexts."""
    settings = Settings(backend="memory", export_dir=tmp_path)
    context = create_app_context(backend.database, backend.storage, backend.auth, settings=settings)

    assert not context.has_session()
    assert context.user_email is None
    assert context.export_dir == tmp_path
    assert context.app_version == settings.app_version

    backend.auth.sign_up("admin@example.com", "geheim123")
    session = backend.auth.sign_in_with_password("admin@example.com", "geheim123")
    signed_in = context.with_session(session)

    assert signed_in is not context
    assert not context.has_session()
    assert signed_in.user_email == "admin@example.com"
    assert signed_in.require_session() is session
    assert signed_in.database is context.database

    signed_out = signed_in.clear_session()
    assert not signed_out.has_session()
    assert signed_in.has_session()


def test_require_session_without_session(backend):
    """Test missing session raises AuthError 401."""
    context = create_app_context(
        backend.database, backend.storage, backend.auth, settings=Settings(backend="memory")
    )

    with pytest.raises(AuthError) as exc_info:
        context.require_session()

    assert exc_info.value.status == 401
