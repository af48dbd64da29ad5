"""Tests for config.py: environment-based configuration loading."""

import importlib
from pathlib import Path
from unittest.mock import patch

import pytest

import config


# ════════════════════════════════════════════════════════════
#  Helper to reimport config with fresh env
# ════════════════════════════════════════════════════════════

def _reload_config():
    """Reload config with dotenv patched out.

    ``load_dotenv()`` runs at module level and would restore variables
    from a local ``.env`` file, undoing ``monkeypatch.delenv`` calls.
    """
    with patch("dotenv.load_dotenv", return_value=None):
        importlib.reload(config)
    return config


@pytest.fixture(autouse=True)
def _restore_config():
    yield
    _reload_config()


# ════════════════════════════════════════════════════════════
#  GOOGLE_PLACES_API_KEY
# ════════════════════════════════════════════════════════════

class TestGooglePlacesApiKey:

    def test_default_value_is_empty(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_PLACES_API_KEY", raising=False)
        cfg = _reload_config()
        assert cfg.GOOGLE_PLACES_API_KEY == ""

    def test_reads_from_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "AIza-test-123")
        cfg = _reload_config()
        assert cfg.GOOGLE_PLACES_API_KEY == "AIza-test-123"

    def test_whitespace_only_is_empty(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "   ")
        cfg = _reload_config()
        assert cfg.GOOGLE_PLACES_API_KEY == ""


# ════════════════════════════════════════════════════════════
#  Provider request settings
# ════════════════════════════════════════════════════════════

class TestPlacesRequestTimeout:

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv("PLACES_REQUEST_TIMEOUT", raising=False)
        cfg = _reload_config()
        assert cfg.PLACES_REQUEST_TIMEOUT == 5.0

    def test_reads_from_env(self, monkeypatch):
        monkeypatch.setenv("PLACES_REQUEST_TIMEOUT", "2.5")
        cfg = _reload_config()
        assert cfg.PLACES_REQUEST_TIMEOUT == pytest.approx(2.5)

    def test_invalid_raises(self, monkeypatch):
        monkeypatch.setenv("PLACES_REQUEST_TIMEOUT", "soon")
        with pytest.raises(ValueError):
            _reload_config()


class TestPlacesMinRequestInterval:

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv("PLACES_MIN_REQUEST_INTERVAL", raising=False)
        cfg = _reload_config()
        assert cfg.PLACES_MIN_REQUEST_INTERVAL == pytest.approx(0.1)

    def test_reads_from_env(self, monkeypatch):
        monkeypatch.setenv("PLACES_MIN_REQUEST_INTERVAL", "0")
        cfg = _reload_config()
        assert cfg.PLACES_MIN_REQUEST_INTERVAL == 0.0

    def test_is_float(self, monkeypatch):
        monkeypatch.setenv("PLACES_MIN_REQUEST_INTERVAL", "1")
        cfg = _reload_config()
        assert isinstance(cfg.PLACES_MIN_REQUEST_INTERVAL, float)


# ════════════════════════════════════════════════════════════
#  Logging and server
# ════════════════════════════════════════════════════════════

class TestLogSettings:

    def test_log_dir_default_beside_project(self, monkeypatch):
        monkeypatch.delenv("LOG_DIR", raising=False)
        cfg = _reload_config()
        assert cfg.LOG_DIR == Path(cfg.__file__).resolve().parent / "logs"

    def test_log_dir_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_DIR", str(tmp_path))
        cfg = _reload_config()
        assert cfg.LOG_DIR == tmp_path

    def test_log_level_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        cfg = _reload_config()
        assert cfg.LOG_LEVEL == "INFO"

    def test_log_level_upper_cased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        cfg = _reload_config()
        assert cfg.LOG_LEVEL == "DEBUG"


class TestPort:

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        cfg = _reload_config()
        assert cfg.PORT == 8000

    def test_reads_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        cfg = _reload_config()
        assert cfg.PORT == 9090

    def test_invalid_port_raises(self, monkeypatch):
        monkeypatch.setenv("PORT", "not-a-number")
        with pytest.raises(ValueError):
            _reload_config()
