"""Tests for swot_engine.config."""
import pytest
from pydantic import ValidationError

from swot_engine.config import Settings


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-pro")
    monkeypatch.setenv("MAX_UPLOAD_MB", "5")

    s = Settings(_env_file=None)
    assert s.GEMINI_API_KEY == "env-key"
    assert s.GEMINI_MODEL == "gemini-2.5-pro"
    assert s.max_upload_bytes == 5 * 1024 * 1024
    assert s.has_api_key


def test_defaults_without_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)

    s = Settings(_env_file=None)
    assert s.GEMINI_MODEL == "gemini-2.5-flash"
    assert not s.has_api_key


def test_settings_are_immutable():
    s = Settings(GEMINI_API_KEY="k", _env_file=None)
    with pytest.raises(ValidationError):
        s.GEMINI_API_KEY = "other"
