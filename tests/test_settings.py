"""Tests for Settings.from_env."""

import pytest

from contactbook.infrastructure import Settings
from contactbook.infrastructure.settings import DEFAULT_BASE_URL


def test_defaults(monkeypatch):
    for name in ("CONTACTBOOK_BASE_URL", "CONTACTBOOK_CSRF_TOKEN", "CONTACTBOOK_HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.csrf_token == ""
    assert settings.http_timeout is None


def test_values_from_env(monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_BASE_URL", "https://contacts.example.com/ ")
    monkeypatch.setenv("CONTACTBOOK_CSRF_TOKEN", " abc ")
    monkeypatch.setenv("CONTACTBOOK_HTTP_TIMEOUT", "2.5")
    settings = Settings.from_env()
    assert settings.base_url == "https://contacts.example.com"
    assert settings.csrf_token == "abc"
    assert settings.http_timeout == 2.5


def test_non_positive_timeout_means_no_timeout(monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_HTTP_TIMEOUT", "0")
    assert Settings.from_env().http_timeout is None


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_HTTP_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="CONTACTBOOK_HTTP_TIMEOUT"):
        Settings.from_env()
