# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx

from cyberguard import config
from cyberguard.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ClientSettings
from cyberguard.errors import (
    ApiError,
    ErrorCategory,
    TransportError,
    ValidationError,
    categorize_exception,
    error_category_to_reason,
)


def test_settings_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CYBERGUARD_API_URL", "http://localhost:5000/api/")
    monkeypatch.setenv("CYBERGUARD_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("CYBERGUARD_HTTP_RETRIES", "0")
    monkeypatch.setenv("CYBERGUARD_HTTP_BACKOFF", "1.5")
    monkeypatch.setenv("CYBERGUARD_HTTP_INITIAL_DELAY", "0.1")
    monkeypatch.setenv("CYBERGUARD_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("CYBERGUARD_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("CYBERGUARD_TOKEN_PATH", str(tmp_path / "t.json"))
    monkeypatch.setenv("CYBERGUARD_SYNC_INTERVAL", "30")

    settings = config.load_settings()

    assert settings.base_url == "http://localhost:5000/api"
    assert settings.timeout == 5.5
    assert settings.max_retries == 0
    assert settings.backoff_factor == 1.5
    assert settings.initial_delay == 0.1
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False
    assert settings.token_path == str(tmp_path / "t.json")
    assert settings.sync_interval == 30


def test_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("CYBERGUARD_API_URL", "not a url")
    monkeypatch.setenv("CYBERGUARD_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("CYBERGUARD_HTTP_RETRIES", "ten")
    monkeypatch.setenv("CYBERGUARD_SYNC_INTERVAL", "-4")
    monkeypatch.delenv("CYBERGUARD_USER_AGENT", raising=False)

    settings = config.load_settings()

    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout == ClientSettings.timeout
    assert settings.max_retries == ClientSettings.max_retries
    assert settings.sync_interval == ClientSettings.sync_interval
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_default_token_path_uses_xdg_config_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    settings = ClientSettings()
    assert settings.token_path == str(tmp_path / "cyberguard" / "session.json")


def test_categorize_exception_variants():
    assert categorize_exception(httpx.ReadTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("no host")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("other")) == ErrorCategory.UNKNOWN_ERROR


def test_error_reasons_and_messages():
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""
    assert "reach" in error_category_to_reason(ErrorCategory.CONNECTION_ERROR)

    err = TransportError("boom", ErrorCategory.TIMEOUT)
    assert err.reason == error_category_to_reason(ErrorCategory.TIMEOUT)

    api = ApiError(404, "Post not found")
    assert api.status_code == 404
    assert str(api) == "Post not found (HTTP 404)"

    invalid = ValidationError("Too short", ["description"])
    assert invalid.fields == ("description",)
