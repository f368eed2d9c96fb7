# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the CyberGuard client."""

import os
from dataclasses import dataclass
from pathlib import Path

from .version import __version__

DEFAULT_BASE_URL = "https://cybergaurdapi.onrender.com/api"
DEFAULT_USER_AGENT = f"CyberGuard-Client/{__version__}"


def _default_token_path() -> str:
    config_home = os.getenv("XDG_CONFIG_HOME") or os.path.join(Path.home(), ".config")
    return os.path.join(config_home, "cyberguard", "session.json")


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _url_env(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value.startswith(("http://", "https://")):
        return default
    return value.rstrip("/")


@dataclass
class ClientSettings:
    """API client defaults. Every endpoint is resolved against ``base_url``."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 15.0
    max_retries: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 0.5
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    token_path: str | None = None
    sync_interval: float = 10.0

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if self.token_path is None:
            self.token_path = _default_token_path()

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        sync_interval = _float_env("CYBERGUARD_SYNC_INTERVAL", cls.sync_interval)
        if sync_interval < 0:
            sync_interval = cls.sync_interval
        return cls(
            base_url=_url_env("CYBERGUARD_API_URL", cls.base_url),
            timeout=_float_env("CYBERGUARD_HTTP_TIMEOUT", cls.timeout),
            max_retries=_int_env("CYBERGUARD_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("CYBERGUARD_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("CYBERGUARD_HTTP_INITIAL_DELAY", cls.initial_delay),
            user_agent=os.getenv("CYBERGUARD_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("CYBERGUARD_HTTP_VERIFY_SSL", cls.verify_ssl),
            token_path=os.getenv("CYBERGUARD_TOKEN_PATH") or None,
            sync_interval=sync_interval,
        )


def load_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
