# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Access-token storage.

A store holds at most one bearer token; ``set`` replaces it wholesale. Cookies
saved alongside it (the refresh-token cookie) share its lifetime: ``clear``
drops both. The file-backed store reads sessions saved under the legacy
``cyberguard_token`` key but only ever writes ``accessToken``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

TOKEN_KEY = "accessToken"
COOKIES_KEY = "cookies"
LEGACY_TOKEN_KEYS = ("cyberguard_token",)


class TokenStore(Protocol):
    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...

    def cookies(self) -> list[dict[str, str]]: ...

    def set_cookies(self, cookies: list[dict[str, str]]) -> None: ...


class MemoryTokenStore:
    def __init__(self, token: str | None = None):
        self._token = token or None
        self._cookies: list[dict[str, str]] = []

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        if not token:
            raise ValueError("Refusing to store an empty access token")
        self._token = token

    def clear(self) -> None:
        self._token = None
        self._cookies = []

    def cookies(self) -> list[dict[str, str]]:
        return list(self._cookies)

    def set_cookies(self, cookies: list[dict[str, str]]) -> None:
        self._cookies = list(cookies)


class FileTokenStore:
    """JSON file store, created with owner-only permissions."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Cannot read token file %s: %s", self.path, exc)
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt token file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        if not data:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Fresh file + replace so a pre-existing file's mode never survives.
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.unlink(missing_ok=True)
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh)
        os.replace(tmp, self.path)

    def get(self) -> str | None:
        data = self._read()
        for key in (TOKEN_KEY, *LEGACY_TOKEN_KEYS):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
        return None

    def set(self, token: str) -> None:
        if not token:
            raise ValueError("Refusing to store an empty access token")
        data = self._read()
        for key in LEGACY_TOKEN_KEYS:
            data.pop(key, None)
        data[TOKEN_KEY] = token
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        for key in (TOKEN_KEY, COOKIES_KEY, *LEGACY_TOKEN_KEYS):
            data.pop(key, None)
        self._write(data)

    def cookies(self) -> list[dict[str, str]]:
        entries = self._read().get(COOKIES_KEY)
        if not isinstance(entries, list):
            return []
        return [entry for entry in entries if isinstance(entry, dict)]

    def set_cookies(self, cookies: list[dict[str, str]]) -> None:
        data = self._read()
        if cookies:
            data[COOKIES_KEY] = list(cookies)
        else:
            data.pop(COOKIES_KEY, None)
        self._write(data)
