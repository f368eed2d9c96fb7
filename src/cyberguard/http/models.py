# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across the client."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any

from ..config import ClientSettings
from ..errors import ErrorCategory
from .headers import has_header, normalize_headers

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None

    @classmethod
    def json(cls, url: str, method: str, payload: Any, headers: Headers | None = None) -> HttpRequest:
        """Build a request carrying a JSON-encoded body."""
        request = cls(url=url, method=method, headers=dict(headers or {}), body=json.dumps(payload))
        return request.with_headers({"Content-Type": "application/json"})

    def with_headers(self, extra: Headers) -> HttpRequest:
        """Return a copy with ``extra`` applied underneath the existing headers.

        A header the request already carries wins regardless of name casing.
        """
        merged = {name: value for name, value in extra.items() if not has_header(self.headers, name)}
        merged.update(self.headers or {})
        return replace(self, headers=merged)


@dataclass
class HttpResponse:
    """Normalized HTTP response; ``ok`` is False only for transport failures."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON; an empty body decodes to ``None``."""
        if not self.text.strip():
            return None
        return json.loads(self.text)

    def json_or_none(self) -> Any:
        try:
            return self.json()
        except ValueError:
            return None

    @classmethod
    def from_json(cls, status_code: int, payload: Any, headers: Headers | None = None) -> HttpResponse:
        """Helper to build a JSON response (used by stub clients)."""
        merged = {"content-type": "application/json"}
        merged.update(normalize_headers(headers))
        text = "" if payload is None else json.dumps(payload)
        return cls(ok=True, status_code=status_code, headers=merged, text=text)


@dataclass
class RetryConfig:
    """Retry policy for transport failures derived from ClientSettings."""

    max_attempts: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 0.5

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> RetryConfig:
        """Build a retry config from the shared ClientSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
        )
