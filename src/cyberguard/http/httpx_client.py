# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import ClientSettings, load_settings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import has_header, normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    The underlying ``httpx.Client`` keeps a cookie jar for the lifetime of the
    wrapper, which is how the backend's refresh-token cookie travels.
    """

    def __init__(self, settings: ClientSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_settings()
        self._client = client or httpx.Client(
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def export_cookies(self) -> list[dict[str, str]]:
        """Snapshot the jar as plain dicts so a later process can resume it."""
        return [
            {"name": cookie.name, "value": cookie.value or "", "domain": cookie.domain, "path": cookie.path}
            for cookie in self._client.cookies.jar
        ]

    def load_cookies(self, cookies: list[dict[str, str]]) -> None:
        for entry in cookies:
            name = entry.get("name")
            if not name:
                continue
            self._client.cookies.set(
                name,
                entry.get("value", ""),
                domain=entry.get("domain", ""),
                path=entry.get("path") or "/",
            )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        for name, value in (("User-Agent", self.settings.user_agent), ("Accept", "application/json")):
            if not has_header(headers, name):
                headers[name] = value
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc),
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc),
            )

        logger.debug("%s %s -> %s", request.method, request.url, resp.status_code)
        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=normalize_headers(dict(resp.headers)),
            text=resp.text,
            url=str(resp.url),
        )

    def close(self) -> None:
        self._client.close()
