# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bearer-token transport with a single refresh-and-retry on 401."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import ClientSettings, load_settings
from ..http.client import HttpClient
from ..http.headers import bearer
from ..http.models import HttpRequest, HttpResponse, RetryConfig
from ..http.retry import send_with_retries
from ..http.url import join_url
from .tokens import TokenStore

logger = logging.getLogger(__name__)

REFRESH_PATH = "auth/refresh"


class AuthenticatedTransport:
    """
    Sends requests with the stored bearer token attached.

    When a request that carried a token comes back 401, the transport calls the
    refresh endpoint once (the refresh token rides in the client's cookie jar),
    stores the new access token and replays the original request exactly once.
    A failed refresh clears the stored token, fires ``on_expired`` and hands
    back the original 401. Concurrent callers may each refresh independently.
    """

    def __init__(
        self,
        http_client: HttpClient,
        tokens: TokenStore,
        settings: ClientSettings | None = None,
        *,
        on_expired: Callable[[], None] | None = None,
    ):
        self.http_client = http_client
        self.tokens = tokens
        self.settings = settings or load_settings()
        self.retry_config = RetryConfig.from_settings(self.settings)
        self.on_expired = on_expired

    def url(self, *segments: str) -> str:
        return join_url(self.settings.base_url, *segments)

    def _prepare(self, request: HttpRequest, token: str | None) -> HttpRequest:
        extra: dict[str, str] = {}
        if request.body is not None:
            extra["Content-Type"] = "application/json"
        if token:
            extra.update(bearer(token))
        return request.with_headers(extra)

    def _send(self, request: HttpRequest) -> HttpResponse:
        return send_with_retries(self.http_client, request, retry_config=self.retry_config)

    def send(self, request: HttpRequest, *, authenticated: bool = True) -> HttpResponse:
        token = self.tokens.get() if authenticated else None
        response = self._send(self._prepare(request, token))
        if response.status_code != 401 or not token:
            return response

        logger.info("Access token rejected for %s %s; refreshing", request.method, request.url)
        new_token = self.refresh()
        if new_token is None:
            return response
        return self._send(self._prepare(request, new_token))

    def refresh(self) -> str | None:
        """Exchange the refresh cookie for a new access token, or expire the session."""
        response = self._send(HttpRequest(url=self.url(REFRESH_PATH), method="POST"))
        token: str | None = None
        if response.is_success:
            payload = response.json_or_none()
            if isinstance(payload, dict):
                value = payload.get("accessToken") or payload.get("token")
                token = value if isinstance(value, str) and value else None

        if token:
            self.tokens.set(token)
            return token

        logger.warning(
            "Token refresh failed (%s); clearing session",
            response.status_code if response.status_code is not None else response.error_message,
        )
        self.tokens.clear()
        if self.on_expired is not None:
            self.on_expired()
        return None
