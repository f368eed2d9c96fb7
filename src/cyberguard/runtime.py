# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level CyberGuard facade wiring settings, session, endpoints and stores."""

from __future__ import annotations

import logging
from contextlib import suppress

from .api.chatbot import ChatbotApi
from .auth.tokens import FileTokenStore, MemoryTokenStore, TokenStore
from .config import ClientSettings, load_settings
from .http.client import HttpClient, create_default_http_client
from .notify import NotificationSink
from .session import Session
from .stores.moderation import ModerationStore
from .stores.posts import PostsStore
from .stores.reports import ReportsStore

logger = logging.getLogger(__name__)


class CyberGuard:
    """
    Owns one session and the stores that share it.

    Construction loads any saved session cookies into the HTTP client; call
    :meth:`start` to resume a stored login and :meth:`close` (or use the
    instance as a context manager) to save cookies and release the client.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: ClientSettings | None = None,
        tokens: TokenStore | None = None,
        sink: NotificationSink | None = None,
        persist: bool = True,
    ):
        self.settings = settings or load_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        if tokens is None:
            tokens = FileTokenStore(self.settings.token_path) if persist else MemoryTokenStore()
        self.session = Session(self.http_client, tokens, self.settings)
        self.posts = PostsStore(self.session, sink)
        self.reports = ReportsStore(self.session, sink)
        self.moderation = ModerationStore(self.session, sink)
        self.chatbot = ChatbotApi(self.session.transport)
        self._load_cookies()

    def _load_cookies(self) -> None:
        load = getattr(self.http_client, "load_cookies", None)
        if load is not None and self.session.tokens.get():
            load(self.session.tokens.cookies())

    def save_cookies(self) -> None:
        """Store the client's cookies (the refresh token) next to the access token."""
        export = getattr(self.http_client, "export_cookies", None)
        if export is not None and self.session.tokens.get():
            self.session.tokens.set_cookies(export())

    def start(self) -> CyberGuard:
        user = self.session.restore()
        if user is not None:
            logger.info("Resumed session for %s", user.username)
        return self

    def close(self) -> None:
        self.save_cookies()
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> CyberGuard:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
