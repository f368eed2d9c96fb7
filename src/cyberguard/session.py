# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Explicit login session.

A :class:`Session` owns the token store and the authenticated transport and is
the only place that decides whether a user is logged in. It moves between two
states, ``UNAUTHENTICATED`` and ``AUTHENTICATED`` (with exactly one user), and
raises ``loading`` while a restore or auth call is in flight.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any

from .api.auth import AuthApi, AuthResult
from .auth.tokens import TokenStore
from .auth.transport import AuthenticatedTransport
from .config import ClientSettings
from .errors import CyberGuardError, NotAuthenticatedError, PermissionDeniedError
from .http.client import HttpClient
from .models.user import RegistrationForm, Role, User
from .validation import validate_registration

logger = logging.getLogger(__name__)

PROFILE_FIELDS = frozenset({"username", "email"})


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class Session:
    def __init__(self, http_client: HttpClient, tokens: TokenStore, settings: ClientSettings):
        self.settings = settings
        self.tokens = tokens
        self.transport = AuthenticatedTransport(http_client, tokens, settings, on_expired=self._expire)
        self.auth_api = AuthApi(self.transport)
        self._user: User | None = None
        self.loading = False

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def state(self) -> SessionState:
        return SessionState.AUTHENTICATED if self._user is not None else SessionState.UNAUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.has_role("admin")

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self.loading = True
        try:
            yield
        finally:
            self.loading = False

    def _expire(self) -> None:
        if self._user is not None:
            logger.info("Session for %s expired", self._user.username)
        self._user = None

    def _establish(self, result: AuthResult) -> User:
        self.tokens.set(result.token)
        self._user = result.user
        logger.info("Signed in as %s", result.user.username)
        return result.user

    def restore(self) -> User | None:
        """Resume a stored session; a rejected token is discarded."""
        with self._busy():
            if not self.tokens.get():
                self._user = None
                return None
            try:
                self._user = self.auth_api.current_user()
            except CyberGuardError as exc:
                logger.info("Stored session could not be restored: %s", exc)
                self.tokens.clear()
                self._user = None
            return self._user

    def login(self, username: str, password: str) -> User:
        """Authenticate against the backend. Raises AuthenticationError on bad credentials."""
        with self._busy():
            result = self.auth_api.login(username.strip(), password)
            return self._establish(result)

    def register(self, form: RegistrationForm) -> User:
        body = validate_registration(form)
        with self._busy():
            result = self.auth_api.register(body)
            return self._establish(result)

    def update_profile(self, **changes: Any) -> User:
        self.require_user()
        unknown = set(changes) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported profile fields: {', '.join(sorted(unknown))}")
        with self._busy():
            self._user = self.auth_api.update_profile(changes)
            return self._user

    def logout(self) -> None:
        """
        Best-effort backend logout; local state is always cleared.

        The call goes out even without an access token so the backend can
        revoke the refresh cookie.
        """
        with self._busy():
            try:
                self.auth_api.logout()
            except CyberGuardError as exc:
                logger.debug("Backend logout failed, clearing locally anyway: %s", exc)
            self.tokens.clear()
            self._user = None

    def require_user(self) -> User:
        if self._user is None:
            raise NotAuthenticatedError("You need to log in first.")
        return self._user

    def require_role(self, role: Role) -> User:
        user = self.require_user()
        if not user.has_role(role):
            raise PermissionDeniedError(f"This action requires the {role} role.")
        return user

    def require_admin(self) -> User:
        return self.require_role("admin")


__all__ = ["Session", "SessionState"]
