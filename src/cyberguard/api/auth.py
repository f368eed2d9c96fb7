# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication endpoints (``/auth``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import ApiError, AuthenticationError
from ..models.user import User
from .base import Endpoint, expect_object


@dataclass
class AuthResult:
    token: str
    user: User


def _auth_result(payload: Any, fallback: str) -> AuthResult:
    payload = expect_object(payload, fallback)
    token = payload.get("token") or payload.get("accessToken")
    user = payload.get("user")
    if not isinstance(token, str) or not token or not isinstance(user, dict):
        raise ApiError(200, f"{fallback}: response missing token or user")
    return AuthResult(token=token, user=User.from_mapping(user))


class AuthApi(Endpoint):
    def login(self, username: str, password: str) -> AuthResult:
        payload = self.call(
            "POST",
            "auth/login",
            payload={"username": username, "password": password},
            authenticated=False,
            fallback="Invalid credentials",
            error_cls=AuthenticationError,
        )
        return _auth_result(payload, "Login failed")

    def register(self, body: dict[str, Any]) -> AuthResult:
        payload = self.call(
            "POST",
            "auth/register",
            payload=body,
            authenticated=False,
            fallback="Registration failed",
        )
        return _auth_result(payload, "Registration failed")

    def refresh(self) -> str | None:
        """Trade the refresh cookie for a new access token; None means the session expired."""
        return self.transport.refresh()

    def logout(self) -> None:
        self.call("POST", "auth/logout", fallback="Logout failed")

    def current_user(self) -> User:
        payload = self.call("GET", "auth/user", fallback="Failed to get user data")
        return User.from_mapping(expect_object(payload, "Failed to get user data"))

    def update_profile(self, changes: dict[str, Any]) -> User:
        payload = self.call("PATCH", "auth/profile", payload=changes, fallback="Profile update failed")
        return User.from_mapping(expect_object(payload, "Profile update failed"))
