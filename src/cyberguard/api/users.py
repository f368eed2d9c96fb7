# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Admin user-management endpoints (mounted under ``/auth``)."""

from __future__ import annotations

from typing import Any

from ..http.url import path_param
from ..models.common import mappings
from ..models.user import User
from .base import Endpoint, expect_object


def _message(payload: Any) -> str | None:
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return None


class UsersApi(Endpoint):
    def list(self) -> list[User]:
        payload = self.call("GET", "auth/users", fallback="Failed to fetch users")
        return [User.from_mapping(item) for item in mappings(payload)]

    def get(self, user_id: str) -> User:
        payload = self.call("GET", "auth/user", path_param(user_id), fallback="Failed to fetch user")
        return User.from_mapping(expect_object(payload, "Failed to fetch user"))

    def create_admin(self, body: dict[str, Any]) -> User:
        payload = self.call("POST", "auth/admin", payload=body, fallback="Failed to create admin")
        return User.from_mapping(expect_object(payload, "Failed to create admin"))

    def promote(self, user_id: str) -> str | None:
        return _message(self.call("PATCH", "auth/promote", path_param(user_id), fallback="Failed to promote user"))

    def delete(self, user_id: str) -> str | None:
        return _message(self.call("DELETE", "auth/user", path_param(user_id), fallback="Failed to delete user"))
