# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""User model and role checks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from .common import entity_id, optional_str

Role = Literal["user", "moderator", "admin"]

ROLE_RANK: dict[str, int] = {"user": 1, "moderator": 2, "admin": 3}


@dataclass
class User:
    id: str
    username: str
    email: str | None = None
    is_admin: bool = False
    is_moderator: bool = False
    created_at: str | None = None

    @property
    def role(self) -> Role:
        if self.is_admin:
            return "admin"
        if self.is_moderator:
            return "moderator"
        return "user"

    def has_role(self, required: Role) -> bool:
        """True when this user's role ranks at or above ``required``."""
        return ROLE_RANK[self.role] >= ROLE_RANK[required]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> User:
        # Some endpoints wrap the document as {"user": {...}}.
        nested = data.get("user")
        if isinstance(nested, Mapping):
            data = nested
        role = str(data.get("role") or "").lower()
        return cls(
            id=entity_id(data),
            username=str(data.get("username") or ""),
            email=optional_str(data.get("email")),
            is_admin=bool(data.get("isAdmin")) or role == "admin",
            is_moderator=bool(data.get("isModerator")) or role == "moderator",
            created_at=optional_str(data.get("createdAt")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "isAdmin": self.is_admin,
            "role": self.role,
            "createdAt": self.created_at,
        }


def has_role(user: User | None, required: Role) -> bool:
    """Role check that treats a missing user as having no role at all."""
    if user is None:
        return False
    return user.has_role(required)


@dataclass
class RegistrationForm:
    username: str
    email: str
    password: str
    confirm_password: str | None = None
