# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parsing helpers shared by the backend payload models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def entity_id(data: Mapping[str, Any]) -> str:
    """Backend documents carry their identifier as ``_id`` or ``id``."""
    raw = data.get("_id")
    if raw is None:
        raw = data.get("id")
    return "" if raw is None else str(raw)


def optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    out: list[str] = []
    for item in value:
        if isinstance(item, Mapping):
            ident = entity_id(item)
            if ident:
                out.append(ident)
        elif item is not None:
            out.append(str(item))
    return out


def mappings(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def author_of(value: Any) -> tuple[str | None, str | None]:
    """Resolve ``(user_id, username)`` from a populated or bare author reference."""
    if isinstance(value, Mapping):
        return optional_str(entity_id(value)), optional_str(value.get("username"))
    return optional_str(value), None


@dataclass
class Reaction:
    emoji: str
    user_id: str | None = None
    username: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Reaction:
        return cls(
            emoji=str(data.get("emoji") or ""),
            user_id=optional_str(data.get("userId")),
            username=optional_str(data.get("username")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"emoji": self.emoji, "userId": self.user_id, "username": self.username}


def reaction_counts(reactions: list[Reaction]) -> dict[str, int]:
    """Tally reactions per emoji, preserving first-seen order."""
    counts: dict[str, int] = {}
    for reaction in reactions:
        if reaction.emoji:
            counts[reaction.emoji] = counts.get(reaction.emoji, 0) + 1
    return counts
