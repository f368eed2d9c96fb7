# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Forum post, comment and reply models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from .common import Reaction, author_of, entity_id, mappings, optional_str, string_list

PostType = Literal["physical", "verbal", "cyber", "general"]
POST_TYPES: tuple[str, ...] = ("physical", "verbal", "cyber", "general")


@dataclass
class Reply:
    id: str
    text: str
    user_id: str | None = None
    username: str | None = None
    created_at: str | None = None
    likes: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Reply:
        user_id, username = author_of(data.get("user"))
        return cls(
            id=entity_id(data),
            text=str(data.get("text") or ""),
            user_id=user_id,
            username=username,
            created_at=optional_str(data.get("createdAt")),
            likes=string_list(data.get("likes")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "user": {"_id": self.user_id, "username": self.username},
            "text": self.text,
            "createdAt": self.created_at,
            "likes": list(self.likes),
        }


@dataclass
class Comment(Reply):
    replies: list[Reply] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Comment:
        base = Reply.from_mapping(data)
        return cls(
            id=base.id,
            text=base.text,
            user_id=base.user_id,
            username=base.username,
            created_at=base.created_at,
            likes=base.likes,
            replies=[Reply.from_mapping(item) for item in mappings(data.get("replies"))],
        )

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["replies"] = [reply.to_dict() for reply in self.replies]
        return out


@dataclass
class Post:
    id: str
    type: str
    content: str
    tags: list[str] = field(default_factory=list)
    advice_requested: bool = False
    escalated: bool = False
    is_anonymous: bool = True
    created_by: str | None = None
    created_at: str | None = None
    likes: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    flagged: bool = False
    reactions: list[Reaction] = field(default_factory=list)

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def find_comment(self, comment_id: str) -> Comment | None:
        for comment in self.comments:
            if comment.id == comment_id:
                return comment
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Post:
        created_by, _ = author_of(data.get("createdBy"))
        return cls(
            id=entity_id(data),
            type=str(data.get("type") or "general"),
            content=str(data.get("content") or ""),
            tags=string_list(data.get("tags")),
            advice_requested=bool(data.get("adviceRequested")),
            escalated=bool(data.get("escalated")),
            is_anonymous=bool(data.get("isAnonymous", True)),
            created_by=created_by,
            created_at=optional_str(data.get("createdAt")),
            likes=string_list(data.get("likes")),
            comments=[Comment.from_mapping(item) for item in mappings(data.get("comments"))],
            flagged=bool(data.get("flagged")),
            reactions=[Reaction.from_mapping(item) for item in mappings(data.get("reactions"))],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "type": self.type,
            "content": self.content,
            "tags": list(self.tags),
            "adviceRequested": self.advice_requested,
            "escalated": self.escalated,
            "isAnonymous": self.is_anonymous,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "likes": list(self.likes),
            "comments": [comment.to_dict() for comment in self.comments],
            "flagged": self.flagged,
            "reactions": [reaction.to_dict() for reaction in self.reactions],
        }


@dataclass
class PostDraft:
    """A new forum post as entered by the user."""

    type: str
    content: str
    tags: list[str] | str = field(default_factory=list)
    advice_requested: bool = False
    is_anonymous: bool = True
