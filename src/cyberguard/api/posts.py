# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Forum endpoints (``/posts``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http.url import path_param
from ..models.common import mappings
from ..models.post import Comment, Post, Reply
from .base import Endpoint, expect_object


@dataclass
class LikeResult:
    liked: bool
    likes_count: int | None = None


class PostsApi(Endpoint):
    def list(self) -> list[Post]:
        payload = self.call("GET", "posts", authenticated=False, fallback="Failed to fetch posts")
        return [Post.from_mapping(item) for item in mappings(payload)]

    def get(self, post_id: str) -> Post:
        payload = self.call("GET", "posts", path_param(post_id), authenticated=False, fallback="Failed to fetch post")
        return Post.from_mapping(expect_object(payload, "Failed to fetch post"))

    def create(self, body: dict[str, Any]) -> Post:
        payload = self.call("POST", "posts", payload=body, fallback="Failed to create post")
        return Post.from_mapping(expect_object(payload, "Failed to create post"))

    def toggle_like(self, post_id: str) -> LikeResult:
        payload = self.call("POST", "posts", path_param(post_id), "like", payload={}, fallback="Failed to toggle like")
        payload = payload if isinstance(payload, dict) else {}
        count = payload.get("likesCount")
        return LikeResult(liked=bool(payload.get("liked")), likes_count=count if isinstance(count, int) else None)

    def add_comment(self, post_id: str, text: str) -> Comment:
        payload = self.call(
            "POST", "posts", path_param(post_id), "comments", payload={"text": text}, fallback="Failed to add comment"
        )
        return Comment.from_mapping(expect_object(payload, "Failed to add comment"))

    def add_reply(self, post_id: str, comment_id: str, text: str) -> Reply:
        payload = self.call(
            "POST",
            "posts",
            path_param(post_id),
            "comments",
            path_param(comment_id),
            "replies",
            payload={"text": text},
            fallback="Failed to add reply",
        )
        return Reply.from_mapping(expect_object(payload, "Failed to add reply"))

    def react(self, post_id: str, emoji: str) -> Any:
        return self.call(
            "POST", "posts", path_param(post_id), "react", payload={"emoji": emoji}, fallback="Failed to react to post"
        )

    def flag(self, post_id: str, reason: str) -> Any:
        return self.call(
            "POST", "posts", path_param(post_id), "flag", payload={"reason": reason}, fallback="Failed to flag post"
        )

    def delete(self, post_id: str) -> None:
        self.call("DELETE", "posts", path_param(post_id), fallback="Failed to delete post")

    def delete_comment(self, post_id: str, comment_id: str) -> None:
        self.call(
            "DELETE", "posts", path_param(post_id), "comments", path_param(comment_id), fallback="Failed to delete comment"
        )

    def flagged(self) -> list[Post]:
        payload = self.call("GET", "posts", "flagged", fallback="Failed to fetch flagged posts")
        return [Post.from_mapping(item) for item in mappings(payload)]
