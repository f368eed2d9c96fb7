# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Forum posts store."""

from __future__ import annotations

import logging

from ..api.posts import PostsApi
from ..errors import CyberGuardError
from ..models.post import Comment, Post, PostDraft, Reply
from ..validation import require_text, validate_post
from .base import Store

logger = logging.getLogger(__name__)


class PostsStore(Store):
    """Cached forum feed with like/comment/flag/delete/react mutations."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.api = PostsApi(self.session.transport)
        self.posts: list[Post] = []

    def get(self, post_id: str) -> Post | None:
        for post in self.posts:
            if post.id == post_id:
                return post
        return None

    def _replace(self, updated: Post) -> None:
        self.posts = [updated if post.id == updated.id else post for post in self.posts]

    def _resync_post(self, post_id: str) -> None:
        try:
            updated = self.api.get(post_id)
        except CyberGuardError as exc:
            logger.info("Could not resync post %s (%s); reloading feed", post_id, exc)
            self.fetch()
            return
        self._replace(updated)

    def load(self, post_id: str) -> Post | None:
        """Fetch one post from the backend and refresh its cached copy."""
        try:
            post = self.api.get(post_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to fetch post.")
            return None
        self._replace(post)
        return post

    def fetch(self) -> bool:
        self.loading = True
        try:
            self.posts = self.api.list()
        except CyberGuardError as exc:
            self._fail(exc, "Failed to load posts.")
            return False
        finally:
            self.loading = False
        self._mark_synced()
        return True

    def create(self, draft: PostDraft) -> Post | None:
        try:
            body = validate_post(draft)
            post = self.api.create(body)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to create post.")
            return None
        self._ok("Success", "Post created successfully!")
        self.fetch()
        return post

    def toggle_like(self, post_id: str) -> bool | None:
        """Toggle the session user's like; returns the new liked state or None on failure."""
        try:
            result = self.api.toggle_like(post_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to update like.")
            return None

        post = self.get(post_id)
        user = self.session.user
        if post is not None and user is not None:
            likes = [uid for uid in post.likes if uid != user.id]
            if result.liked:
                likes.append(user.id)
            post.likes = likes
            if result.likes_count is not None and result.likes_count != len(likes):
                self._resync_post(post_id)
        elif post is not None:
            self._resync_post(post_id)

        if result.liked:
            self._ok("Post liked!", "You liked this post.")
        else:
            self._ok("Like removed", "You unliked this post.")
        return result.liked

    def add_comment(self, post_id: str, text: str) -> Comment | None:
        try:
            comment = self.api.add_comment(post_id, require_text(text, "text", "Comment"))
        except CyberGuardError as exc:
            self._fail(exc, "Failed to add comment.")
            return None
        post = self.get(post_id)
        if post is not None:
            if comment.id:
                post.comments.append(comment)
            else:
                self._resync_post(post_id)
        self._ok("Comment added!", "Your comment has been posted.")
        return comment

    def add_reply(self, post_id: str, comment_id: str, text: str) -> Reply | None:
        try:
            reply = self.api.add_reply(post_id, comment_id, require_text(text, "text", "Reply"))
        except CyberGuardError as exc:
            self._fail(exc, "Failed to add reply.")
            return None
        post = self.get(post_id)
        comment = post.find_comment(comment_id) if post is not None else None
        if comment is not None and reply.id:
            comment.replies.append(reply)
        elif post is not None:
            self._resync_post(post_id)
        self._ok("Reply added!", "Your reply has been posted.")
        return reply

    def delete_comment(self, post_id: str, comment_id: str) -> bool:
        try:
            self.api.delete_comment(post_id, comment_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to delete comment.")
            return False
        post = self.get(post_id)
        if post is not None:
            post.comments = [comment for comment in post.comments if comment.id != comment_id]
        self._ok("Comment deleted", "The comment has been removed.")
        return True

    def flag(self, post_id: str, reason: str) -> bool:
        try:
            self.api.flag(post_id, require_text(reason, "reason", "Flag reason"))
        except CyberGuardError as exc:
            self._fail(exc, "Failed to flag post.")
            return False
        self._ok("Post flagged", "Thank you for reporting. This post will be reviewed by our moderation team.")
        return True

    def delete(self, post_id: str) -> bool:
        try:
            self.api.delete(post_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to delete post.")
            return False
        self.posts = [post for post in self.posts if post.id != post_id]
        self._ok("Post deleted", "The post has been permanently removed.")
        return True

    def react(self, post_id: str, emoji: str) -> bool:
        try:
            self.api.react(post_id, require_text(emoji, "emoji", "Reaction"))
        except CyberGuardError as exc:
            self._fail(exc, "Failed to add reaction.")
            return False
        # The react endpoint does not echo the reaction list.
        self._resync_post(post_id)
        self._ok("Reaction added", f"Reacted with {emoji}")
        return True
