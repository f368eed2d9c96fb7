# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Admin moderation: flagged posts, dashboard counters and user management."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from ..api.posts import PostsApi
from ..api.reports import ReportsApi
from ..api.users import UsersApi
from ..errors import CyberGuardError
from ..models.post import Post
from ..models.report import Report
from ..models.user import RegistrationForm, User
from ..validation import validate_registration
from .base import Store


@dataclass
class DashboardStats:
    total_reports: int = 0
    flagged_reports: int = 0
    pending_reports: int = 0
    total_posts: int = 0
    flagged_posts: int = 0

    @classmethod
    def compute(cls, reports: list[Report], posts: list[Post]) -> DashboardStats:
        return cls(
            total_reports=len(reports),
            flagged_reports=sum(1 for report in reports if report.flagged),
            pending_reports=sum(1 for report in reports if report.status == "pending"),
            total_posts=len(posts),
            flagged_posts=sum(1 for post in posts if post.flagged),
        )

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class ModerationStore(Store):
    """Every operation here requires an admin session."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        transport = self.session.transport
        self.posts_api = PostsApi(transport)
        self.reports_api = ReportsApi(transport)
        self.users_api = UsersApi(transport)
        self.flagged_posts: list[Post] = []
        self.users: list[User] = []
        self.stats: DashboardStats | None = None

    def fetch(self) -> bool:
        return self.fetch_flagged_posts()

    def fetch_flagged_posts(self) -> bool:
        self.loading = True
        try:
            self.session.require_admin()
            self.flagged_posts = self.posts_api.flagged()
        except CyberGuardError as exc:
            self._fail(exc, "Failed to load flagged posts.")
            return False
        finally:
            self.loading = False
        self._mark_synced()
        return True

    def delete_post(self, post_id: str) -> bool:
        try:
            self.session.require_admin()
            self.posts_api.delete(post_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to delete post.")
            return False
        self.flagged_posts = [post for post in self.flagged_posts if post.id != post_id]
        self._ok("Post deleted", "The flagged post has been removed.")
        return True

    def load_dashboard(self) -> DashboardStats | None:
        try:
            self.session.require_admin()
            reports = self.reports_api.list()
            posts = self.posts_api.list()
        except CyberGuardError as exc:
            self._fail(exc, "Failed to load dashboard data.")
            return None
        self.stats = DashboardStats.compute(reports, posts)
        return self.stats

    def fetch_users(self) -> bool:
        try:
            self.session.require_admin()
            self.users = self.users_api.list()
        except CyberGuardError as exc:
            self._fail(exc, "Failed to fetch users.")
            return False
        return True

    def create_admin(self, form: RegistrationForm) -> User | None:
        try:
            self.session.require_admin()
            user = self.users_api.create_admin(validate_registration(form))
        except CyberGuardError as exc:
            self._fail(exc, "Failed to create admin.")
            return None
        self.users.append(user)
        self._ok("Admin created", f"{user.username} can now moderate CyberGuard.")
        return user

    def promote(self, user_id: str) -> bool:
        try:
            self.session.require_admin()
            message = self.users_api.promote(user_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to promote user.")
            return False
        self.fetch_users()
        self._ok("User promoted", message or "The user is now an admin.")
        return True

    def delete_user(self, user_id: str) -> bool:
        try:
            self.session.require_admin()
            message = self.users_api.delete(user_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to delete user.")
            return False
        self.users = [user for user in self.users if user.id != user_id]
        self._ok("User deleted", message or "The user has been removed.")
        return True
