# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cached, notification-emitting views over the backend collections."""

from .base import Store
from .moderation import DashboardStats, ModerationStore
from .posts import PostsStore
from .reports import ReportsStore

__all__ = ["DashboardStats", "ModerationStore", "PostsStore", "ReportsStore", "Store"]
