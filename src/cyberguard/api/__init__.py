# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed wrappers around the CyberGuard REST endpoints."""

from .auth import AuthApi, AuthResult
from .base import Endpoint, error_message, expect_object
from .chatbot import ChatbotApi, ChatReply
from .posts import LikeResult, PostsApi
from .reports import ReportsApi
from .users import UsersApi

__all__ = [
    "AuthApi",
    "AuthResult",
    "ChatReply",
    "ChatbotApi",
    "Endpoint",
    "LikeResult",
    "PostsApi",
    "ReportsApi",
    "UsersApi",
    "error_message",
    "expect_object",
]
