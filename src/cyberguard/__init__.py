# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CyberGuard client package entrypoint.

This package provides a typed client for the CyberGuard anonymous incident
reporting and community forum API: an explicit login session with a single
refresh-and-retry on expired tokens, cached stores for posts, reports and
moderation, and a command-line front end. HTTP behavior is abstracted behind an
injectable client interface, and backend payloads are modeled with typed
dataclasses.
"""

from .auth import AuthenticatedTransport, FileTokenStore, MemoryTokenStore, TokenStore
from .config import ClientSettings, load_settings
from .errors import (
    ApiError,
    AuthenticationError,
    CyberGuardError,
    NotAuthenticatedError,
    PermissionDeniedError,
    TransportError,
    ValidationError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, StubHttpClient, create_default_http_client
from .log import setup_logging
from .models import Post, PostDraft, RegistrationForm, Report, ReportSubmission, User
from .notify import CollectingSink, LoggingSink, Notification
from .runtime import CyberGuard
from .session import Session, SessionState
from .stores import DashboardStats, ModerationStore, PostsStore, ReportsStore
from .version import __version__

__all__ = [
    "ApiError",
    "AuthenticatedTransport",
    "AuthenticationError",
    "ClientSettings",
    "CollectingSink",
    "CyberGuard",
    "CyberGuardError",
    "DashboardStats",
    "FileTokenStore",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "LoggingSink",
    "MemoryTokenStore",
    "ModerationStore",
    "NotAuthenticatedError",
    "Notification",
    "PermissionDeniedError",
    "Post",
    "PostDraft",
    "PostsStore",
    "RegistrationForm",
    "Report",
    "ReportSubmission",
    "ReportsStore",
    "Session",
    "SessionState",
    "StubHttpClient",
    "TokenStore",
    "TransportError",
    "User",
    "ValidationError",
    "create_default_http_client",
    "load_settings",
    "setup_logging",
    "__version__",
]
