# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for the CyberGuard client."""

from .common import Reaction, reaction_counts
from .post import POST_TYPES, Comment, Post, PostDraft, Reply
from .report import (
    INCIDENT_TYPES,
    REPORT_STATUSES,
    REPORTER_ROLES,
    SEVERITIES,
    Report,
    ReportSubmission,
    ReportUpdate,
)
from .user import RegistrationForm, User, has_role

__all__ = [
    "INCIDENT_TYPES",
    "POST_TYPES",
    "REPORTER_ROLES",
    "REPORT_STATUSES",
    "SEVERITIES",
    "Comment",
    "Post",
    "PostDraft",
    "Reaction",
    "RegistrationForm",
    "Reply",
    "Report",
    "ReportSubmission",
    "ReportUpdate",
    "User",
    "has_role",
    "reaction_counts",
]
