# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Client-side form checks.

Each validator either returns the request body the backend expects or raises
:class:`~cyberguard.errors.ValidationError` before anything goes over the wire.
"""

from __future__ import annotations

from typing import Any

from .errors import ValidationError
from .models.post import POST_TYPES, PostDraft
from .models.report import INCIDENT_TYPES, REPORTER_ROLES, SEVERITIES, ReportSubmission
from .models.user import RegistrationForm

MIN_DESCRIPTION_LENGTH = 10
MIN_PASSWORD_LENGTH = 6


def parse_tags(raw: list[str] | str | None) -> list[str]:
    """Split a comma-separated tag string (or clean a list), dropping blanks."""
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    return [str(tag).strip() for tag in items if str(tag).strip()]


def validate_report(submission: ReportSubmission) -> dict[str, Any]:
    required = {
        "incidentType": submission.incident_type,
        "platform": submission.platform,
        "description": submission.description,
        "yourRole": submission.your_role,
    }
    missing = [name for name, value in required.items() if not (value or "").strip()]
    if missing:
        raise ValidationError(f"Please fill in all required fields: {', '.join(missing)}", missing)

    description = submission.description.strip()
    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Please provide a description of at least {MIN_DESCRIPTION_LENGTH} characters.",
            ["description"],
        )

    incident_type = submission.incident_type.strip().lower()
    if incident_type not in INCIDENT_TYPES:
        raise ValidationError(f"Incident type must be one of: {', '.join(INCIDENT_TYPES)}", ["incidentType"])

    role = submission.your_role.strip().lower()
    if role not in REPORTER_ROLES:
        raise ValidationError("Please select a valid role.", ["yourRole"])

    severity = (submission.severity or "").strip().lower()
    if severity not in SEVERITIES:
        raise ValidationError("Please select a valid severity level.", ["severity"])

    body: dict[str, Any] = {
        "incidentType": incident_type,
        "platform": submission.platform.strip(),
        "description": description,
        "date": submission.date,
        "severity": severity,
        "yourRole": role,
        "anonymous": submission.anonymous,
        "flagged": submission.flagged,
    }
    if submission.evidence.strip():
        body["evidence"] = submission.evidence.strip()
    if submission.title.strip():
        body["title"] = submission.title.strip()
    return body


def validate_post(draft: PostDraft) -> dict[str, Any]:
    post_type = (draft.type or "").strip().lower()
    content = (draft.content or "").strip()
    missing = [name for name, value in (("type", post_type), ("content", content)) if not value]
    if missing:
        raise ValidationError("Type and content are required.", missing)
    if post_type not in POST_TYPES:
        raise ValidationError(f"Post type must be one of: {', '.join(POST_TYPES)}", ["type"])
    return {
        "type": post_type,
        "content": content,
        "tags": parse_tags(draft.tags),
        "adviceRequested": draft.advice_requested,
        "isAnonymous": draft.is_anonymous,
    }


def validate_registration(form: RegistrationForm) -> dict[str, Any]:
    missing = [name for name in ("username", "email", "password") if not (getattr(form, name) or "").strip()]
    if missing:
        raise ValidationError(f"Please fill in all required fields: {', '.join(missing)}", missing)
    if form.confirm_password is not None and form.password != form.confirm_password:
        raise ValidationError("Passwords do not match.", ["confirm_password"])
    if len(form.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
            ["password"],
        )
    return {"username": form.username.strip(), "email": form.email.strip(), "password": form.password}


def require_text(value: str | None, field_name: str, label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label} cannot be empty.", [field_name])
    return text
