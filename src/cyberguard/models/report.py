# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Incident report models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Literal

from .common import Reaction, author_of, entity_id, mappings, optional_str

ReportStatus = Literal["pending", "reviewed", "resolved"]
Severity = Literal["low", "medium", "high"]
ReporterRole = Literal["target", "bystander", "reporter", "other"]

REPORT_STATUSES: tuple[str, ...] = ("pending", "reviewed", "resolved")
SEVERITIES: tuple[str, ...] = ("low", "medium", "high")
REPORTER_ROLES: tuple[str, ...] = ("target", "bystander", "reporter", "other")
INCIDENT_TYPES: tuple[str, ...] = ("physical", "verbal", "social", "cyber", "discrimination", "harassment", "other")


@dataclass
class ReportUpdate:
    id: str
    message: str
    created_at: str | None = None
    created_by: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ReportUpdate:
        created_by, _ = author_of(data.get("createdBy"))
        return cls(
            id=entity_id(data),
            message=str(data.get("message") or ""),
            created_at=optional_str(data.get("createdAt")),
            created_by=created_by,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"_id": self.id, "message": self.message, "createdAt": self.created_at, "createdBy": self.created_by}


@dataclass
class Report:
    id: str
    type: str
    description: str
    severity: str = "medium"
    title: str | None = None
    location: str | None = None
    platform: str | None = None
    evidence: str | None = None
    is_anonymous: bool = True
    flagged: bool = False
    status: str = "pending"
    created_by: str | None = None
    created_at: str | None = None
    reactions: list[Reaction] = field(default_factory=list)
    updates: list[ReportUpdate] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Report:
        status = str(data.get("status") or "pending").lower()
        created_by, _ = author_of(data.get("createdBy"))
        anonymous = data.get("isAnonymous", data.get("anonymous", True))
        return cls(
            id=entity_id(data),
            type=str(data.get("type") or data.get("incidentType") or "other"),
            description=str(data.get("description") or ""),
            severity=str(data.get("severity") or "medium").lower(),
            title=optional_str(data.get("title")),
            location=optional_str(data.get("location")),
            platform=optional_str(data.get("platform")),
            evidence=optional_str(data.get("evidence")),
            is_anonymous=bool(anonymous),
            flagged=bool(data.get("flagged")),
            status=status if status in REPORT_STATUSES else "pending",
            created_by=created_by,
            created_at=optional_str(data.get("createdAt")),
            reactions=[Reaction.from_mapping(item) for item in mappings(data.get("reactions"))],
            updates=[ReportUpdate.from_mapping(item) for item in mappings(data.get("updates"))],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "title": self.title,
            "type": self.type,
            "severity": self.severity,
            "description": self.description,
            "location": self.location,
            "platform": self.platform,
            "evidence": self.evidence,
            "isAnonymous": self.is_anonymous,
            "flagged": self.flagged,
            "status": self.status,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "reactions": [reaction.to_dict() for reaction in self.reactions],
            "updates": [update.to_dict() for update in self.updates],
        }


@dataclass
class ReportSubmission:
    """
    Anonymous incident report as entered in the report form.

    ``date`` defaults to today in ``YYYY-MM-DD``. Use
    :func:`cyberguard.validation.validate_report` to turn it into a request body.
    """

    incident_type: str
    platform: str
    description: str
    your_role: str
    severity: str = "medium"
    date: str = field(default_factory=lambda: date.today().isoformat())
    evidence: str = ""
    anonymous: bool = True
    flagged: bool = False
    title: str = ""
