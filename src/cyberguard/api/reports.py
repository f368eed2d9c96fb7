# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Incident report endpoints (``/reports``)."""

from __future__ import annotations

from typing import Any

from ..http.url import path_param
from ..models.common import mappings
from ..models.report import Report
from .base import Endpoint, expect_object


class ReportsApi(Endpoint):
    def create(self, body: dict[str, Any]) -> Report | None:
        # Submissions are anonymous: no bearer token, even when logged in.
        payload = self.call("POST", "reports", payload=body, authenticated=False, fallback="Failed to create report")
        return Report.from_mapping(payload) if isinstance(payload, dict) else None

    def list(self) -> list[Report]:
        payload = self.call("GET", "reports", fallback="Failed to fetch reports")
        return [Report.from_mapping(item) for item in mappings(payload)]

    def get(self, report_id: str) -> Report:
        payload = self.call("GET", "reports", path_param(report_id), fallback="Failed to fetch report")
        return Report.from_mapping(expect_object(payload, "Failed to fetch report"))

    def flag(self, report_id: str) -> None:
        self.call("PATCH", "reports", path_param(report_id), "flag", fallback="Failed to flag report")

    def delete(self, report_id: str) -> None:
        self.call("DELETE", "reports", path_param(report_id), fallback="Failed to delete report")

    def react(self, report_id: str, emoji: str) -> None:
        self.call(
            "PATCH", "reports", path_param(report_id), "react", payload={"emoji": emoji}, fallback="Failed to react to report"
        )

    def flagged(self) -> list[Report]:
        payload = self.call("GET", "reports", "flagged", fallback="Failed to fetch flagged reports")
        return [Report.from_mapping(item) for item in mappings(payload)]

    def update_progress(self, report_id: str, message: str) -> None:
        self.call(
            "PATCH",
            "reports",
            path_param(report_id),
            "progress",
            payload={"message": message},
            fallback="Failed to update report progress",
        )

    def add_update(self, report_id: str, message: str) -> None:
        self.call(
            "POST",
            "reports",
            path_param(report_id),
            "update",
            payload={"message": message},
            fallback="Failed to add report update",
        )
