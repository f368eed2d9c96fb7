# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Incident reports store."""

from __future__ import annotations

from ..api.reports import ReportsApi
from ..errors import CyberGuardError
from ..models.report import REPORT_STATUSES, Report, ReportSubmission
from ..validation import require_text, validate_report
from .base import Store


class ReportsStore(Store):
    """
    All reports plus the flagged subset.

    Submitting is anonymous and open to everyone; listing and moderation calls
    are admin operations enforced by the backend.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.api = ReportsApi(self.session.transport)
        self.reports: list[Report] = []
        self.flagged: list[Report] = []

    def get(self, report_id: str) -> Report | None:
        for report in self.reports:
            if report.id == report_id:
                return report
        return None

    def status_counts(self) -> dict[str, int]:
        counts = {status: 0 for status in REPORT_STATUSES}
        for report in self.reports:
            counts[report.status] = counts.get(report.status, 0) + 1
        return counts

    def fetch(self) -> bool:
        self.loading = True
        try:
            self.reports = self.api.list()
        except CyberGuardError as exc:
            self._fail(exc, "Failed to load reports.")
            return False
        finally:
            self.loading = False
        self._mark_synced()
        return True

    def fetch_flagged(self) -> bool:
        try:
            self.flagged = self.api.flagged()
        except CyberGuardError as exc:
            self._fail(exc, "Failed to load flagged reports.")
            return False
        return True

    def submit(self, submission: ReportSubmission) -> bool:
        """Validate and submit; invalid input never reaches the network."""
        try:
            body = validate_report(submission)
            self.api.create(body)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to submit report.")
            return False
        self._ok(
            "Report submitted",
            "Your report has been submitted successfully. Our admin team will review it shortly.",
        )
        if self.session.is_admin:
            self.fetch()
        return True

    def flag(self, report_id: str) -> bool:
        try:
            self.api.flag(report_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to flag report.")
            return False
        self.fetch()
        self.fetch_flagged()
        self._ok("Report flagged", "The report has been flagged for review.")
        return True

    def delete(self, report_id: str) -> bool:
        try:
            self.api.delete(report_id)
        except CyberGuardError as exc:
            self._fail(exc, "Failed to delete report.")
            return False
        self.reports = [report for report in self.reports if report.id != report_id]
        self.flagged = [report for report in self.flagged if report.id != report_id]
        self._ok("Report deleted", "The report has been permanently removed.")
        return True

    def react(self, report_id: str, emoji: str) -> bool:
        try:
            self.api.react(report_id, require_text(emoji, "emoji", "Reaction"))
        except CyberGuardError as exc:
            self._fail(exc, "Failed to add reaction.")
            return False
        self.fetch()
        self._ok("Reaction added", f"You reacted with {emoji}")
        return True

    def update_progress(self, report_id: str, message: str) -> bool:
        try:
            self.api.update_progress(report_id, require_text(message, "message", "Progress message"))
        except CyberGuardError as exc:
            self._fail(exc, "Failed to update progress.")
            return False
        self.fetch()
        self._ok("Progress updated", "Report progress has been updated.")
        return True

    def add_update(self, report_id: str, message: str) -> bool:
        try:
            self.api.add_update(report_id, require_text(message, "message", "Update message"))
        except CyberGuardError as exc:
            self._fail(exc, "Failed to add report update.")
            return False
        self.fetch()
        self._ok("Update added", "The report update has been posted.")
        return True
