# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest
from builders import login_as, report_payload, url

from cyberguard.models import ReportSubmission
from cyberguard.stores import ReportsStore


@pytest.fixture
def store(session, sink):
    return ReportsStore(session, sink)


def _submission(description="Someone keeps posting my photos"):
    return ReportSubmission(
        incident_type="cyber",
        platform="Instagram",
        description=description,
        your_role="target",
        severity="high",
        date="2025-03-01",
    )


def test_short_description_never_reaches_network(store, stub, sink):
    assert store.submit(_submission("too short")) is False
    assert stub.requests == []
    assert sink.last.is_error
    assert "at least 10 characters" in sink.last.description


def test_submit_is_anonymous_with_expected_body(store, session, stub, sink):
    login_as(session, stub)
    stub.add_json("POST", url("reports"), 201, report_payload("r9"))

    assert store.submit(_submission()) is True

    sent = stub.calls("POST", url("reports"))[0]
    assert "Authorization" not in sent.headers
    assert json.loads(sent.body) == {
        "incidentType": "cyber",
        "platform": "Instagram",
        "description": "Someone keeps posting my photos",
        "date": "2025-03-01",
        "severity": "high",
        "yourRole": "target",
        "anonymous": True,
        "flagged": False,
    }
    assert sink.last.title == "Report submitted"
    # Non-admins have no report list to refresh.
    assert stub.calls("GET", url("reports")) == []


def test_admin_submit_refetches_list(store, session, stub):
    login_as(session, stub, admin=True)
    stub.add_json("POST", url("reports"), 201, report_payload("r9"))
    stub.add_json("GET", url("reports"), 200, [report_payload("r9")])

    store.submit(_submission())

    assert [report.id for report in store.reports] == ["r9"]


def test_flag_refetches_both_lists(store, session, stub):
    login_as(session, stub, admin=True)
    stub.add_json("PATCH", url("reports/r1/flag"), 200, {"msg": "flagged"})
    stub.add_json("GET", url("reports"), 200, [report_payload("r1", flagged=True), report_payload("r2")])
    stub.add_json("GET", url("reports/flagged"), 200, [report_payload("r1", flagged=True)])

    assert store.flag("r1") is True
    assert store.get("r1").flagged is True
    assert [report.id for report in store.flagged] == ["r1"]


def test_delete_removes_from_both_lists(store, session, stub, sink):
    login_as(session, stub, admin=True)
    stub.add_json("GET", url("reports"), 200, [report_payload("r1", flagged=True), report_payload("r2")])
    stub.add_json("GET", url("reports/flagged"), 200, [report_payload("r1", flagged=True)])
    store.fetch()
    store.fetch_flagged()
    stub.add_json("DELETE", url("reports/r1"), 200, {"msg": "Report deleted"})

    assert store.delete("r1") is True
    assert [report.id for report in store.reports] == ["r2"]
    assert store.flagged == []


def test_failed_delete_leaves_lists(store, session, stub, sink):
    login_as(session, stub, admin=True)
    stub.add_json("GET", url("reports"), 200, [report_payload("r1")])
    store.fetch()
    stub.add_json("DELETE", url("reports/r1"), 403, {"msg": "Access denied"})

    assert store.delete("r1") is False
    assert [report.id for report in store.reports] == ["r1"]
    assert sink.last.description == "Access denied"


def test_progress_and_update_refetch(store, session, stub):
    login_as(session, stub, admin=True)
    stub.add_json("PATCH", url("reports/r1/progress"), 200, {})
    stub.add_json("POST", url("reports/r1/update"), 200, {})
    stub.add_json("GET", url("reports"), 200, [report_payload("r1", status="reviewed")])

    assert store.update_progress("r1", "Reviewed by staff") is True
    assert store.add_update("r1", "Contacted the school") is True
    assert store.update_progress("r1", "  ") is False

    assert len(stub.calls("GET", url("reports"))) == 2
    assert json.loads(stub.calls("PATCH", url("reports/r1/progress"))[0].body) == {"message": "Reviewed by staff"}


def test_react_refetches(store, session, stub):
    login_as(session, stub)
    stub.add_json("PATCH", url("reports/r1/react"), 200, {})
    stub.add_json("GET", url("reports"), 200, [report_payload("r1")])

    assert store.react("r1", "🙏") is True
    assert len(stub.calls("GET", url("reports"))) == 1


def test_status_counts(store, session, stub):
    login_as(session, stub, admin=True)
    stub.add_json(
        "GET",
        url("reports"),
        200,
        [report_payload("r1"), report_payload("r2", status="resolved"), report_payload("r3", status="weird")],
    )
    store.fetch()
    assert store.status_counts() == {"pending": 2, "reviewed": 0, "resolved": 1}
