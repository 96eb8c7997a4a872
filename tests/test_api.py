from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from timeclock.attendance.model import AttendanceEvent
from timeclock.container import build_services
from timeclock.core.enums import EventType
from timeclock.main import create_app

SELFIE = "https://cdn.example.com/selfies/ana.jpg"


@pytest.fixture
def client(identities, event_log):
    container = build_services(event_log=event_log, identities=identities, zone=ZoneInfo("America/Sao_Paulo"))
    app = create_app(container, settings_module="timeclock.config.testing")
    return app.test_client()


def _post(client, **body):
    return client.post("/api/attendance", json=body)


def test_record_clock_in(client, event_log):
    resp = _post(client, userId="Ana@Example.com", eventType="clock_in", evidenceRef=SELFIE, lat=-23.5, lon=-46.6, note="hi")

    assert resp.status_code == 201
    data = resp.get_json()
    assert data["userId"] == "ana@example.com"
    assert data["userName"] == "Ana"
    assert data["eventType"] == "clock_in"
    assert data["evidenceRef"] == SELFIE
    assert (data["lat"], data["lon"]) == (-23.5, -46.6)
    assert data["note"] == "hi"
    assert data["timestamp"].endswith("Z")
    assert "localTime" in data
    assert event_log.append_calls == 1


def test_non_numeric_coordinates_are_dropped(client, event_log):
    resp = _post(client, userId="ana@example.com", eventType="clock_in", evidenceRef=SELFIE, lat="-23.5", lon=True)

    assert resp.status_code == 201
    assert event_log.events[0].latitude is None
    assert event_log.events[0].longitude is None


@pytest.mark.parametrize(
    "body, status, kind",
    [
        ({"userId": "ghost@example.com", "eventType": "clock_in", "evidenceRef": SELFIE}, 404, "UserNotFound"),
        ({"userId": "bruno@example.com", "eventType": "clock_in", "evidenceRef": SELFIE}, 403, "UserInactive"),
        ({"userId": "ana@example.com", "eventType": "nap", "evidenceRef": SELFIE}, 400, "InvalidEventType"),
        ({"userId": "ana@example.com", "eventType": "clock_in", "evidenceRef": ""}, 400, "MissingEvidence"),
        ({"userId": "ana@example.com", "eventType": "break_end", "evidenceRef": SELFIE}, 400, "NoOpenBreak"),
        ({"eventType": "clock_in", "evidenceRef": SELFIE}, 400, "ValidationError"),
    ],
)
def test_rejections_map_to_status_and_kind(client, event_log, body, status, kind):
    resp = _post(client, **body)

    assert resp.status_code == status
    assert resp.get_json()["kind"] == kind
    assert resp.get_json()["message"]
    assert event_log.append_calls == 0


def test_break_too_short_reports_remaining_minutes(client, event_log):
    # The endpoint stamps events with the real clock.
    event_log.events.append(
        AttendanceEvent(
            timestamp=datetime.now(timezone.utc) - timedelta(minutes=5, seconds=30),
            user_id="ana@example.com",
            event_type=EventType.BREAK_START,
            evidence_ref=SELFIE,
        )
    )

    resp = _post(client, userId="ana@example.com", eventType="break_end", evidenceRef=SELFIE)

    assert resp.status_code == 400
    data = resp.get_json()
    assert data["kind"] == "BreakTooShort"
    assert data["remainingMinutes"] == 15
    assert "15" in data["message"]


def test_body_must_be_json_object(client):
    resp = client.post("/api/attendance", data="not json", content_type="text/plain")

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "ValidationError"


def test_log_failure_returns_generic_500(identities, broken_event_log):
    container = build_services(event_log=broken_event_log, identities=identities, zone=ZoneInfo("UTC"))
    client = create_app(container, settings_module="timeclock.config.testing").test_client()

    resp = _post(client, userId="ana@example.com", eventType="clock_in", evidenceRef=SELFIE)

    assert resp.status_code == 500
    data = resp.get_json()
    assert data["kind"] == "EventLogError"
    assert "quota" not in data["message"]


def test_list_own_history(client, event_log, make_event):
    event_log.events.extend(
        [
            make_event(EventType.CLOCK_IN, 120),
            make_event(EventType.BREAK_START, 60),
            make_event(EventType.CLOCK_IN, 30, user_id="boss@example.com"),
        ]
    )

    resp = client.get("/api/attendance", query_string={"userId": "ana@example.com", "from": "not-a-date"})

    assert resp.status_code == 200
    events = resp.get_json()["events"]
    assert [e["eventType"] for e in events] == ["break_start", "clock_in"]


def test_list_own_history_with_range(client, event_log, make_event, fixed_now):
    event_log.events.extend([make_event(EventType.CLOCK_IN, 120), make_event(EventType.BREAK_START, 60)])

    resp = client.get(
        "/api/attendance",
        query_string={"userId": "ana@example.com", "from": (fixed_now - timedelta(minutes=90)).isoformat()},
    )

    assert [e["eventType"] for e in resp.get_json()["events"]] == ["break_start"]


def test_report_requires_admin(client):
    resp = client.get("/api/reports", query_string={"requesterId": "ana@example.com"})

    assert resp.status_code == 403
    assert resp.get_json()["kind"] == "AccessDenied"


def test_report_for_admin(client, event_log, make_event):
    event_log.events.extend(
        [make_event(EventType.CLOCK_IN, 120), make_event(EventType.CLOCK_IN, 30, user_id="boss@example.com")]
    )

    resp = client.get("/api/reports", query_string={"requesterId": "boss@example.com"})

    assert resp.status_code == 200
    assert [e["userId"] for e in resp.get_json()["events"]] == ["boss@example.com", "ana@example.com"]


def test_report_csv_download(client, event_log, make_event):
    event_log.events.append(make_event(EventType.CLOCK_IN, 10))

    resp = client.get(
        "/api/reports",
        query_string={"requesterId": "boss@example.com", "targetUserId": "ana@example.com", "format": "csv"},
    )

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attachment" in resp.headers["Content-Disposition"]
    assert b"clock_in" in resp.data


def test_unknown_route_is_plain_404(client):
    assert client.get("/nope").status_code == 404
