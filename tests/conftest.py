from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from timeclock.attendance.model import AttendanceEvent
from timeclock.core.enums import EventType, Role
from timeclock.core.exceptions import EventLogError
from timeclock.users.model import UserProfile


class InMemoryIdentities:
    def __init__(self, *profiles: UserProfile):
        self._by_id = {p.user_id: p for p in profiles}
        self.lookups: list[str] = []

    def find_by_user_id(self, user_id: str) -> Optional[UserProfile]:
        self.lookups.append(user_id)
        return self._by_id.get(user_id)


class InMemoryEventLog:
    def __init__(self, events=None):
        self.events: list[AttendanceEvent] = list(events or [])
        self.append_calls = 0
        self.list_calls = 0

    def append(self, event: AttendanceEvent) -> None:
        self.append_calls += 1
        self.events.append(event)

    def list_all(self):
        self.list_calls += 1
        # Newest first, to prove callers do not rely on storage order.
        return list(reversed(self.events))


class BrokenEventLog(InMemoryEventLog):
    def append(self, event: AttendanceEvent) -> None:
        raise EventLogError(detail="quota exceeded")

    def list_all(self):
        raise EventLogError(detail="connection reset")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def identities() -> InMemoryIdentities:
    return InMemoryIdentities(
        UserProfile(user_id="ana@example.com", name="Ana", role=Role.STAFF, active=True),
        UserProfile(user_id="bruno@example.com", name="Bruno", role=Role.STAFF, active=False),
        UserProfile(user_id="boss@example.com", name="Boss", role=Role.ADMIN, active=True),
        UserProfile(user_id="old-boss@example.com", name="Old Boss", role=Role.ADMIN, active=False),
    )


@pytest.fixture
def event_log() -> InMemoryEventLog:
    return InMemoryEventLog()


@pytest.fixture
def broken_event_log() -> BrokenEventLog:
    return BrokenEventLog()


@pytest.fixture
def make_event(fixed_now):
    def _make(event_type: EventType, minutes_ago: float = 0, user_id: str = "ana@example.com", **kwargs):
        return AttendanceEvent(
            timestamp=fixed_now - timedelta(minutes=minutes_ago),
            user_id=user_id,
            event_type=event_type,
            evidence_ref=kwargs.pop("evidence_ref", "https://cdn.example.com/selfie.jpg"),
            **kwargs,
        )

    return _make
