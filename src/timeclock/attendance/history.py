from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import ensure_utc
from .model import AttendanceEvent


def events_for_user(events: Iterable[AttendanceEvent], user_id: str) -> list[AttendanceEvent]:
    return [e for e in events if e.user_id == user_id]


def filter_events(
    events: Iterable[AttendanceEvent],
    *,
    user_id: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> list[AttendanceEvent]:
    """Select events by user and inclusive time range, newest first."""
    start = ensure_utc(start) if start else None
    end = ensure_utc(end) if end else None

    selected = []
    for e in events:
        if user_id and e.user_id != user_id:
            continue
        if start and e.timestamp < start:
            continue
        if end and e.timestamp > end:
            continue
        selected.append(e)

    selected.sort(key=lambda e: e.timestamp, reverse=True)
    return selected
