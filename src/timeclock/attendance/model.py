from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Optional

from ..common.datetime_utils import format_local, to_iso_utc
from ..core.enums import EventType
from ..core.exceptions import InvalidEventType


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one row of the append-only attendance log.

    ``timestamp`` is assigned by the service when the event is recorded,
    never taken from the client.
    """

    timestamp: datetime
    user_id: str
    event_type: EventType
    evidence_ref: Optional[str] = None
    note: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    user_name: str = ""
    user_role: str = ""

    def to_dict(self, zone: Optional[tzinfo] = None) -> dict:
        data = {
            "timestamp": to_iso_utc(self.timestamp),
            "userId": self.user_id,
            "userName": self.user_name,
            "eventType": self.event_type.value,
            "note": self.note,
            "lat": self.latitude,
            "lon": self.longitude,
            "evidenceRef": self.evidence_ref,
        }
        if zone is not None:
            data["localTime"] = format_local(self.timestamp, zone)
        return data


def parse_event_type(value: Any) -> EventType:
    if isinstance(value, EventType):
        return value
    try:
        return EventType(str(value or "").strip().lower())
    except ValueError:
        raise InvalidEventType() from None
