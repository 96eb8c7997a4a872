from __future__ import annotations

import csv
import io
import logging
from datetime import datetime, tzinfo
from typing import Optional, Sequence

from ..attendance.history import filter_events
from ..attendance.model import AttendanceEvent
from ..attendance.repository import EventLog
from ..common.datetime_utils import format_local, to_iso_utc
from ..common.validators import normalize_user_id, require_non_empty
from ..core.exceptions import AccessDenied
from ..users.repository import IdentityStore

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "timestamp",
    "local_time",
    "user_id",
    "user_name",
    "event_type",
    "latitude",
    "longitude",
    "evidence_ref",
    "note",
]


class ReportService:
    """Admin view over the whole attendance log: filter and sort, nothing more."""

    def __init__(self, identities: IdentityStore, events: EventLog):
        self._identities = identities
        self._events = events

    def query(
        self,
        *,
        requester_id: str,
        target_user_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[AttendanceEvent]:
        requester_id = require_non_empty(normalize_user_id(requester_id), "requesterId")

        requester = self._identities.find_by_user_id(requester_id)
        if not requester or not requester.is_admin or not requester.active:
            logger.info("Report access denied for %s", requester_id)
            raise AccessDenied()

        return filter_events(
            self._events.list_all(),
            user_id=normalize_user_id(target_user_id) or None,
            start=start,
            end=end,
        )

    def to_csv(self, events: Sequence[AttendanceEvent], *, zone: tzinfo) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for e in events:
            writer.writerow(
                {
                    "timestamp": to_iso_utc(e.timestamp),
                    "local_time": format_local(e.timestamp, zone),
                    "user_id": e.user_id,
                    "user_name": e.user_name,
                    "event_type": e.event_type.value,
                    "latitude": "" if e.latitude is None else e.latitude,
                    "longitude": "" if e.longitude is None else e.longitude,
                    "evidence_ref": e.evidence_ref or "",
                    "note": e.note or "",
                }
            )
        # BOM so spreadsheet tools pick UTF-8.
        return out.getvalue().encode("utf-8-sig")
