from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any, Callable, Optional, Sequence

import google.auth.exceptions
import gspread
import requests

from ..common.datetime_utils import format_local, parse_iso_datetime, to_iso_utc
from ..common.validators import parse_number
from ..core.constants import LEGACY_EVENT_TYPE_LABELS, SHEET_COLUMNS, SHEET_DATA_RANGE
from ..core.enums import EventType
from ..core.exceptions import EventLogError
from .model import AttendanceEvent
from .repository import EventLog

logger = logging.getLogger(__name__)

SHEETS_ERRORS = (
    gspread.exceptions.GSpreadException,
    google.auth.exceptions.GoogleAuthError,
    requests.exceptions.RequestException,
)


def normalize_private_key(raw_private_key: str) -> str:
    """Undo the quoting/escaping a PEM key picks up in env files and dashboards."""
    key = raw_private_key.strip()
    if len(key) >= 2 and key[0] == key[-1] and key[0] in {'"', "'"}:
        key = key[1:-1]
    return key.replace("\\r", "\r").replace("\\n", "\n").strip()


def event_to_row(event: AttendanceEvent, zone: tzinfo) -> list[Any]:
    return [
        to_iso_utc(event.timestamp),
        format_local(event.timestamp, zone),
        event.user_id,
        event.user_name,
        event.user_role,
        event.event_type.value,
        "" if event.latitude is None else event.latitude,
        "" if event.longitude is None else event.longitude,
        event.evidence_ref or "",
        event.note or "",
    ]


def row_to_event(row: Sequence[Any]) -> Optional[AttendanceEvent]:
    """Decode one worksheet row; None for rows that cannot be used."""
    cells = [str(c).strip() for c in row] + [""] * (len(SHEET_COLUMNS) - len(row))
    data = dict(zip(SHEET_COLUMNS, cells))

    if not data["timestamp"] or not data["user_id"]:
        return None

    try:
        timestamp = parse_iso_datetime(data["timestamp"])
    except ValueError:
        logger.warning("Skipping attendance row with invalid timestamp %r", data["timestamp"])
        return None

    raw_type = data["event_type"].lower()
    try:
        # Blank type cells were written as clock-ins by older clients.
        event_type = EventType(LEGACY_EVENT_TYPE_LABELS.get(raw_type, raw_type) or EventType.CLOCK_IN.value)
    except ValueError:
        logger.warning("Skipping attendance row with unknown event type %r", data["event_type"])
        return None

    return AttendanceEvent(
        timestamp=timestamp,
        user_id=data["user_id"].lower(),
        event_type=event_type,
        evidence_ref=data["evidence_ref"] or None,
        note=data["note"] or None,
        latitude=parse_number(data["latitude"]),
        longitude=parse_number(data["longitude"]),
        user_name=data["user_name"],
        user_role=data["user_role"],
    )


class GoogleSheetsEventLog(EventLog):
    """Attendance log kept in a Google Sheets worksheet, one row per event.

    The worksheet is opened lazily on first use so app start-up does not
    depend on the Sheets API being reachable.
    """

    def __init__(self, opener: Callable[[], Any], *, zone: tzinfo):
        self._opener = opener
        self._zone = zone
        self._worksheet = None

    @classmethod
    def from_settings(
        cls,
        *,
        spreadsheet_id: str,
        tab_name: str,
        zone: tzinfo,
        credentials_file: Optional[str] = None,
        service_account_email: Optional[str] = None,
        private_key: Optional[str] = None,
    ) -> "GoogleSheetsEventLog":
        if not spreadsheet_id:
            raise EventLogError(detail="Missing GOOGLE_SHEETS_SPREADSHEET_ID setting.")

        def opener():
            if credentials_file:
                client = gspread.service_account(filename=credentials_file)
            elif service_account_email and private_key:
                client = gspread.service_account_from_dict(
                    {
                        "type": "service_account",
                        "client_email": service_account_email,
                        "private_key": normalize_private_key(private_key),
                        "token_uri": "https://oauth2.googleapis.com/token",
                    }
                )
            else:
                raise EventLogError(
                    detail=(
                        "Missing Google service account settings "
                        "(GOOGLE_SERVICE_ACCOUNT_EMAIL, GOOGLE_SERVICE_ACCOUNT_PRIVATE_KEY)."
                    )
                )
            return client.open_by_key(spreadsheet_id).worksheet(tab_name)

        return cls(opener, zone=zone)

    def _ws(self):
        if self._worksheet is None:
            self._worksheet = self._opener()
        return self._worksheet

    def append(self, event: AttendanceEvent) -> None:
        try:
            # RAW keeps the ISO timestamp as text instead of a locale-formatted date.
            self._ws().append_row(event_to_row(event, self._zone), value_input_option="RAW")
        except SHEETS_ERRORS as exc:
            raise EventLogError(detail=str(exc)) from exc

    def list_all(self) -> Sequence[AttendanceEvent]:
        try:
            rows = self._ws().get_values(SHEET_DATA_RANGE)
        except SHEETS_ERRORS as exc:
            raise EventLogError(detail=str(exc)) from exc

        events = []
        for row in rows or []:
            event = row_to_event(row)
            if event is not None:
                events.append(event)
        return events
