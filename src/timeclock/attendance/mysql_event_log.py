from __future__ import annotations

import logging
from typing import Sequence

import mysql.connector

from ..core.enums import EventType
from ..core.exceptions import EventLogError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_db_datetime, to_db_datetime
from .model import AttendanceEvent
from .repository import EventLog

logger = logging.getLogger(__name__)


class MySQLEventLog(EventLog):
    """Insert-only ``attendance_events`` table.

    Rows are never updated or deleted from here.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, event: AttendanceEvent) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_events(
                        created_at, user_id, user_name, user_role, event_type,
                        latitude, longitude, evidence_ref, note
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        to_db_datetime(event.timestamp),
                        event.user_id,
                        event.user_name,
                        event.user_role,
                        event.event_type.value,
                        event.latitude,
                        event.longitude,
                        event.evidence_ref,
                        event.note,
                    ),
                )
        except mysql.connector.Error as exc:
            raise EventLogError(detail=str(exc)) from exc

    def list_all(self) -> Sequence[AttendanceEvent]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT created_at, user_id, user_name, user_role, event_type,
                           latitude, longitude, evidence_ref, note
                    FROM attendance_events
                    """
                )
                rows = fetchall(cur)
        except mysql.connector.Error as exc:
            raise EventLogError(detail=str(exc)) from exc

        out: list[AttendanceEvent] = []
        for r in rows:
            try:
                event_type = EventType(r["event_type"])
            except ValueError:
                logger.warning("Skipping attendance row with unknown event type %r", r["event_type"])
                continue
            out.append(
                AttendanceEvent(
                    timestamp=from_db_datetime(r["created_at"]),
                    user_id=str(r["user_id"]).lower(),
                    event_type=event_type,
                    evidence_ref=r.get("evidence_ref"),
                    note=r.get("note"),
                    latitude=r.get("latitude"),
                    longitude=r.get("longitude"),
                    user_name=r.get("user_name") or "",
                    user_role=r.get("user_role") or "",
                )
            )
        return out
