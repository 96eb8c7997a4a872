from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from .attendance.mysql_event_log import MySQLEventLog
from .attendance.repository import EventLog
from .attendance.service import AttendanceService
from .attendance.sheets_event_log import GoogleSheetsEventLog
from .attendance.validator import AttendanceValidator
from .common.datetime_utils import get_zone
from .core.constants import MIN_BREAK_MINUTES
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import IdentityStore


@dataclass(frozen=True)
class Container:
    attendance_service: AttendanceService
    report_service: ReportService

    zone: tzinfo


def build_services(
    *,
    event_log: EventLog,
    identities: IdentityStore,
    zone: tzinfo,
    min_break_minutes: int = MIN_BREAK_MINUTES,
) -> Container:
    attendance_service = AttendanceService(
        event_log,
        identities,
        validator=AttendanceValidator(min_break_minutes=min_break_minutes),
    )
    report_service = ReportService(identities, event_log)

    return Container(
        attendance_service=attendance_service,
        report_service=report_service,
        zone=zone,
    )


def build_event_log(settings, conn: DatabaseConnection, zone: tzinfo) -> EventLog:
    backend = getattr(settings, "EVENT_LOG_BACKEND", "sheets")
    if backend == "mysql":
        return MySQLEventLog(conn)
    if backend == "sheets":
        return GoogleSheetsEventLog.from_settings(
            spreadsheet_id=settings.GOOGLE_SHEETS_SPREADSHEET_ID,
            tab_name=settings.GOOGLE_SHEETS_POINTS_TAB_NAME,
            zone=zone,
            credentials_file=getattr(settings, "GOOGLE_APPLICATION_CREDENTIALS", "") or None,
            service_account_email=settings.GOOGLE_SERVICE_ACCOUNT_EMAIL,
            private_key=settings.GOOGLE_SERVICE_ACCOUNT_PRIVATE_KEY,
        )
    raise ValueError(f"Unsupported EVENT_LOG_BACKEND: {backend!r}")


def build_container(*, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))
    zone = get_zone(getattr(settings, "LOCAL_TIMEZONE", None))

    return build_services(
        event_log=build_event_log(settings, conn, zone),
        identities=MySQLUserRepository(conn),
        zone=zone,
        min_break_minutes=int(getattr(settings, "MIN_BREAK_MINUTES", MIN_BREAK_MINUTES)),
    )
