from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_LOCAL_TIMEZONE


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 string (``Z`` suffix allowed) into aware UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def parse_iso_or_none(value: Optional[str]) -> Optional[datetime]:
    """Lenient variant for query filters: blank or invalid input gives None."""
    if not value or not value.strip():
        return None
    try:
        return parse_iso_datetime(value)
    except ValueError:
        return None


def to_iso_utc(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (millisecond precision)."""
    value = ensure_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def get_zone(name: Optional[str]) -> tzinfo:
    return ZoneInfo(name or DEFAULT_LOCAL_TIMEZONE)


def format_local(value: datetime, zone: tzinfo) -> str:
    """Wall-clock rendering shown to users, e.g. ``19/10/2026, 09:15:00``."""
    return ensure_utc(value).astimezone(zone).strftime("%d/%m/%Y, %H:%M:%S")


def minutes_between(earlier: datetime, later: datetime) -> float:
    return (ensure_utc(later) - ensure_utc(earlier)).total_seconds() / 60
