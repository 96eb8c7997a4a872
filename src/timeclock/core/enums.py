from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"

    @classmethod
    def from_value(cls, value: str | None) -> "Role":
        # Only the exact stored value "admin" grants admin rights.
        if value == cls.ADMIN.value:
            return cls.ADMIN
        return cls.STAFF


class EventType(str, Enum):
    """Closed set of clock events a user may submit."""

    CLOCK_IN = "clock_in"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
    CLOCK_OUT = "clock_out"
