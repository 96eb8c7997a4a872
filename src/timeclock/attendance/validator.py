from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import minutes_between
from ..core.constants import MIN_BREAK_MINUTES
from ..core.enums import EventType
from ..core.exceptions import BreakTooShort, NoOpenBreak
from .model import AttendanceEvent


def latest_break_start(history: Iterable[AttendanceEvent]) -> Optional[AttendanceEvent]:
    """Most recent BREAK_START by timestamp; input order is irrelevant."""
    latest: Optional[AttendanceEvent] = None
    for event in history:
        if event.event_type != EventType.BREAK_START:
            continue
        if latest is None or event.timestamp > latest.timestamp:
            latest = event
    return latest


@dataclass(frozen=True)
class AttendanceValidator:
    """Decide whether a requested event is admissible for a user's history.

    Only BREAK_END is gated: it needs an earlier BREAK_START (the latest one
    anywhere in the history) at least ``min_break_minutes`` old. CLOCK_IN,
    BREAK_START and CLOCK_OUT are always admissible.

    Pure: no I/O, ``now`` is always passed in.
    """

    min_break_minutes: int = MIN_BREAK_MINUTES

    def validate(self, history: Iterable[AttendanceEvent], requested: EventType, now: datetime) -> None:
        if requested != EventType.BREAK_END:
            return

        opened = latest_break_start(history)
        if opened is None:
            raise NoOpenBreak()

        elapsed = math.floor(minutes_between(opened.timestamp, now))
        if elapsed < self.min_break_minutes:
            raise BreakTooShort(
                self.min_break_minutes - elapsed,
                min_break_minutes=self.min_break_minutes,
            )
