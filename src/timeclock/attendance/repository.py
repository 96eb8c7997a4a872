from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceEvent


class EventLog(Protocol):
    """Append-only, externally owned log of attendance events.

    No locking, versioning or conditional append: two concurrent writers can
    both append after reading the same snapshot.
    """

    def append(self, event: AttendanceEvent) -> None:
        """Store ``event`` as a new row; existing rows are never touched."""

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceEvent]:
        """Every stored event, in no guaranteed order."""

        raise NotImplementedError
