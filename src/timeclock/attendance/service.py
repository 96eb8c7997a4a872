from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import ensure_utc, now_utc
from ..common.validators import normalize_user_id, require_non_empty
from ..core.enums import EventType
from ..core.exceptions import MissingEvidence, UserInactive, UserNotFound, ValidationError
from ..users.model import UserProfile
from ..users.repository import IdentityStore
from .history import events_for_user, filter_events
from .model import AttendanceEvent, parse_event_type
from .repository import EventLog
from .validator import AttendanceValidator

logger = logging.getLogger(__name__)


class AttendanceService:
    """Record clock events against the append-only log.

    Every call re-reads what it needs; nothing is cached between calls.
    Concurrent BREAK_END submissions for the same user are not serialized.
    """

    def __init__(
        self,
        events: EventLog,
        identities: IdentityStore,
        *,
        validator: AttendanceValidator | None = None,
    ):
        self._events = events
        self._identities = identities
        self._validator = validator or AttendanceValidator()

    def _get_active_profile(self, user_id: str) -> UserProfile:
        profile = self._identities.find_by_user_id(user_id)
        if not profile:
            raise UserNotFound()
        if not profile.active:
            raise UserInactive()
        return profile

    def record_event(
        self,
        user_id: str,
        event_type: EventType | str,
        evidence_ref: Optional[str],
        *,
        note: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        now: datetime | None = None,
    ) -> AttendanceEvent:
        user_id = require_non_empty(normalize_user_id(user_id), "userId")

        try:
            profile = self._get_active_profile(user_id)
            requested = parse_event_type(event_type)
            if not isinstance(evidence_ref, str) or not evidence_ref.strip():
                raise MissingEvidence()

            now = ensure_utc(now) if now else now_utc()
            if requested == EventType.BREAK_END:
                history = events_for_user(self._events.list_all(), user_id)
                self._validator.validate(history, requested, now)
        except (ValidationError, UserNotFound, UserInactive) as e:
            logger.info("Rejected %r for %s: %s", event_type, user_id, e.kind)
            raise

        event = AttendanceEvent(
            timestamp=now,
            user_id=user_id,
            event_type=requested,
            evidence_ref=evidence_ref.strip(),
            note=note or None,
            latitude=latitude,
            longitude=longitude,
            user_name=profile.name,
            user_role=profile.role.value,
        )
        self._events.append(event)
        logger.info("Recorded %s for %s at %s", requested.value, user_id, now.isoformat())
        return event

    def list_history(
        self,
        user_id: str,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[AttendanceEvent]:
        """The user's own events in ``[start, end]``, newest first."""
        user_id = require_non_empty(normalize_user_id(user_id), "userId")
        return filter_events(self._events.list_all(), user_id=user_id, start=start, end=end)

