from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "DomainError"
    status_code = 400
    default_message = "Request could not be processed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "ValidationError"
    default_message = "Invalid request."


class InvalidEventType(ValidationError):
    kind = "InvalidEventType"
    default_message = "Invalid event type."


class MissingEvidence(ValidationError):
    kind = "MissingEvidence"
    default_message = "A selfie is required to record an event."


class NoOpenBreak(ValidationError):
    kind = "NoOpenBreak"
    default_message = "There is no break start to end."


class BreakTooShort(ValidationError):
    kind = "BreakTooShort"

    def __init__(self, remaining_minutes: int, *, min_break_minutes: int):
        self.remaining_minutes = int(remaining_minutes)
        self.min_break_minutes = int(min_break_minutes)
        super().__init__(
            f"Minimum break is {self.min_break_minutes} minutes. "
            f"Wait {self.remaining_minutes} more minute(s)."
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["remainingMinutes"] = self.remaining_minutes
        return data


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "AuthorizationError"
    status_code = 403
    default_message = "Action not allowed."


class UserInactive(AuthorizationError):
    kind = "UserInactive"
    default_message = "User is inactive."


class AccessDenied(AuthorizationError):
    kind = "AccessDenied"
    default_message = "Access restricted to active administrators."


class NotFoundError(DomainError):
    kind = "NotFound"
    status_code = 404
    default_message = "Resource not found."


class UserNotFound(NotFoundError):
    kind = "UserNotFound"
    default_message = "User profile not found."


class InfrastructureError(DomainError):
    """Raised when a collaborator (database, spreadsheet) fails.

    The message shown to callers stays generic; ``detail`` keeps the
    underlying error text for the logs.
    """

    kind = "InfrastructureError"
    status_code = 500
    default_message = "Internal error while processing the request."

    def __init__(self, detail: str = "", message: Optional[str] = None):
        self.detail = detail
        super().__init__(message)


class IdentityStoreError(InfrastructureError):
    kind = "IdentityStoreError"
    default_message = "Could not load the user profile."


class EventLogError(InfrastructureError):
    kind = "EventLogError"
    default_message = "Could not access the attendance log."
