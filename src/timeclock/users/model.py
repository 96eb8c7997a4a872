from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class UserProfile:
    """Domain entity: the slice of a user profile the time clock reads.

    Profiles are owned by the identity store; nothing here writes them.
    """

    user_id: str
    name: str
    role: Role
    active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
