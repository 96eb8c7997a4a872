from __future__ import annotations

from typing import Optional, Protocol

from .model import UserProfile


class IdentityStore(Protocol):
    """Read interface to the user profile store.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def find_by_user_id(self, user_id: str) -> Optional[UserProfile]:
        raise NotImplementedError
