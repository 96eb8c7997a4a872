from __future__ import annotations

from typing import Optional

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import IdentityStoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import UserProfile
from .repository import IdentityStore


class MySQLUserRepository(IdentityStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_user_id(self, user_id: str) -> Optional[UserProfile]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT user_id, full_name, role, is_active
                    FROM users
                    WHERE user_id=%s
                    """,
                    (user_id,),
                )
                row = fetchone(cur)
        except mysql.connector.Error as exc:
            raise IdentityStoreError(detail=str(exc)) from exc

        if not row:
            return None
        return UserProfile(
            user_id=str(row["user_id"]).lower(),
            name=row.get("full_name") or "",
            role=Role.from_value(row.get("role")),
            active=bool(row.get("is_active", True)),
        )
