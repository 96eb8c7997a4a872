from __future__ import annotations

import logging
from typing import Iterable

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    user_id     VARCHAR(255) NOT NULL PRIMARY KEY,
    full_name   VARCHAR(255) NOT NULL,
    role        VARCHAR(32)  NOT NULL DEFAULT 'staff',
    is_active   TINYINT(1)   NOT NULL DEFAULT 1,
    created_at  DATETIME     NOT NULL DEFAULT CURRENT_TIMESTAMP
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;

CREATE TABLE IF NOT EXISTS attendance_events (
    event_id      BIGINT       NOT NULL AUTO_INCREMENT PRIMARY KEY,
    created_at    DATETIME(6)  NOT NULL,
    user_id       VARCHAR(255) NOT NULL,
    user_name     VARCHAR(255) NOT NULL DEFAULT '',
    user_role     VARCHAR(32)  NOT NULL DEFAULT '',
    event_type    VARCHAR(32)  NOT NULL,
    latitude      DOUBLE       NULL,
    longitude     DOUBLE       NULL,
    evidence_ref  TEXT         NULL,
    note          TEXT         NULL,
    INDEX idx_attendance_events_user_time (user_id, created_at)
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;
"""


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict) -> None:
    """Create the database and tables (idempotent: CREATE IF NOT EXISTS)."""
    ensure_database_exists(db_config)

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        _exec_sql(cur, SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to database %s", db_config.get("database"))


def ensure_admin_user(db_config: dict, *, user_id: str, full_name: str) -> None:
    """Upsert the bootstrap administrator so reports are reachable on a fresh install."""
    user_id = user_id.strip().lower()
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT user_id FROM users WHERE user_id=%s", (user_id,))
        existing = cur.fetchone()
        if existing:
            cur.execute(
                "UPDATE users SET full_name=%s, role='admin', is_active=1 WHERE user_id=%s",
                (full_name, user_id),
            )
        else:
            cur.execute(
                "INSERT INTO users (user_id, full_name, role, is_active) VALUES (%s, %s, 'admin', 1)",
                (user_id, full_name),
            )
        conn.commit()
    finally:
        conn.close()
    logger.info("Bootstrap admin %s ready", user_id)


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
