"""Schema/seed helpers used at startup (AUTO_INIT_DB / AUTO_SEED_DB) and by scripts/."""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_WEEKLY_MINUTES
from ..core.enums import Role
from .connection import DatabaseConnection, DBConfig
from .mysql_base import db_cursor, fetchone, new_id

logger = logging.getLogger(__name__)

DEMO_USERS = (
    ("Patricia Muster", "p.muster@example.com", "test1234", Role.EMPLOYEE),
    ("Maximilian Lead", "m.lead@example.com", "test1234", Role.MANAGER),
    ("Alex Admin", "a.admin@example.com", "admin123", Role.ADMIN),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    conn = factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(db_config: dict, *, path: str | Path) -> int:
    sql = _strip_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    count = 0
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    return count


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = apply_sql_file(db_config, path=schema_path)
    logger.info("Applied %s schema statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = apply_sql_file(db_config, path=seed_path)
    logger.info("Applied %s seed statements from %s", count, seed_path)


def ensure_demo_users(db_config: dict, *, today: date | None = None) -> None:
    """Create (or reset) one user per role, each with a default 40h schedule."""
    today = today or date.today()

    with db_cursor(_factory(db_config)) as (_, cur):
        for name, email, password, role in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            existing = fetchone(cur)
            if existing:
                user_id = existing["user_id"]
                cur.execute(
                    "UPDATE users SET name=%s, password_hash=%s, role=%s, is_active=1 WHERE user_id=%s",
                    (name, password_hash, role.value, user_id),
                )
            else:
                user_id = new_id()
                cur.execute(
                    """
                    INSERT INTO users (user_id, name, email, password_hash, role, is_active)
                    VALUES (%s, %s, %s, %s, %s, 1)
                    """,
                    (user_id, name, email, password_hash, role.value),
                )

            cur.execute("SELECT COUNT(*) AS n FROM work_schedules WHERE user_id=%s", (user_id,))
            if int(fetchone(cur)["n"]) == 0:
                cur.execute(
                    """
                    INSERT INTO work_schedules (user_id, valid_from, weekly_minutes, created_by_id)
                    VALUES (%s, %s, %s, NULL)
                    """,
                    (user_id, today, DEFAULT_WEEKLY_MINUTES),
                )


_CREATE_TABLE_RE = re.compile(r"(?im)^\s*CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?`?(\w+)`?")

SEEDED_TABLES = ("activity_categories", "activity_tags", "activity_blocks", "users", "work_schedules")


def declared_tables(schema_path: str | Path) -> list[str]:
    """Table names a schema script creates, in file order."""
    sql = _strip_comments(Path(schema_path).read_text(encoding="utf-8"))
    return _CREATE_TABLE_RE.findall(sql)


def row_counts(db_config: dict, tables: Iterable[str] = SEEDED_TABLES) -> dict[str, int]:
    counts: dict[str, int] = {}
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        for table in tables:
            cur.execute(f"SELECT COUNT(*) FROM `{table}`")
            counts[table] = int(cur.fetchone()[0])
    return counts


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(_factory(db_config), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
