from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import User, UserRef
from .repository import UserRepository

_USER_COLUMNS = "user_id, name, email, password_hash, role, is_active, created_at, updated_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row.get("password_hash"),
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email.lower(),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_active(self) -> Sequence[UserRef]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, name, email FROM users WHERE is_active=1 ORDER BY name ASC")
            return [
                UserRef(user_id=str(r["user_id"]), name=r["name"], email=r["email"])
                for r in fetchall(cur)
            ]

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE role=%s ORDER BY name ASC", (role.value,))
            return [_to_user(r) for r in fetchall(cur)]

    def create_employee(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        valid_from: date,
        weekly_minutes: int,
        created_by_id: Optional[str],
    ) -> str:
        user_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, name, email, password_hash, role, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (user_id, name, email, password_hash, Role.EMPLOYEE.value),
            )
            cur.execute(
                """
                INSERT INTO work_schedules(user_id, valid_from, weekly_minutes, created_by_id)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, valid_from, int(weekly_minutes), created_by_id),
            )
        return user_id

    def deactivate(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET is_active=0, password_hash=NULL WHERE user_id=%s",
                (user_id,),
            )
            return cur.rowcount > 0

    def update_password(self, user_id: str, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0
