from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, in_clause
from .model import WorkSchedule
from .repository import ScheduleRepository


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_users(self, user_ids: Sequence[str]) -> Sequence[WorkSchedule]:
        user_ids = list(user_ids)
        if not user_ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT schedule_id, user_id, valid_from, weekly_minutes, created_by_id, created_at
                FROM work_schedules
                WHERE user_id IN ({in_clause(user_ids)})
                ORDER BY valid_from DESC, schedule_id DESC
                """,
                tuple(user_ids),
            )
            return [
                WorkSchedule(
                    schedule_id=int(r["schedule_id"]),
                    user_id=str(r["user_id"]),
                    valid_from=as_date(r["valid_from"]),
                    weekly_minutes=int(r["weekly_minutes"]),
                    created_by_id=r.get("created_by_id"),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]

    def exists(self, *, user_id: str, valid_from: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM work_schedules WHERE user_id=%s AND valid_from=%s",
                (user_id, valid_from),
            )
            return fetchone(cur) is not None

    def create(
        self,
        *,
        user_id: str,
        valid_from: date,
        weekly_minutes: int,
        created_by_id: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_schedules(user_id, valid_from, weekly_minutes, created_by_id)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, valid_from, int(weekly_minutes), created_by_id),
            )
            return int(cur.lastrowid)
