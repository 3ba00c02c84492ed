from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..catalog.model import ActivityBlock, ActivityCategory
from ..core.enums import EntrySource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, new_id, optional_int
from .model import EntryStats, FavoriteBlock, TimeEntry, TimeEntryReportRow
from .repository import TimeEntryRepository

_ENTRY_COLUMNS = (
    "e.entry_id, e.user_id, e.block_id, e.start_at, e.end_at, e.duration_minutes, "
    "e.note, e.source, e.edited_by_id, e.deleted_at"
)

_UPSERT_FAVORITE = """
    INSERT INTO favorite_blocks(user_id, block_id, last_used_at)
    VALUES(%s,%s,%s)
    ON DUPLICATE KEY UPDATE last_used_at=VALUES(last_used_at)
"""


def _to_entry(r: dict) -> TimeEntry:
    return TimeEntry(
        entry_id=str(r["entry_id"]),
        user_id=str(r["user_id"]),
        block_id=optional_int(r.get("block_id")),
        start=r["start_at"],
        end=r.get("end_at"),
        duration_minutes=optional_int(r.get("duration_minutes")),
        note=r.get("note"),
        source=EntrySource(r.get("source") or EntrySource.MANUAL.value),
        edited_by_id=r.get("edited_by_id"),
        deleted_at=r.get("deleted_at"),
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ENTRY_COLUMNS} FROM time_entries e WHERE e.entry_id=%s AND e.deleted_at IS NULL",
                (entry_id,),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list_for_user_since(self, user_id: str, since: datetime) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM time_entries e
                WHERE e.user_id=%s AND e.deleted_at IS NULL AND e.start_at >= %s
                ORDER BY e.start_at DESC
                """,
                (user_id, since),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def create_entry(
        self,
        *,
        user_id: str,
        block_id: int,
        start: datetime,
        end: Optional[datetime],
        duration_minutes: Optional[int],
        note: Optional[str],
        source: EntrySource,
        favorite_used_at: Optional[datetime] = None,
    ) -> str:
        entry_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(entry_id, user_id, block_id, start_at, end_at, duration_minutes, note, source)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (entry_id, user_id, int(block_id), start, end, duration_minutes, note, source.value),
            )
            if favorite_used_at is not None:
                cur.execute(_UPSERT_FAVORITE, (user_id, int(block_id), favorite_used_at))
        return entry_id

    def update_entry(
        self,
        *,
        entry_id: str,
        user_id: str,
        block_id: int,
        start: datetime,
        end: Optional[datetime],
        duration_minutes: Optional[int],
        note: Optional[str],
        edited_by_id: str,
        source: Optional[EntrySource] = None,
        favorite_used_at: Optional[datetime] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET block_id=%s, start_at=%s, end_at=%s, duration_minutes=%s, note=%s,
                    edited_by_id=%s, source=COALESCE(%s, source)
                WHERE entry_id=%s AND user_id=%s AND deleted_at IS NULL
                """,
                (
                    int(block_id),
                    start,
                    end,
                    duration_minutes,
                    note,
                    edited_by_id,
                    source.value if source else None,
                    entry_id,
                    user_id,
                ),
            )
            # rowcount is 0 when nothing changed; existence is checked by the service first.
            if favorite_used_at is not None:
                cur.execute(_UPSERT_FAVORITE, (user_id, int(block_id), favorite_used_at))
            return True

    def soft_delete(self, *, entry_id: str, user_id: str, deleted_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE time_entries SET deleted_at=%s WHERE entry_id=%s AND user_id=%s AND deleted_at IS NULL",
                (deleted_at, entry_id, user_id),
            )
            return cur.rowcount > 0

    def list_favorites(self, user_id: str) -> Sequence[FavoriteBlock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT favorite_id, user_id, block_id, last_used_at
                FROM favorite_blocks
                WHERE user_id=%s
                ORDER BY last_used_at IS NULL, last_used_at DESC
                """,
                (user_id,),
            )
            return [
                FavoriteBlock(
                    favorite_id=int(r["favorite_id"]),
                    user_id=str(r["user_id"]),
                    block_id=int(r["block_id"]),
                    last_used_at=r.get("last_used_at"),
                )
                for r in fetchall(cur)
            ]

    def get_report_rows(
        self,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[str] = None,
    ) -> Sequence[TimeEntryReportRow]:
        clauses = ["e.deleted_at IS NULL", "e.start_at BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if user_id is not None:
            clauses.append("e.user_id=%s")
            params.append(user_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {_ENTRY_COLUMNS},
                    u.name AS user_name,
                    u.email AS user_email,
                    b.block_id AS b_block_id,
                    b.label AS b_label,
                    b.category_id AS b_category_id,
                    b.tag_id AS b_tag_id,
                    b.is_billable AS b_is_billable,
                    b.active AS b_active,
                    c.category_id AS c_category_id,
                    c.name AS c_name,
                    c.color AS c_color,
                    c.active AS c_active
                FROM time_entries e
                JOIN users u ON u.user_id = e.user_id
                LEFT JOIN activity_blocks b ON b.block_id = e.block_id
                LEFT JOIN activity_categories c ON c.category_id = b.category_id
                WHERE {where}
                ORDER BY e.start_at DESC, e.entry_id ASC
                """,
                tuple(params),
            )
            out: list[TimeEntryReportRow] = []
            for r in fetchall(cur):
                block = None
                if r.get("b_block_id") is not None:
                    block = ActivityBlock(
                        block_id=int(r["b_block_id"]),
                        label=r["b_label"],
                        category_id=int(r["b_category_id"]),
                        tag_id=optional_int(r.get("b_tag_id")),
                        is_billable=bool(r.get("b_is_billable")),
                        active=bool(r.get("b_active", True)),
                    )
                category = None
                if r.get("c_category_id") is not None:
                    category = ActivityCategory(
                        category_id=int(r["c_category_id"]),
                        name=r["c_name"],
                        color=r.get("c_color"),
                        active=bool(r.get("c_active", True)),
                    )
                out.append(
                    TimeEntryReportRow(
                        entry=_to_entry(r),
                        user_name=r["user_name"],
                        user_email=r["user_email"],
                        block=block,
                        category=category,
                    )
                )
            return out

    def entry_stats(self, user_ids: Sequence[str]) -> dict[str, EntryStats]:
        user_ids = list(user_ids)
        if not user_ids:
            return {}

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, COUNT(*) AS entry_count, MAX(start_at) AS last_active_at
                FROM time_entries
                WHERE deleted_at IS NULL AND user_id IN ({in_clause(user_ids)})
                GROUP BY user_id
                """,
                tuple(user_ids),
            )
            return {
                str(r["user_id"]): EntryStats(
                    user_id=str(r["user_id"]),
                    entry_count=int(r["entry_count"]),
                    last_active_at=r.get("last_active_at"),
                )
                for r in fetchall(cur)
            }
