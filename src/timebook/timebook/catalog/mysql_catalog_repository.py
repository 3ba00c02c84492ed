from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import ActivityBlock, ActivityCategory, ActivityTag
from .repository import CatalogRepository

_TAG_COLUMNS = "tag_id, name, category_id, description, sort_order, active"
_CATEGORY_COLUMNS = "category_id, name, color, description, sort_order, active"
_BLOCK_COLUMNS = "b.block_id, b.label, b.category_id, b.tag_id, b.description, b.is_billable, b.active, b.sort_order"


def _to_tag(r: dict) -> ActivityTag:
    return ActivityTag(
        tag_id=int(r["tag_id"]),
        name=r["name"],
        category_id=optional_int(r.get("category_id")),
        description=r.get("description"),
        sort_order=int(r.get("sort_order") or 0),
        active=bool(r.get("active", True)),
    )


def _to_category(r: dict, tags: Sequence[ActivityTag] = ()) -> ActivityCategory:
    return ActivityCategory(
        category_id=int(r["category_id"]),
        name=r["name"],
        color=r.get("color"),
        description=r.get("description"),
        sort_order=int(r.get("sort_order") or 0),
        active=bool(r.get("active", True)),
        tags=tuple(tags),
    )


def _to_block(r: dict) -> ActivityBlock:
    return ActivityBlock(
        block_id=int(r["block_id"]),
        label=r["label"],
        category_id=int(r["category_id"]),
        tag_id=optional_int(r.get("tag_id")),
        description=r.get("description"),
        is_billable=bool(r.get("is_billable")),
        active=bool(r.get("active", True)),
        sort_order=int(r.get("sort_order") or 0),
    )


class MySQLCatalogRepository(CatalogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_categories(self, *, active_only: bool = False) -> Sequence[ActivityCategory]:
        where = "WHERE active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TAG_COLUMNS} FROM activity_tags {where} ORDER BY sort_order ASC, tag_id ASC")
            tags_by_category: dict[Optional[int], list[ActivityTag]] = defaultdict(list)
            for r in fetchall(cur):
                tag = _to_tag(r)
                tags_by_category[tag.category_id].append(tag)

            cur.execute(
                f"SELECT {_CATEGORY_COLUMNS} FROM activity_categories {where} ORDER BY sort_order ASC, category_id ASC"
            )
            return [_to_category(r, tags_by_category.get(int(r["category_id"]), [])) for r in fetchall(cur)]

    def list_blocks(self, *, active_only: bool = False) -> Sequence[ActivityBlock]:
        where = "WHERE b.active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BLOCK_COLUMNS}
                FROM activity_blocks b
                JOIN activity_categories c ON c.category_id = b.category_id
                {where}
                ORDER BY c.sort_order ASC, b.sort_order ASC, b.block_id ASC
                """
            )
            return [_to_block(r) for r in fetchall(cur)]

    def get_category(self, category_id: int) -> Optional[ActivityCategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_CATEGORY_COLUMNS} FROM activity_categories WHERE category_id=%s", (int(category_id),))
            r = fetchone(cur)
            return _to_category(r) if r else None

    def get_tag(self, tag_id: int) -> Optional[ActivityTag]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TAG_COLUMNS} FROM activity_tags WHERE tag_id=%s", (int(tag_id),))
            r = fetchone(cur)
            return _to_tag(r) if r else None

    def get_block(self, block_id: int) -> Optional[ActivityBlock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_BLOCK_COLUMNS} FROM activity_blocks b WHERE b.block_id=%s", (int(block_id),))
            r = fetchone(cur)
            return _to_block(r) if r else None

    def _count(self, sql: str, params: tuple = ()) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return int(fetchone(cur)["n"])

    def count_categories(self) -> int:
        return self._count("SELECT COUNT(*) AS n FROM activity_categories")

    def count_tags(self, *, category_id: int) -> int:
        return self._count("SELECT COUNT(*) AS n FROM activity_tags WHERE category_id=%s", (int(category_id),))

    def count_blocks(self, *, category_id: int) -> int:
        return self._count("SELECT COUNT(*) AS n FROM activity_blocks WHERE category_id=%s", (int(category_id),))

    def create_category(
        self, *, name: str, color: Optional[str], description: Optional[str], sort_order: int
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_categories(name, color, description, sort_order, active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (name, color, description, int(sort_order)),
            )
            return int(cur.lastrowid)

    def create_tag(
        self, *, name: str, category_id: int, description: Optional[str], sort_order: int
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_tags(name, category_id, description, sort_order, active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (name, int(category_id), description, int(sort_order)),
            )
            return int(cur.lastrowid)

    def create_block(
        self,
        *,
        label: str,
        category_id: int,
        tag_id: Optional[int],
        description: Optional[str],
        is_billable: bool,
        sort_order: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_blocks(label, category_id, tag_id, description, is_billable, active, sort_order)
                VALUES(%s,%s,%s,%s,%s,1,%s)
                """,
                (label, int(category_id), tag_id, description, 1 if is_billable else 0, int(sort_order)),
            )
            return int(cur.lastrowid)

    def _set_active(self, table: str, id_column: str, record_id: int, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {table} SET active=%s WHERE {id_column}=%s",
                (1 if active else 0, int(record_id)),
            )
            return cur.rowcount > 0

    def set_category_active(self, category_id: int, *, active: bool) -> bool:
        return self._set_active("activity_categories", "category_id", category_id, active)

    def set_tag_active(self, tag_id: int, *, active: bool) -> bool:
        return self._set_active("activity_tags", "tag_id", tag_id, active)

    def set_block_active(self, block_id: int, *, active: bool) -> bool:
        return self._set_active("activity_blocks", "block_id", block_id, active)
