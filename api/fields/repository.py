"""
Field (tag) reads (raw SQL).
"""

from __future__ import annotations

from typing import Protocol, Sequence

from core import db
from topics.repository import like_pattern


class TagStore(Protocol):
    async def count(self, search: str | None) -> int: ...

    async def page(self, search: str | None, *, offset: int, limit: int) -> list[str]: ...

    async def existing_names(self, names: Sequence[str]) -> list[str]: ...


class PostgresTagStore:
    async def count(self, search: str | None) -> int:
        total = await db.fetch_value(
            """
            SELECT count(*)
            FROM tag
            WHERE $1::text IS NULL OR tag_name ILIKE $1
            """,
            like_pattern(search) if search else None,
        )
        return int(total or 0)

    async def page(self, search: str | None, *, offset: int, limit: int) -> list[str]:
        rows = await db.fetch_all(
            """
            SELECT tag_name
            FROM tag
            WHERE $1::text IS NULL OR tag_name ILIKE $1
            ORDER BY tag_name ASC
            LIMIT $2
            OFFSET $3
            """,
            like_pattern(search) if search else None,
            limit,
            offset,
        )
        return [str(row["tag_name"]) for row in rows]

    async def existing_names(self, names: Sequence[str]) -> list[str]:
        if not names:
            return []
        rows = await db.fetch_all(
            """
            SELECT tag_name
            FROM tag
            WHERE tag_name = ANY($1::text[])
            ORDER BY tag_name ASC
            """,
            list(names),
        )
        return [str(row["tag_name"]) for row in rows]


def get_store() -> TagStore:
    return PostgresTagStore()
