"""
Supervisor (professor) reads (raw SQL).

Rows: supervisor_id, name, surname, faculty_name. User and faculty are
LEFT JOINed one-to-one, so each row is one supervisor.
"""

from __future__ import annotations

from typing import Any, Protocol

from core import db
from topics.repository import like_pattern

_SELECT = """
SELECT
  s.supervisor_id::text AS supervisor_id,
  u.name,
  u.surname,
  f.faculty_name
FROM supervisor s
LEFT JOIN user_parent u ON u.user_id = s.user_id
LEFT JOIN faculty f ON f.faculty_id = u.faculty_id
"""

_SEARCH = """
WHERE $1::text IS NULL
   OR u.name ILIKE $1
   OR u.surname ILIKE $1
   OR f.faculty_name ILIKE $1
"""

_ORDER = "ORDER BY u.surname ASC NULLS LAST, u.name ASC NULLS LAST, s.supervisor_id ASC"


class SupervisorStore(Protocol):
    async def count(self, search: str | None) -> int: ...

    async def page(self, search: str | None, *, offset: int, limit: int) -> list[dict[str, Any]]: ...

    async def list_all(self) -> list[dict[str, Any]]: ...


class PostgresSupervisorStore:
    async def count(self, search: str | None) -> int:
        total = await db.fetch_value(
            f"""
            SELECT count(*)
            FROM supervisor s
            LEFT JOIN user_parent u ON u.user_id = s.user_id
            LEFT JOIN faculty f ON f.faculty_id = u.faculty_id
            {_SEARCH}
            """,
            like_pattern(search) if search else None,
        )
        return int(total or 0)

    async def page(self, search: str | None, *, offset: int, limit: int) -> list[dict[str, Any]]:
        return await db.fetch_all(
            f"""
            {_SELECT}
            {_SEARCH}
            {_ORDER}
            LIMIT $2
            OFFSET $3
            """,
            like_pattern(search) if search else None,
            limit,
            offset,
        )

    async def list_all(self) -> list[dict[str, Any]]:
        return await db.fetch_all(f"{_SELECT} {_ORDER}")


def get_store() -> SupervisorStore:
    return PostgresSupervisorStore()
