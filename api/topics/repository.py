"""
Thesis proposal reads (raw SQL).

`ProposalStore` is the interface the topic services depend on;
`PostgresProposalStore` is the asyncpg implementation.

Row contract (every method returning rows):
- one row per proposal, keys:
  thesis_id, title, description, requirements, thesis_type,
  application_start, application_end,
  supervisor_name, supervisor_surname, faculty_name, tags
- supervisor, user and faculty are LEFT JOINed one-to-one on their foreign
  keys, so each contributes at most one record and missing ones are NULL
- `tags` is a list of tag names sorted by name (empty, never NULL), so the
  first tag is stable across requests
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from core import db


class OrderMode(str, enum.Enum):
    TITLE = "title"
    RECENT = "recent"


_ORDER_BY = {
    OrderMode.TITLE: "tp.title ASC, tp.thesis_id ASC",
    OrderMode.RECENT: "tp.application_start DESC NULLS LAST, tp.thesis_id ASC",
}


@dataclass(frozen=True)
class ProposalFilter:
    search: str | None = None
    tag_names: tuple[str, ...] = ()


class ProposalStore(Protocol):
    async def count(self, proposal_filter: ProposalFilter) -> int: ...

    async def page(
        self,
        proposal_filter: ProposalFilter,
        order: OrderMode,
        *,
        offset: int,
        limit: int,
    ) -> list[dict[str, Any]]: ...

    async def find_by_ids(self, proposal_filter: ProposalFilter, ids: Sequence[str]) -> list[dict[str, Any]]: ...


def like_pattern(term: str) -> str:
    """
    Case-insensitive substring pattern with LIKE wildcards escaped.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


_FROM = """
FROM thesis_proposal tp
LEFT JOIN supervisor s ON s.supervisor_id = tp.supervisor_id
LEFT JOIN user_parent u ON u.user_id = s.user_id
LEFT JOIN faculty f ON f.faculty_id = u.faculty_id
"""

_COLUMNS = """
SELECT
  tp.thesis_id::text AS thesis_id,
  tp.title,
  tp.description,
  tp.requirements,
  tp.thesis_type,
  tp.application_start,
  tp.application_end,
  u.name AS supervisor_name,
  u.surname AS supervisor_surname,
  f.faculty_name,
  COALESCE(
    (
      SELECT array_agg(t.tag_name ORDER BY t.tag_name)
      FROM thesis_proposal_tag t
      WHERE t.thesis_id = tp.thesis_id
    ),
    ARRAY[]::text[]
  ) AS tags
"""


def build_where(proposal_filter: ProposalFilter, *, ids: Sequence[str] | None = None) -> tuple[str, list[Any]]:
    """
    Return a WHERE clause (or "") and its positional args, numbered from $1.
    """
    clauses: list[str] = []
    args: list[Any] = []

    if proposal_filter.search:
        args.append(like_pattern(proposal_filter.search))
        n = len(args)
        clauses.append(
            f"""(
              tp.title ILIKE ${n}
              OR tp.description ILIKE ${n}
              OR tp.requirements ILIKE ${n}
              OR u.name ILIKE ${n}
              OR u.surname ILIKE ${n}
              OR EXISTS (
                SELECT 1 FROM thesis_proposal_tag t
                WHERE t.thesis_id = tp.thesis_id AND t.tag_name ILIKE ${n}
              )
            )"""
        )

    if proposal_filter.tag_names:
        args.append(list(proposal_filter.tag_names))
        n = len(args)
        clauses.append(
            f"""EXISTS (
              SELECT 1 FROM thesis_proposal_tag t
              WHERE t.thesis_id = tp.thesis_id AND t.tag_name = ANY(${n}::text[])
            )"""
        )

    if ids is not None:
        args.append(list(ids))
        clauses.append(f"tp.thesis_id::text = ANY(${len(args)}::text[])")

    if not clauses:
        return "", args
    return "WHERE " + "\n  AND ".join(clauses), args


class PostgresProposalStore:
    async def count(self, proposal_filter: ProposalFilter) -> int:
        where, args = build_where(proposal_filter)
        total = await db.fetch_value(f"SELECT count(*) {_FROM} {where}", *args)
        return int(total or 0)

    async def page(
        self,
        proposal_filter: ProposalFilter,
        order: OrderMode,
        *,
        offset: int,
        limit: int,
    ) -> list[dict[str, Any]]:
        where, args = build_where(proposal_filter)
        args.extend([limit, offset])
        return await db.fetch_all(
            f"""
            {_COLUMNS}
            {_FROM}
            {where}
            ORDER BY {_ORDER_BY[order]}
            LIMIT ${len(args) - 1}
            OFFSET ${len(args)}
            """,
            *args,
        )

    async def find_by_ids(self, proposal_filter: ProposalFilter, ids: Sequence[str]) -> list[dict[str, Any]]:
        if not ids:
            return []
        where, args = build_where(proposal_filter, ids=ids)
        return await db.fetch_all(f"{_COLUMNS} {_FROM} {where}", *args)


def get_store() -> ProposalStore:
    return PostgresProposalStore()
