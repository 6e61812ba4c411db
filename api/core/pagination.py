"""
Pagination input validation and derived pagination state.

`PaginationState` stores only what the store reports (page, page size, row
count). Total pages and the next/previous flags are always derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, Field


class PageQuery(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    search_query: str | None = None

    @property
    def offset(self) -> int:
        return offset_for(self.page, self.limit)

    @property
    def search_term(self) -> str | None:
        return normalize_search(self.search_query)


def normalize_search(search_query: str | None) -> str | None:
    term = (search_query or "").strip()
    return term or None


def offset_for(page: int, items_per_page: int) -> int:
    return (page - 1) * items_per_page


def total_pages_for(total_count: int, items_per_page: int) -> int:
    if items_per_page < 1:
        raise ValueError("items_per_page must be >= 1")
    if total_count <= 0:
        return 0
    return -(-total_count // items_per_page)


@dataclass(frozen=True)
class PaginationState:
    current_page: int
    items_per_page: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_count, self.items_per_page)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1


def validation_details(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    JSON-safe view of pydantic `errors()` output for response envelopes.
    """
    return [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": str(err.get("msg") or ""),
            "type": str(err.get("type") or ""),
        }
        for err in errors
    ]
