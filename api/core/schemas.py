"""
Shared response schemas.

The browser client reads camelCase keys, so response models serialize by
alias. Build them with snake_case field names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .pagination import PaginationState


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ListEnvelope(CamelModel):
    """
    Uniform listing envelope. Subclasses add the entity list.
    """

    success: bool
    total_count: int = 0
    total_pages: int = 0
    current_page: int = 1
    message: str | None = None
    error: str | None = None
    details: list[dict[str, Any]] | None = None

    @classmethod
    def pagination_fields(cls, state: PaginationState) -> dict[str, int]:
        return {
            "total_count": state.total_count,
            "total_pages": state.total_pages,
            "current_page": state.current_page,
        }


class PaginationInfo(CamelModel):
    current_page: int = 1
    total_pages: int = 0
    total_count: int = 0
    items_per_page: int
    has_next_page: bool = False
    has_previous_page: bool = False

    @classmethod
    def from_state(cls, state: PaginationState) -> "PaginationInfo":
        return cls(
            current_page=state.current_page,
            total_pages=state.total_pages,
            total_count=state.total_count,
            items_per_page=state.items_per_page,
            has_next_page=state.has_next_page,
            has_previous_page=state.has_previous_page,
        )
