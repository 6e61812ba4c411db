"""
Pydantic schemas for field endpoints.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field as PydanticField

from core.schemas import CamelModel, ListEnvelope, PaginationInfo
from topics.schemas import ThesisProposalSummary, to_summary

DEFAULT_ITEMS_PER_PAGE = 15
MAX_ITEMS_PER_PAGE = 50

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    return _WHITESPACE.sub("-", name.lower())


class Field(CamelModel):
    id: str
    name: str
    slug: str

    @classmethod
    def from_tag(cls, tag_name: str) -> "Field":
        return cls(id=tag_name, name=tag_name, slug=slugify(tag_name))


class FieldsResponse(ListEnvelope):
    fields: list[Field] = []


class FilterSelectedFieldsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    selected_field_ids: list[str] = PydanticField(..., alias="selectedFieldIds", min_length=1)
    search_query: str | None = PydanticField(default=None, alias="searchQuery")
    page: int = PydanticField(default=1, ge=1)
    items_per_page: int = PydanticField(
        default=DEFAULT_ITEMS_PER_PAGE,
        alias="itemsPerPage",
        ge=1,
        le=MAX_ITEMS_PER_PAGE,
    )


class FieldTopic(ThesisProposalSummary):
    thesis_type: str | None = None
    application_start: date | datetime | None = None
    application_end: date | datetime | None = None
    requirements: str | None = None


def to_field_topic(row: dict[str, Any]) -> FieldTopic:
    summary = to_summary(row)
    return FieldTopic(
        **summary.model_dump(),
        thesis_type=row.get("thesis_type"),
        application_start=row.get("application_start"),
        application_end=row.get("application_end"),
        requirements=row.get("requirements"),
    )


class AppliedFilters(CamelModel):
    search_query: str | None = None
    field_count: int = 0


class FilterSelectedFieldsResponse(CamelModel):
    success: bool
    topics: list[FieldTopic] = []
    pagination: PaginationInfo = PaginationInfo(items_per_page=DEFAULT_ITEMS_PER_PAGE)
    selected_field_ids: list[str] | None = None
    applied_filters: AppliedFilters | None = None
    error: str | None = None
    details: list[dict[str, Any]] | None = None


class FieldNamesResponse(CamelModel):
    success: bool
    field_names: list[str] = []
    error: str | None = None
