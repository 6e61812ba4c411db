"""
Field listing and field-based topic filtering.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from pydantic import ValidationError

from core import db
from core.pagination import PageQuery, PaginationState, normalize_search, offset_for, validation_details
from core.schemas import PaginationInfo
from topics.repository import OrderMode, ProposalFilter, ProposalStore

from . import schemas
from .repository import TagStore

logger = logging.getLogger(__name__)


async def list_fields(
    store: TagStore,
    *,
    page: int = 1,
    limit: int = 10,
    search_query: str | None = None,
) -> schemas.FieldsResponse:
    try:
        query = PageQuery(page=page, limit=limit, search_query=search_query)
    except ValidationError as exc:
        return schemas.FieldsResponse(
            success=False,
            error="Invalid input parameters",
            details=validation_details(exc.errors()),
        )

    try:
        total_count, tag_names = await db.gather_queries(
            store.count(query.search_term),
            store.page(query.search_term, offset=query.offset, limit=query.limit),
        )
    except Exception:
        logger.exception("Error fetching fields from tags")
        return schemas.FieldsResponse(success=False, message="Failed to fetch fields", current_page=page)

    state = PaginationState(current_page=query.page, items_per_page=query.limit, total_count=total_count)
    return schemas.FieldsResponse(
        success=True,
        fields=[schemas.Field.from_tag(name) for name in tag_names],
        **schemas.FieldsResponse.pagination_fields(state),
    )


async def filter_selected_fields(store: ProposalStore, payload: dict[str, Any]) -> schemas.FilterSelectedFieldsResponse:
    """
    Proposals carrying at least one of the selected tags, newest application
    window first.
    """
    try:
        request = schemas.FilterSelectedFieldsRequest.model_validate(payload)
    except ValidationError as exc:
        return schemas.FilterSelectedFieldsResponse(
            success=False,
            error="Invalid input parameters",
            details=validation_details(exc.errors()),
        )

    search = normalize_search(request.search_query)
    proposal_filter = ProposalFilter(search=search, tag_names=tuple(request.selected_field_ids))
    try:
        total_count, rows = await db.gather_queries(
            store.count(proposal_filter),
            store.page(
                proposal_filter,
                OrderMode.RECENT,
                offset=offset_for(request.page, request.items_per_page),
                limit=request.items_per_page,
            ),
        )
        topics = [schemas.to_field_topic(row) for row in rows]
    except Exception:
        logger.exception("Error filtering selected fields")
        return schemas.FilterSelectedFieldsResponse(
            success=False,
            error="Failed to filter topics by selected fields",
        )

    state = PaginationState(
        current_page=request.page,
        items_per_page=request.items_per_page,
        total_count=total_count,
    )
    return schemas.FilterSelectedFieldsResponse(
        success=True,
        topics=topics,
        pagination=PaginationInfo.from_state(state),
        selected_field_ids=request.selected_field_ids,
        applied_filters=schemas.AppliedFilters(
            search_query=request.search_query or None,
            field_count=len(request.selected_field_ids),
        ),
    )


async def field_names_by_ids(store: TagStore, field_ids: Sequence[str]) -> schemas.FieldNamesResponse:
    # Field ids are tag names.
    try:
        names = await store.existing_names(list(field_ids))
    except Exception:
        logger.exception("Error getting field names")
        return schemas.FieldNamesResponse(success=False, error="Failed to get field names")
    return schemas.FieldNamesResponse(success=True, field_names=names)
