"""
Professor listing.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from core import db
from core.pagination import PageQuery, PaginationState, validation_details

from . import schemas
from .repository import SupervisorStore

logger = logging.getLogger(__name__)


async def list_professors(
    store: SupervisorStore,
    *,
    page: int = 1,
    limit: int = 10,
    search_query: str | None = None,
) -> schemas.ProfessorsResponse:
    try:
        query = PageQuery(page=page, limit=limit, search_query=search_query)
    except ValidationError as exc:
        return schemas.ProfessorsResponse(
            success=False,
            error="Invalid input parameters",
            details=validation_details(exc.errors()),
        )

    try:
        total_count, rows = await db.gather_queries(
            store.count(query.search_term),
            store.page(query.search_term, offset=query.offset, limit=query.limit),
        )
        professors = [schemas.to_professor(row) for row in rows]
    except Exception:
        logger.exception("Error fetching professors")
        return schemas.ProfessorsResponse(success=False, message="Failed to fetch professors", current_page=page)

    state = PaginationState(current_page=query.page, items_per_page=query.limit, total_count=total_count)
    return schemas.ProfessorsResponse(
        success=True,
        professors=professors,
        **schemas.ProfessorsResponse.pagination_fields(state),
    )


async def list_all_professors(store: SupervisorStore) -> schemas.AllProfessorsResponse:
    try:
        rows = await store.list_all()
        professors = [schemas.to_professor(row) for row in rows]
    except Exception:
        logger.exception("Error fetching professors")
        return schemas.AllProfessorsResponse(success=False, message="Failed to fetch professors")
    return schemas.AllProfessorsResponse(success=True, professors=professors)
