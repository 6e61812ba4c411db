"""
Field API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from topics import repository as topics_repository

from . import repository, service

router = APIRouter()


@router.get("/fields")
async def list_fields(
    q: str = Query(default="", max_length=500),
    page: int = 1,
    limit: int = 10,
    store: repository.TagStore = Depends(repository.get_store),
) -> dict:
    result = await service.list_fields(store, page=page, limit=limit, search_query=q)
    return result.to_response()


@router.post("/fields/filter")
async def filter_selected_fields(
    payload: dict[str, Any] = Body(...),
    store: topics_repository.ProposalStore = Depends(topics_repository.get_store),
) -> dict:
    # Raw body on purpose: validation errors are reported in the envelope.
    result = await service.filter_selected_fields(store, payload)
    return result.to_response()


@router.get("/fields/names")
async def field_names(
    ids: list[str] = Query(default=[]),
    store: repository.TagStore = Depends(repository.get_store),
) -> dict:
    result = await service.field_names_by_ids(store, ids)
    return result.to_response()
