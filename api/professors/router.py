"""
Professor API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from . import repository, service

router = APIRouter()


@router.get("/professors")
async def list_professors(
    q: str = Query(default="", max_length=500),
    page: int = 1,
    limit: int = 10,
    store: repository.SupervisorStore = Depends(repository.get_store),
) -> dict:
    result = await service.list_professors(store, page=page, limit=limit, search_query=q)
    return result.to_response()


@router.get("/professors/all")
async def list_all_professors(
    store: repository.SupervisorStore = Depends(repository.get_store),
) -> dict:
    result = await service.list_all_professors(store)
    return result.to_response()
