"""
Topic listing API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from . import service

router = APIRouter()


@router.get("/topics")
async def list_topics(
    q: str = Query(default="", max_length=500),
    page: int = 1,
    limit: int = 10,
    student_id: str | None = Query(default=None, alias="studentId", max_length=200),
    assembler: service.TopicPageAssembler = Depends(service.get_assembler),
) -> dict:
    # page/limit bounds are checked by the service so bad values still get
    # the listing envelope.
    result = await assembler.assemble(q, page=page, items_per_page=limit, student_id=student_id)
    return result.to_response()
