"""
Professor response schemas.
"""

from __future__ import annotations

from typing import Any

from core.schemas import CamelModel, ListEnvelope
from topics.schemas import NOT_SPECIFIED, full_name


class Professor(CamelModel):
    id: str
    name: str
    department: str


class ProfessorsResponse(ListEnvelope):
    professors: list[Professor] = []


class AllProfessorsResponse(CamelModel):
    success: bool
    professors: list[Professor] = []
    message: str | None = None


def to_professor(row: dict[str, Any]) -> Professor:
    return Professor(
        id=str(row["supervisor_id"]),
        name=full_name(row.get("name"), row.get("surname")),
        department=str(row.get("faculty_name") or "") or NOT_SPECIFIED,
    )
