"""
Topic (thesis proposal) response schemas.
"""

from __future__ import annotations

from typing import Any

from core.schemas import CamelModel, ListEnvelope

NO_DESCRIPTION = "No description provided"
NOT_SPECIFIED = "Not specified"
UNKNOWN_FIELD = "Unknown"


class ProfessorInfo(CamelModel):
    name: str
    department: str


class ThesisProposalSummary(CamelModel):
    id: str
    title: str
    field: str
    description: str
    professor: ProfessorInfo
    tags: list[str]


class TopicsResponse(ListEnvelope):
    topics: list[ThesisProposalSummary] = []
    has_next_page: bool = False
    has_previous_page: bool = False


def full_name(name: Any, surname: Any) -> str:
    return f"{name or ''} {surname or ''}".strip()


def to_summary(row: dict[str, Any]) -> ThesisProposalSummary:
    """
    Reshape a proposal row (see `topics.repository` row contract).
    """
    tags = [str(tag) for tag in (row.get("tags") or [])]
    field = tags[0] if tags else (str(row.get("thesis_type") or "") or UNKNOWN_FIELD)
    return ThesisProposalSummary(
        id=str(row["thesis_id"]),
        title=str(row.get("title") or ""),
        field=field,
        description=str(row.get("description") or "") or NO_DESCRIPTION,
        professor=ProfessorInfo(
            name=full_name(row.get("supervisor_name"), row.get("supervisor_surname")),
            department=str(row.get("faculty_name") or "") or NOT_SPECIFIED,
        ),
        tags=tags,
    )
