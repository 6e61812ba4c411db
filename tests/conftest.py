"""
Shared fakes for store and recommendation collaborators.
"""

from datetime import date
from typing import Any, Sequence

import pytest

from core.recommender import RecommendationError, RecommendationItem
from topics.repository import OrderMode, ProposalFilter


def make_row(
    thesis_id: str,
    title: str,
    *,
    tags: list[str] | None = None,
    description: str | None = "About it",
    thesis_type: str | None = "Bachelor",
    name: str | None = "Ada",
    surname: str | None = "Lovelace",
    faculty: str | None = "Computer Science",
    requirements: str | None = None,
    application_start: date | None = None,
) -> dict[str, Any]:
    return {
        "thesis_id": thesis_id,
        "title": title,
        "description": description,
        "requirements": requirements,
        "thesis_type": thesis_type,
        "application_start": application_start,
        "application_end": None,
        "supervisor_name": name,
        "supervisor_surname": surname,
        "faculty_name": faculty,
        "tags": tags if tags is not None else ["AI"],
    }


def _matches(row: dict[str, Any], proposal_filter: ProposalFilter) -> bool:
    if proposal_filter.tag_names and not set(row["tags"]) & set(proposal_filter.tag_names):
        return False
    if proposal_filter.search:
        term = proposal_filter.search.lower()
        haystack = [
            row["title"],
            row["description"],
            row["requirements"],
            row["supervisor_name"],
            row["supervisor_surname"],
            *row["tags"],
        ]
        return any(term in (value or "").lower() for value in haystack)
    return True


class FakeProposalStore:
    def __init__(self, rows: list[dict[str, Any]], *, fail: bool = False, fail_lookup: bool = False):
        self.rows = rows
        self.fail = fail
        self.fail_lookup = fail_lookup
        self.page_calls: list[dict[str, Any]] = []
        self.lookups: list[list[str]] = []

    def _filtered(self, proposal_filter: ProposalFilter) -> list[dict[str, Any]]:
        return [row for row in self.rows if _matches(row, proposal_filter)]

    async def count(self, proposal_filter: ProposalFilter) -> int:
        if self.fail:
            raise ConnectionError("database unreachable")
        return len(self._filtered(proposal_filter))

    async def page(self, proposal_filter, order, *, offset, limit):
        if self.fail:
            raise ConnectionError("database unreachable")
        self.page_calls.append({"filter": proposal_filter, "order": order, "offset": offset, "limit": limit})
        rows = self._filtered(proposal_filter)
        if order == OrderMode.TITLE:
            rows = sorted(rows, key=lambda r: (r["title"], r["thesis_id"]))
        else:
            rows = sorted(rows, key=lambda r: r["application_start"] or date.min, reverse=True)
        return rows[offset : offset + limit]

    async def find_by_ids(self, proposal_filter: ProposalFilter, ids: Sequence[str]):
        if self.fail_lookup:
            raise ConnectionError("lookup failed")
        self.lookups.append(list(ids))
        wanted = set(ids)
        return [row for row in self._filtered(proposal_filter) if row["thesis_id"] in wanted]


class FakeRecommendationSource:
    def __init__(self, ids: list[str] | None = None, *, error: Exception | None = None):
        self.items = [RecommendationItem(id=i, score=1.0) for i in (ids or [])]
        self.error = error
        self.calls: list[str] = []

    async def recommend(self, student_id: str) -> list[RecommendationItem]:
        self.calls.append(student_id)
        if self.error is not None:
            raise self.error
        return list(self.items)


@pytest.fixture
def rows() -> list[dict[str, Any]]:
    # 25 proposals; titles sort in id order.
    return [make_row(f"t{i:02d}", f"Topic {i:02d}") for i in range(1, 26)]


@pytest.fixture
def store(rows) -> FakeProposalStore:
    return FakeProposalStore(rows)


@pytest.fixture
def failing_recommendations() -> FakeRecommendationSource:
    return FakeRecommendationSource(error=RecommendationError("Recommendation request failed: 500"))
