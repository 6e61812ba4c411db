"""
Topic listing (orchestration).

Flow of `TopicPageAssembler.assemble`:
1) Validate pagination input
2) Count + fetch one page from the ProposalStore
3) Page one with a student id: fetch recommendations, look them up under the
   same filter and put the matches in front of the plain page
4) Wrap everything in the listing envelope

Store failures become a `success=False` envelope; recommendation failures only
drop the personalization.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pydantic import ValidationError

from core import config, db
from core.pagination import PageQuery, PaginationState, validation_details
from core.recommender import HttpRecommendationSource, RecommendationItem, RecommendationSource

from . import repository
from .repository import OrderMode, ProposalFilter, ProposalStore
from .schemas import ThesisProposalSummary, TopicsResponse, to_summary

logger = logging.getLogger(__name__)


def merge_recommended(
    recommended: Sequence[ThesisProposalSummary],
    plain: Sequence[ThesisProposalSummary],
    limit: int,
) -> list[ThesisProposalSummary]:
    """
    Recommended items first (in the given order), then plain items not already
    shown, cut to `limit`.
    """
    merged: list[ThesisProposalSummary] = []
    seen: set[str] = set()
    for topic in [*recommended, *plain]:
        if topic.id in seen:
            continue
        seen.add(topic.id)
        merged.append(topic)
    return merged[:limit]


def match_recommendations(
    recommendations: Sequence[RecommendationItem],
    universe: Sequence[ThesisProposalSummary],
) -> list[ThesisProposalSummary]:
    by_id = {topic.id: topic for topic in universe}
    return [by_id[rec.id] for rec in recommendations if rec.id in by_id]


class TopicPageAssembler:
    def __init__(
        self,
        store: ProposalStore,
        recommendations: RecommendationSource | None = None,
        *,
        order: OrderMode = OrderMode.TITLE,
        max_recommendations: int | None = None,
    ) -> None:
        self.store = store
        self.recommendations = recommendations
        self.order = order
        self.max_recommendations = (
            max_recommendations if max_recommendations is not None else config.recommendations_max_items()
        )

    async def assemble(
        self,
        search_query: str | None = None,
        page: int = 1,
        items_per_page: int = 10,
        student_id: str | None = None,
    ) -> TopicsResponse:
        try:
            query = PageQuery(page=page, limit=items_per_page, search_query=search_query)
        except ValidationError as exc:
            return TopicsResponse(
                success=False,
                error="Invalid input parameters",
                details=validation_details(exc.errors()),
            )

        proposal_filter = ProposalFilter(search=query.search_term)
        try:
            total_count, rows = await db.gather_queries(
                self.store.count(proposal_filter),
                self.store.page(proposal_filter, self.order, offset=query.offset, limit=query.limit),
            )
            topics = [to_summary(row) for row in rows]
        except Exception:
            logger.exception("Error fetching topics (page=%s, limit=%s)", page, items_per_page)
            return TopicsResponse(success=False, message="Failed to fetch topics", current_page=page)

        student_id = (student_id or "").strip()
        if student_id and query.page == 1:
            topics = await self._personalize(topics, proposal_filter, student_id, limit=query.limit)

        state = PaginationState(current_page=query.page, items_per_page=query.limit, total_count=total_count)
        return TopicsResponse(
            success=True,
            topics=topics,
            has_next_page=state.has_next_page,
            has_previous_page=state.has_previous_page,
            **TopicsResponse.pagination_fields(state),
        )

    async def _personalize(
        self,
        topics: list[ThesisProposalSummary],
        proposal_filter: ProposalFilter,
        student_id: str,
        *,
        limit: int,
    ) -> list[ThesisProposalSummary]:
        if self.recommendations is None:
            return topics
        try:
            recs = await self.recommendations.recommend(student_id)
            recs = recs[: self.max_recommendations]
            if not recs:
                return topics
            # Lookup universe: the filtered, unpaginated set restricted to the
            # recommended ids. It never affects the pagination counters.
            rows = await self.store.find_by_ids(proposal_filter, [rec.id for rec in recs])
            recommended = match_recommendations(recs, [to_summary(row) for row in rows])
        except Exception as exc:
            logger.warning("Failed to merge recommendations for student %s: %s", student_id, exc)
            return topics
        return merge_recommended(recommended, topics, limit)


def get_assembler() -> TopicPageAssembler:
    return TopicPageAssembler(repository.get_store(), HttpRecommendationSource())
