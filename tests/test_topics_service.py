"""
Tests for topic page assembly and the page-one recommendation merge.
"""

import pytest

from conftest import FakeProposalStore, FakeRecommendationSource, make_row
from topics.repository import OrderMode
from topics.schemas import NO_DESCRIPTION, NOT_SPECIFIED, to_summary
from topics.service import TopicPageAssembler, merge_recommended


def _ids(response):
    return [topic.id for topic in response.topics]


@pytest.mark.asyncio
async def test_plain_first_page(store):
    assembler = TopicPageAssembler(store)

    result = await assembler.assemble(page=1, items_per_page=10)

    assert result.success is True
    assert _ids(result) == [f"t{i:02d}" for i in range(1, 11)]
    assert result.total_count == 25
    assert result.total_pages == 3
    assert result.current_page == 1
    assert result.has_next_page is True
    assert result.has_previous_page is False
    assert store.page_calls[0]["order"] == OrderMode.TITLE
    assert store.page_calls[0]["offset"] == 0


@pytest.mark.asyncio
async def test_last_page_offset_and_flags(store):
    result = await TopicPageAssembler(store).assemble(page=3, items_per_page=10)

    assert _ids(result) == [f"t{i:02d}" for i in range(21, 26)]
    assert store.page_calls[0]["offset"] == 20
    assert result.has_next_page is False
    assert result.has_previous_page is True


@pytest.mark.asyncio
async def test_search_filters_count_and_page(rows):
    rows.append(make_row("x1", "Quantum networks", tags=["Physics"]))
    store = FakeProposalStore(rows)

    result = await TopicPageAssembler(store).assemble("  quantum ", page=1, items_per_page=10)

    assert _ids(result) == ["x1"]
    assert result.total_count == 1
    assert result.total_pages == 1
    assert store.page_calls[0]["filter"].search == "quantum"


@pytest.mark.asyncio
async def test_recommendations_fill_front_of_first_page(store):
    recs = FakeRecommendationSource(["t07", "t03", "t10", "t01", "t05"])
    assembler = TopicPageAssembler(store, recs)

    result = await assembler.assemble(page=1, items_per_page=10, student_id="s-1")

    assert _ids(result) == ["t07", "t03", "t10", "t01", "t05", "t02", "t04", "t06", "t08", "t09"]
    assert len(set(_ids(result))) == 10
    assert recs.calls == ["s-1"]


@pytest.mark.asyncio
async def test_recommendations_from_later_pages_do_not_change_counts(store):
    recs = FakeRecommendationSource(["t20", "t25"])
    assembler = TopicPageAssembler(store, recs)

    result = await assembler.assemble(page=1, items_per_page=10, student_id="s-1")

    assert _ids(result)[:2] == ["t20", "t25"]
    assert _ids(result)[2:] == [f"t{i:02d}" for i in range(1, 9)]
    assert result.total_count == 25
    assert result.total_pages == 3
    assert store.lookups == [["t20", "t25"]]


@pytest.mark.asyncio
async def test_unmatched_and_repeated_recommendations_are_dropped(store):
    recs = FakeRecommendationSource(["missing", "t04", "t04", "nope"])

    result = await TopicPageAssembler(store, recs).assemble(page=1, items_per_page=5, student_id="s-1")

    assert _ids(result) == ["t04", "t01", "t02", "t03", "t05"]


@pytest.mark.asyncio
async def test_recommendations_exceeding_page_size_are_truncated(store):
    recs = FakeRecommendationSource(["t12", "t11", "t13", "t14"])

    result = await TopicPageAssembler(store, recs).assemble(page=1, items_per_page=3, student_id="s-1")

    assert _ids(result) == ["t12", "t11", "t13"]


@pytest.mark.asyncio
async def test_recommendations_respect_search_filter(rows):
    rows.append(make_row("x1", "Quantum networks"))
    rows.append(make_row("x2", "Quantum sensing"))
    store = FakeProposalStore(rows)
    recs = FakeRecommendationSource(["t05", "x2"])

    result = await TopicPageAssembler(store, recs).assemble("quantum", page=1, items_per_page=10, student_id="s-1")

    assert _ids(result) == ["x2", "x1"]


@pytest.mark.asyncio
async def test_second_page_ignores_student(store):
    recs = FakeRecommendationSource(["t01", "t02"])
    assembler = TopicPageAssembler(store, recs)

    personalized = await assembler.assemble(page=2, items_per_page=10, student_id="s-1")
    plain = await assembler.assemble(page=2, items_per_page=10)

    assert personalized == plain
    assert recs.calls == []


@pytest.mark.asyncio
async def test_blank_student_id_is_ignored(store):
    recs = FakeRecommendationSource(["t09"])

    result = await TopicPageAssembler(store, recs).assemble(page=1, items_per_page=10, student_id="   ")

    assert _ids(result)[0] == "t01"
    assert recs.calls == []


@pytest.mark.asyncio
async def test_failed_recommendations_fall_back_to_plain_page(store, failing_recommendations):
    assembler = TopicPageAssembler(store, failing_recommendations)

    personalized = await assembler.assemble(page=1, items_per_page=10, student_id="s-1")
    plain = await TopicPageAssembler(store).assemble(page=1, items_per_page=10)

    assert personalized == plain
    assert failing_recommendations.calls == ["s-1"]


@pytest.mark.asyncio
async def test_failed_lookup_falls_back_to_plain_page(rows):
    store = FakeProposalStore(rows, fail_lookup=True)
    recs = FakeRecommendationSource(["t09"])

    result = await TopicPageAssembler(store, recs).assemble(page=1, items_per_page=10, student_id="s-1")

    assert result.success is True
    assert _ids(result)[0] == "t01"


@pytest.mark.asyncio
async def test_empty_recommendations_skip_lookup(store):
    recs = FakeRecommendationSource([])

    result = await TopicPageAssembler(store, recs).assemble(page=1, items_per_page=10, student_id="s-1")

    assert _ids(result)[0] == "t01"
    assert store.lookups == []


@pytest.mark.asyncio
async def test_recommendation_lookup_is_capped(store):
    recs = FakeRecommendationSource([f"t{i:02d}" for i in range(1, 26)])

    await TopicPageAssembler(store, recs, max_recommendations=4).assemble(page=1, items_per_page=10, student_id="s")

    assert store.lookups == [["t01", "t02", "t03", "t04"]]


@pytest.mark.asyncio
async def test_store_failure_returns_empty_envelope(rows):
    store = FakeProposalStore(rows, fail=True)

    result = await TopicPageAssembler(store).assemble(page=4, items_per_page=10)

    assert result.success is False
    assert result.message == "Failed to fetch topics"
    assert result.topics == []
    assert result.total_count == 0
    assert result.total_pages == 0
    assert result.current_page == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("page,limit", [(1, 0), (1, -5), (0, 10), (-1, 10)])
async def test_invalid_pagination_returns_validation_envelope(store, page, limit):
    result = await TopicPageAssembler(store).assemble(page=page, items_per_page=limit)

    assert result.success is False
    assert result.error == "Invalid input parameters"
    assert result.details
    assert result.topics == []
    assert result.total_count == 0
    assert result.total_pages == 0
    assert store.page_calls == []


@pytest.mark.asyncio
async def test_response_serializes_camel_case(store):
    result = await TopicPageAssembler(store).assemble(page=1, items_per_page=2)

    body = result.to_response()

    assert set(body) == {
        "success",
        "topics",
        "totalCount",
        "totalPages",
        "currentPage",
        "hasNextPage",
        "hasPreviousPage",
    }
    assert body["topics"][0] == {
        "id": "t01",
        "title": "Topic 01",
        "field": "AI",
        "description": "About it",
        "professor": {"name": "Ada Lovelace", "department": "Computer Science"},
        "tags": ["AI"],
    }


def test_summary_fallbacks():
    row = make_row("t1", "Bare", tags=[], description=None, name=None, surname="Turing", faculty=None)

    summary = to_summary(row)

    assert summary.field == "Bachelor"
    assert summary.description == NO_DESCRIPTION
    assert summary.professor.name == "Turing"
    assert summary.professor.department == NOT_SPECIFIED
    assert summary.tags == []


def test_summary_field_never_empty():
    row = make_row("t1", "Bare", tags=None, thesis_type=None)
    row["tags"] = None

    assert to_summary(row).field == "Unknown"


def test_summary_field_is_first_tag_from_store():
    row = make_row("t1", "Tagged", tags=["Vision", "AI", "Vision"])

    summary = to_summary(row)

    assert summary.field == "Vision"
    assert summary.tags == ["Vision", "AI", "Vision"]


def test_merge_without_recommendations_is_plain_page():
    plain = [to_summary(make_row(f"p{i}", f"P{i}")) for i in range(3)]

    assert merge_recommended([], plain, 3) == plain
