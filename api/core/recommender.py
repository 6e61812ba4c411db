"""
Recommendation service HTTP client.

Used endpoint:
- GET {base_url}{path}?studentId=<id>  -> {"theses": [{"id": "...", "score": 0.9}, ...]}

Order of `theses` is the recommendation order and is preserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from . import config


# Recommendation failures are explicit and separable from store errors.
class RecommendationError(RuntimeError):
    pass


@dataclass(frozen=True)
class RecommendationItem:
    id: str
    score: float | None = None


class RecommendationSource(Protocol):
    async def recommend(self, student_id: str) -> list[RecommendationItem]: ...


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise RecommendationError("RECOMMENDATIONS_BASE_URL is empty.")
    return base_url.rstrip("/")


def _parse_item(item: Any) -> RecommendationItem:
    if not isinstance(item, dict):
        raise RecommendationError("Recommendation entry is not an object.")

    raw_id = item.get("id")
    # bool is an int subclass; reject it explicitly.
    if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
        raise RecommendationError("Recommendation entry has no usable id.")
    rec_id = str(raw_id).strip()
    if not rec_id:
        raise RecommendationError("Recommendation entry has an empty id.")

    raw_score = item.get("score")
    if raw_score is None:
        return RecommendationItem(id=rec_id)
    if isinstance(raw_score, bool) or not isinstance(raw_score, (int, float)):
        raise RecommendationError(f"Recommendation {rec_id} has a non-numeric score.")
    return RecommendationItem(id=rec_id, score=float(raw_score))


def parse_recommendations(data: Any) -> list[RecommendationItem]:
    """
    Validate the `{"theses": [...]}` payload. Any deviation is an error.
    """
    if not isinstance(data, dict):
        raise RecommendationError("Recommendation payload is not an object.")
    theses = data.get("theses")
    if not isinstance(theses, list):
        raise RecommendationError("Recommendation payload has no `theses` list.")
    return [_parse_item(item) for item in theses]


async def fetch_recommendations(
    student_id: str,
    *,
    base_url: str,
    path: str = "/api/recommendations",
    timeout_s: float = 5.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[RecommendationItem]:
    """
    Fetch the ordered recommendation list for `student_id`.
    """
    student_id = (student_id or "").strip()
    if not student_id:
        raise RecommendationError("Student id is empty.")
    base_url = _normalize_base_url(base_url)

    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=timeout_s, transport=transport) as client:
            resp = await client.get(
                path,
                params={"studentId": student_id},
                headers={"Cache-Control": "no-store"},
            )
    except httpx.HTTPError as exc:
        raise RecommendationError(f"Recommendation request failed: {exc}") from exc

    if not resp.is_success:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:300]
        raise RecommendationError(f"Recommendation request failed: {resp.status_code} {body}")

    try:
        data = resp.json()
    except ValueError as exc:
        raise RecommendationError("Recommendation service returned invalid JSON.") from exc

    return parse_recommendations(data)


class HttpRecommendationSource:
    """
    RecommendationSource backed by the recommendation HTTP endpoint.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        path: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url if base_url is not None else config.recommendations_base_url()
        self.path = path if path is not None else config.recommendations_path()
        self.timeout_s = timeout_s if timeout_s is not None else config.recommendations_timeout_s()
        self.transport = transport

    async def recommend(self, student_id: str) -> list[RecommendationItem]:
        return await fetch_recommendations(
            student_id,
            base_url=self.base_url,
            path=self.path,
            timeout_s=self.timeout_s,
            transport=self.transport,
        )
