from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from yt_trendscope.models import KeywordRecommendation, Video
from yt_trendscope.services.metrics import engagement_density
from yt_trendscope.services.query_runner import QueryRunner

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS = (
    "최신 트렌드",
    "AI 인공지능",
    "맛집 리뷰",
    "여행 vlog",
    "운동 루틴",
    "책 추천",
    "투자 재테크",
    "요리 레시피",
)


class KeywordAggregator:
    """Runs a handful of keyword searches and ranks the keywords by average engagement."""

    def __init__(
        self,
        yt,
        keywords: Sequence[str] = DEFAULT_KEYWORDS,
        call_budget: int = 4,
        max_workers: int = 1,
        per_keyword: int = 10,
        top_videos: int = 5,
    ) -> None:
        self._yt = yt
        self._keywords = tuple(keywords)
        self._runner = QueryRunner(call_budget=call_budget, max_workers=max_workers)
        self._per_keyword = per_keyword
        self._top_videos = top_videos

    def run(self) -> List[KeywordRecommendation]:
        keywords = self._runner.select(self._keywords)
        fetched = self._runner.run(
            keywords,
            lambda kw: self._yt.search(query=kw, max_results=self._per_keyword),
        )

        batches: List[KeywordRecommendation] = []
        for keyword, videos in zip(keywords, fetched):
            batch = self._summarize(keyword, videos)
            if batch is not None:
                batches.append(batch)

        logger.info(f"Keyword aggregation: {len(batches)}/{len(keywords)} keywords returned videos")
        return sorted(batches, key=lambda b: b.avg_engagement, reverse=True)

    def flatten(self, batches: Sequence[KeywordRecommendation], limit: int = 30) -> List[Video]:
        """All batch videos in one list, most engaging first."""
        videos = [v for b in batches for v in b.videos]
        ranked = sorted(videos, key=engagement_density, reverse=True)
        return ranked[: max(0, limit)]

    def _summarize(self, keyword: str, videos: Optional[List[Video]]) -> Optional[KeywordRecommendation]:
        if not videos:
            return None
        total_views = sum(v.view_count for v in videos)
        avg = sum(engagement_density(v) for v in videos) / len(videos)
        return KeywordRecommendation(
            keyword=keyword,
            videos=list(videos[: self._top_videos]),
            total_views=total_views,
            avg_engagement=avg,
        )
