from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Sequence, Set

from yt_trendscope.models import Video
from yt_trendscope.services.metrics import engagement_density
from yt_trendscope.services.query_runner import QueryRunner

logger = logging.getLogger(__name__)

DEFAULT_TERMS = (
    "신규채널 추천",
    "숨은 맛집",
    "꿀팁 정보",
    "신인 아티스트",
    "소규모 크리에이터",
)

MIN_VIEWS = 1000  # exclusive
MIN_SUBSCRIBERS = 10_000
MAX_SUBSCRIBERS = 500_000


class HiddenGemFinder:
    """
    Recent, highly engaging videos from mid-sized channels.
    One video per channel, at most `limit` videos.
    """

    def __init__(
        self,
        yt,
        terms: Sequence[str] = DEFAULT_TERMS,
        call_budget: int = 3,
        max_workers: int = 1,
        per_term: int = 15,
        window_days: int = 7,
        limit: int = 20,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._yt = yt
        self._terms = tuple(terms)
        self._runner = QueryRunner(call_budget=call_budget, max_workers=max_workers)
        self._per_term = per_term
        self._window = timedelta(days=window_days)
        self._limit = limit
        self._now = now

    def run(self) -> List[Video]:
        published_after = self._now() - self._window
        fetched = self._runner.run(
            self._terms,
            lambda term: self._yt.search(
                query=term,
                max_results=self._per_term,
                order="relevance",
                published_after=published_after,
            ),
        )

        # a single failed term voids the whole discovery run
        if any(videos is None for videos in fetched):
            logger.warning("Hidden gems: a search term failed, returning no results")
            return []

        pool: List[Video] = []
        for videos in fetched:
            pool.extend(videos)

        gems = self.rank(pool)
        logger.info(f"Hidden gems: {len(gems)} picked from {len(pool)} fetched videos")
        return gems

    def rank(self, videos: Sequence[Video]) -> List[Video]:
        candidates = [v for v in videos if _is_mid_tier(v)]
        ranked = sorted(candidates, key=engagement_density, reverse=True)
        return dedupe_by_channel(ranked)[: max(0, self._limit)]


def dedupe_by_channel(videos: Sequence[Video]) -> List[Video]:
    """Keeps the first video seen per channel id."""
    seen: Set[str] = set()
    out: List[Video] = []
    for v in videos:
        if v.channel_id in seen:
            continue
        seen.add(v.channel_id)
        out.append(v)
    return out


def _is_mid_tier(v: Video) -> bool:
    if v.view_count <= MIN_VIEWS:
        return False
    if v.subscriber_count is None:
        return False
    return MIN_SUBSCRIBERS <= v.subscriber_count <= MAX_SUBSCRIBERS
