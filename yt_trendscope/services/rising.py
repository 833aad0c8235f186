from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Sequence

from yt_trendscope.models import Video

logger = logging.getLogger(__name__)

RISING_QUERY = "최신 트렌드 OR 화제 OR 인기급상승"


class RisingPredictor:
    """Ranks videos from the last day by views per hour since publication."""

    def __init__(
        self,
        yt,
        query: str = RISING_QUERY,
        window_hours: int = 24,
        max_results: int = 30,
        limit: int = 15,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._yt = yt
        self._query = query
        self._window = timedelta(hours=window_hours)
        self._max_results = max_results
        self._limit = limit
        self._now = now

    def run(self) -> List[Video]:
        now = self._now()
        try:
            videos = self._yt.search(
                query=self._query,
                max_results=self._max_results,
                order="date",
                published_after=now - self._window,
            )
        except Exception as e:
            logger.warning(f"Rising fetch failed: {e}")
            return []

        return self.rank(videos, now)

    def rank(self, videos: Sequence[Video], now: datetime) -> List[Video]:
        scored = [(velocity(v, now), v) for v in videos]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [v for _score, v in scored[: max(0, self._limit)]]


def hours_old(v: Video, now: datetime) -> float:
    """Hours since publication, floored at 1. Unparsable timestamps count as 1 hour."""
    published = v.published_dt
    if published is None:
        return 1.0
    return max(1.0, (now - published).total_seconds() / 3600)


def velocity(v: Video, now: datetime) -> float:
    return v.view_count / hours_old(v, now)
