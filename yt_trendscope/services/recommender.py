from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from yt_trendscope.models import Recommendation
from yt_trendscope.services.hidden_gems import HiddenGemFinder
from yt_trendscope.services.keyword_aggregator import KeywordAggregator
from yt_trendscope.services.rising import RisingPredictor
from yt_trendscope.services.time_selector import TimeBasedSelector

logger = logging.getLogger(__name__)

MODES = ("time", "keywords", "gems", "rising")


class Recommender:
    """
    Entry point for the smart recommendations. Stateless: the mode is an
    argument, each call builds its strategy and returns a fresh Recommendation.
    """

    def __init__(
        self,
        yt,
        region_code: str = "KR",
        max_workers: int = 1,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._yt = yt
        self._region_code = region_code
        self._max_workers = max_workers
        self._now = now
        self._selector = TimeBasedSelector()

    def recommend(self, mode: str, hour: Optional[int] = None) -> Recommendation:
        if mode == "time":
            return self.time_based(hour)
        if mode == "keywords":
            return self.keywords()
        if mode == "gems":
            return self.hidden_gems()
        if mode == "rising":
            return self.rising()
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")

    def time_based(self, hour: Optional[int] = None) -> Recommendation:
        slot = self._selector.select(hour)
        try:
            videos = self._yt.trending(category_id=slot.category_id, region_code=self._region_code)
        except Exception as e:
            logger.warning(f"Trending fetch failed for category {slot.category_id}: {e}")
            videos = []
        return Recommendation(mode="time", source=f"시간대별 맞춤 ({slot.description})", videos=videos)

    def keywords(self) -> Recommendation:
        aggregator = KeywordAggregator(self._yt, max_workers=self._max_workers)
        batches = aggregator.run()
        keywords = ", ".join(b.keyword for b in batches)
        return Recommendation(
            mode="keywords",
            source=f"키워드 조합 추천 ({keywords})" if keywords else "키워드 조합 추천",
            videos=aggregator.flatten(batches),
            keyword_batches=batches,
        )

    def hidden_gems(self) -> Recommendation:
        finder = HiddenGemFinder(self._yt, max_workers=self._max_workers, now=self._now)
        return Recommendation(mode="gems", source="숨은 보석 발굴", videos=finder.run())

    def rising(self) -> Recommendation:
        predictor = RisingPredictor(self._yt, now=self._now)
        return Recommendation(mode="rising", source="급상승 예측", videos=predictor.run())
