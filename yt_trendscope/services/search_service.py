from __future__ import annotations

from typing import List, Optional

from yt_trendscope.models import Video
from yt_trendscope.youtube_client import YouTubeClient
from yt_trendscope.services.ranker import Ranker
from yt_trendscope.services.filtering import Filters, VideoFilter


class SearchService:
    def __init__(self, yt: YouTubeClient, ranker: Ranker, vfilter: VideoFilter | None = None) -> None:
        self._yt = yt
        self._ranker = ranker
        self._filter = vfilter or VideoFilter()

    def search(
        self,
        query: str,
        max_results: int,
        top: int,
        sort: str,
        order: str = "desc",
        filters: Optional[Filters] = None,
    ) -> List[Video]:
        videos = self._yt.search(query=query, max_results=max_results, order="viewCount")
        return self.rank(videos, top=top, sort=sort, order=order, filters=filters)

    def trending(
        self,
        category_id: Optional[str],
        region_code: str,
        max_results: int,
        top: int,
        sort: str,
        order: str = "desc",
        filters: Optional[Filters] = None,
    ) -> List[Video]:
        videos = self._yt.trending(
            category_id=category_id,
            region_code=region_code,
            max_results=max_results,
        )
        return self.rank(videos, top=top, sort=sort, order=order, filters=filters)

    def rank(
        self,
        videos: List[Video],
        top: int,
        sort: str,
        order: str = "desc",
        filters: Optional[Filters] = None,
    ) -> List[Video]:
        if filters:
            videos = self._filter.apply(videos, filters)

        ranked = self._ranker.sort(videos, sort_key=sort, order=order)

        if top < 1:
            top = 1
        return ranked[:top]
