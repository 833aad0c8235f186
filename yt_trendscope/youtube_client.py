from __future__ import annotations

import logging
import re
import threading
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import httplib2
from googleapiclient.discovery import build

from yt_trendscope.models import Video

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"P(?:(\d+)D)?T?(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

VALID_ORDERS = {"relevance", "date", "viewCount"}


class YouTubeClient:
    """
    Thin wrapper around YouTube Data API v3 calls.
    Responsibilities:
      - search for video IDs
      - fetch video details (snippet, stats, duration) in batches
      - attach channel subscriber counts
      - fetch the most-popular chart per category

    API errors (HttpError) propagate; callers decide what a failure means.

    httplib2.Http is not thread-safe, so every thread executes requests on
    its own transport; the shared service object only builds them.
    """

    def __init__(self, api_key: str) -> None:
        self._service = build("youtube", "v3", developerKey=api_key, static_discovery=False)
        self._local = threading.local()

    def _execute(self, request) -> dict:
        http = getattr(self._local, "http", None)
        if http is None:
            http = self._local.http = httplib2.Http()
        return request.execute(http=http)

    def search(
        self,
        query: str,
        max_results: int = 50,
        order: Optional[str] = None,
        published_after: Optional[datetime] = None,
    ) -> List[Video]:
        video_ids = self.search_video_ids(
            query=query,
            max_results=max_results,
            order=order,
            published_after=published_after,
        )
        return self.fetch_videos(video_ids)

    def search_video_ids(
        self,
        query: str,
        max_results: int,
        order: Optional[str] = None,
        published_after: Optional[datetime] = None,
    ) -> List[str]:
        if max_results < 1:
            max_results = 1
        if max_results > 50:
            max_results = 50

        params = dict(part="id", q=query, type="video", maxResults=max_results)
        if order:
            if order not in VALID_ORDERS:
                raise ValueError(f"order must be one of {sorted(VALID_ORDERS)}, got {order!r}")
            params["order"] = order
        if published_after is not None:
            params["publishedAfter"] = to_rfc3339(published_after)

        resp = self._execute(self._service.search().list(**params))

        ids: list[str] = []
        for item in resp.get("items", []):
            vid = item.get("id", {}).get("videoId")
            if vid:
                ids.append(vid)

        # dedupe while preserving order
        seen = set()
        unique = []
        for vid in ids:
            if vid not in seen:
                seen.add(vid)
                unique.append(vid)

        logger.debug(f"search {query!r}: {len(unique)} ids")
        return unique

    def trending(
        self,
        category_id: Optional[str] = None,
        region_code: str = "KR",
        max_results: int = 50,
    ) -> List[Video]:
        params = dict(
            part="snippet,statistics,contentDetails",
            chart="mostPopular",
            regionCode=region_code,
            maxResults=max(1, min(50, max_results)),
        )
        if category_id and category_id != "all":
            params["videoCategoryId"] = category_id

        resp = self._execute(self._service.videos().list(**params))
        items = resp.get("items", []) or []
        logger.debug(f"trending category={category_id or 'all'} region={region_code}: {len(items)} items")
        return self._to_videos(items)

    def fetch_videos(self, video_ids: Iterable[str]) -> List[Video]:
        vids = list(video_ids)
        if not vids:
            return []

        items: list[dict] = []

        # videos.list accepts up to 50 IDs per request
        for chunk in _chunks(vids, 50):
            req = (
                self._service.videos()
                .list(part="snippet,statistics,contentDetails", id=",".join(chunk))
            )
            resp = self._execute(req)
            items.extend(resp.get("items", []) or [])

        # keep search order; videos.list doesn't promise it
        position = {vid: i for i, vid in enumerate(vids)}
        items.sort(key=lambda it: position.get(it.get("id", ""), len(position)))
        return self._to_videos(items)

    def fetch_subscriber_counts(self, channel_ids: Iterable[str]) -> Dict[str, Optional[int]]:
        ids = list(dict.fromkeys(c for c in channel_ids if c))
        counts: Dict[str, Optional[int]] = {}

        for chunk in _chunks(ids, 50):
            resp = self._execute(
                self._service.channels().list(part="statistics", id=",".join(chunk))
            )
            for item in resp.get("items", []):
                stats = item.get("statistics", {}) or {}
                # hiddenSubscriberCount channels omit the number
                counts[item.get("id", "")] = _optional_int(stats.get("subscriberCount"))

        return counts

    def _to_videos(self, items: List[dict]) -> List[Video]:
        if not items:
            return []

        channel_ids = [(it.get("snippet", {}) or {}).get("channelId", "") for it in items]
        subscribers = self.fetch_subscriber_counts(channel_ids)
        return [video_from_item(it, subscribers) for it in items]


def video_from_item(item: dict, subscribers: Dict[str, Optional[int]]) -> Video:
    snippet = item.get("snippet", {}) or {}
    stats = item.get("statistics", {}) or {}
    details = item.get("contentDetails", {}) or {}
    thumbs = snippet.get("thumbnails", {}) or {}
    channel_id = snippet.get("channelId", "")

    return Video(
        video_id=item.get("id", ""),
        title=snippet.get("title", ""),
        channel_title=snippet.get("channelTitle", ""),
        channel_id=channel_id,
        published_at=snippet.get("publishedAt", ""),
        duration_seconds=iso8601_duration_to_seconds(details.get("duration", "")),
        view_count=_safe_int(stats.get("viewCount")),
        like_count=_safe_int(stats.get("likeCount")),
        # Some videos have comments disabled -> commentCount missing
        comment_count=_optional_int(stats.get("commentCount")),
        subscriber_count=subscribers.get(channel_id),
        thumbnail_url=(thumbs.get("medium", {}) or {}).get("url", ""),
    )


def iso8601_duration_to_seconds(duration: str) -> int:
    match = _DURATION_RE.fullmatch(duration or "")
    if not match:
        return 0
    days, hours, minutes, seconds = (int(g or 0) for g in match.groups())
    return days * 86400 + hours * 3600 + minutes * 60 + seconds


def to_rfc3339(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _safe_int(value) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def _optional_int(value) -> Optional[int]:
    if value is None:
        return None
    try:
        n = int(value)
    except (TypeError, ValueError):
        return None
    return n if n >= 0 else None


def _chunks(items: List[str], size: int) -> List[List[str]]:
    return [items[i : i + size] for i in range(0, len(items), size)]
