from __future__ import annotations

import logging
import math
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List

from yt_trendscope.models import Video
from yt_trendscope.services.metrics import parse_count

logger = logging.getLogger(__name__)

NAN = float("nan")


class Ranker:
    """
    Sorting policy lives here.

    Every field gets a key extractor. Numeric keys that can't be computed come
    back as NaN; NaN keys always go after real ones, in both directions, and
    compare equal to each other. Python's sort is stable, so ties keep input order.
    """

    TEXT_SORTS = {"title", "channel_title"}
    VALID_SORTS = {
        "title",
        "channel_title",
        "subscriber_count",
        "published_at",
        "duration",
        "view_count",
        "like_count",
        "comment_count",
        "view_subscriber_ratio",
        "engagement_rate",
        "type",
    }
    ALIASES = {
        "channeltitle": "channel_title",
        "subscribercount": "subscriber_count",
        "subscribers": "subscriber_count",
        "publishedat": "published_at",
        "published": "published_at",
        "viewcount": "view_count",
        "views": "view_count",
        "likecount": "like_count",
        "likes": "like_count",
        "commentcount": "comment_count",
        "comments": "comment_count",
        "viewsubscriberratio": "view_subscriber_ratio",
        "ratio": "view_subscriber_ratio",
        "engagementrate": "engagement_rate",
        "engagement": "engagement_rate",
    }
    DEFAULT_SORT = "view_count"

    def sort(self, videos: Iterable[Video], sort_key: str, order: str = "desc") -> List[Video]:
        key = self.normalize_key(sort_key)
        descending = (order or "").strip().lower() != "asc"
        extract = _EXTRACTORS[key]

        if key in self.TEXT_SORTS:
            return sorted(videos, key=extract, reverse=descending)

        def compare(a: Video, b: Video) -> int:
            return _compare_numeric(extract(a), extract(b), descending)

        return sorted(videos, key=cmp_to_key(compare))

    def normalize_key(self, sort_key: str) -> str:
        key = (sort_key or "").strip().lower()
        key = self.ALIASES.get(key.replace("_", ""), key)
        if key not in self.VALID_SORTS:
            logger.warning(f"Unknown sort field {sort_key!r}, falling back to {self.DEFAULT_SORT}")
            key = self.DEFAULT_SORT
        return key


def _compare_numeric(a: float, b: float, descending: bool) -> int:
    a_nan = math.isnan(a)
    b_nan = math.isnan(b)
    if a_nan and b_nan:
        return 0
    if a_nan:
        return 1
    if b_nan:
        return -1
    if a == b:
        return 0
    if descending:
        return -1 if a > b else 1
    return 1 if a > b else -1


def _count_or_nan(value) -> float:
    n = parse_count(value)
    return NAN if n is None else float(n)


def _published_ts(v: Video) -> float:
    dt = v.published_dt
    return NAN if dt is None else dt.timestamp()


def _view_subscriber_ratio(v: Video) -> float:
    views = parse_count(v.view_count)
    subscribers = parse_count(v.subscriber_count)
    if views is None or not subscribers:
        return NAN
    return views / subscribers


def _engagement_rate(v: Video) -> float:
    # comments treated as 1 when missing or zero
    likes = parse_count(v.like_count)
    if likes is None:
        return NAN
    return likes / (parse_count(v.comment_count) or 1)


_EXTRACTORS: Dict[str, Callable[[Video], object]] = {
    "title": lambda v: (v.title or "").casefold(),
    "channel_title": lambda v: (v.channel_title or "").casefold(),
    "subscriber_count": lambda v: _count_or_nan(v.subscriber_count),
    "published_at": _published_ts,
    "duration": lambda v: _count_or_nan(v.duration_seconds),
    "view_count": lambda v: _count_or_nan(v.view_count),
    "like_count": lambda v: _count_or_nan(v.like_count),
    "comment_count": lambda v: float(parse_count(v.comment_count) or 0),
    "view_subscriber_ratio": _view_subscriber_ratio,
    "engagement_rate": _engagement_rate,
    "type": lambda v: 0.0 if v.is_short else 1.0,
}
