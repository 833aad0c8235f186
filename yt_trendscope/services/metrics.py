from __future__ import annotations

from typing import Optional, Tuple

from yt_trendscope.models import (
    LEVEL_HIGH,
    LEVEL_LOW,
    LEVEL_MEDIUM,
    LEVEL_UNKNOWN,
    LEVEL_VERY_HIGH,
    PerformanceMetric,
    Video,
)

# (threshold, level), checked top-down with >=
VIEW_SUBSCRIBER_BANDS: Tuple[Tuple[float, str], ...] = (
    (5.0, LEVEL_VERY_HIGH),
    (2.0, LEVEL_HIGH),
    (0.5, LEVEL_MEDIUM),
)

ENGAGEMENT_BANDS: Tuple[Tuple[float, str], ...] = (
    (50.0, LEVEL_VERY_HIGH),
    (20.0, LEVEL_HIGH),
    (10.0, LEVEL_MEDIUM),
)

UNKNOWN = PerformanceMetric(ratio=0.0, level=LEVEL_UNKNOWN)


class MetricsCalculator:
    """
    Banded performance metrics shown next to each video.

    Both metrics degrade to ratio 0 / "unknown" when the denominator is zero or
    either counter is missing or not a non-negative integer.
    """

    def view_subscriber_ratio(self, view_count, subscriber_count) -> PerformanceMetric:
        views = parse_count(view_count)
        subscribers = parse_count(subscriber_count)
        if views is None or not subscribers:
            return UNKNOWN
        ratio = views / subscribers
        return PerformanceMetric(ratio=ratio, level=_band(ratio, VIEW_SUBSCRIBER_BANDS))

    def engagement_level(self, like_count, comment_count) -> PerformanceMetric:
        likes = parse_count(like_count)
        comments = parse_count(comment_count)
        if likes is None or not comments:
            return UNKNOWN
        ratio = likes / comments
        return PerformanceMetric(ratio=ratio, level=_band(ratio, ENGAGEMENT_BANDS))

    def for_video(self, v: Video) -> Tuple[PerformanceMetric, PerformanceMetric]:
        return (
            self.view_subscriber_ratio(v.view_count, v.subscriber_count),
            self.engagement_level(v.like_count, v.comment_count),
        )


def engagement_density(v: Video) -> float:
    """
    (likes + comments) / views, the unbanded engagement used to rank recommendations.
    Missing comments count as 0; a zero view count is replaced by 1.
    """
    likes = parse_count(v.like_count) or 0
    comments = parse_count(v.comment_count) or 0
    views = parse_count(v.view_count) or 1
    return (likes + comments) / views


def parse_count(value) -> Optional[int]:
    """Non-negative integer or None. Accepts ints and the API's numeric strings."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    try:
        n = int(str(value).strip())
    except ValueError:
        return None
    return n if n >= 0 else None


def _band(ratio: float, bands: Tuple[Tuple[float, str], ...]) -> str:
    for threshold, level in bands:
        if ratio >= threshold:
            return level
    return LEVEL_LOW
