from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

SHORTS_MAX_SECONDS = 60

# Ordered: unknown < low < medium < high < very_high
LEVEL_UNKNOWN = "unknown"
LEVEL_LOW = "low"
LEVEL_MEDIUM = "medium"
LEVEL_HIGH = "high"
LEVEL_VERY_HIGH = "very_high"

LEVELS = (LEVEL_UNKNOWN, LEVEL_LOW, LEVEL_MEDIUM, LEVEL_HIGH, LEVEL_VERY_HIGH)

LEVEL_LABELS = {
    LEVEL_UNKNOWN: "정보없음",
    LEVEL_LOW: "낮음",
    LEVEL_MEDIUM: "보통",
    LEVEL_HIGH: "높음",
    LEVEL_VERY_HIGH: "매우 높음",
}


@dataclass(frozen=True)
class Video:
    video_id: str
    title: str
    channel_title: str
    channel_id: str
    published_at: str  # ISO string, e.g. "2025-01-20T12:34:56Z"
    duration_seconds: int
    view_count: int
    like_count: int
    comment_count: Optional[int] = None  # comments disabled -> missing
    subscriber_count: Optional[int] = None  # hidden subscriber counts -> missing
    thumbnail_url: str = ""

    @property
    def is_short(self) -> bool:
        return self.duration_seconds <= SHORTS_MAX_SECONDS

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @property
    def channel_url(self) -> str:
        return f"https://www.youtube.com/channel/{self.channel_id}"

    @property
    def published_dt(self) -> Optional[datetime]:
        return parse_published_at(self.published_at)


@dataclass(frozen=True)
class PerformanceMetric:
    ratio: float
    level: str = LEVEL_UNKNOWN

    @property
    def label(self) -> str:
        return LEVEL_LABELS.get(self.level, LEVEL_LABELS[LEVEL_UNKNOWN])

    @property
    def is_known(self) -> bool:
        return self.level != LEVEL_UNKNOWN


@dataclass(frozen=True)
class KeywordRecommendation:
    keyword: str
    videos: List[Video]  # top videos, in fetch order
    total_views: int
    avg_engagement: float


@dataclass(frozen=True)
class TimeSlot:
    category_id: str  # YouTube video category id
    category: str
    description: str


@dataclass(frozen=True)
class Recommendation:
    mode: str
    source: str
    videos: List[Video] = field(default_factory=list)
    keyword_batches: List[KeywordRecommendation] = field(default_factory=list)


def parse_published_at(published_at: str) -> Optional[datetime]:
    """
    Parses a publishedAt value into an aware datetime.
    Returns None for anything unparsable (or naive values, which can't be compared).
    """
    try:
        dt = datetime.fromisoformat((published_at or "").replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        return None
    return dt
