from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from yt_trendscope.models import LEVEL_UNKNOWN, LEVELS, Video
from yt_trendscope.services.metrics import MetricsCalculator

VIDEO_TYPES = ("all", "shorts", "long")


@dataclass(frozen=True)
class Filters:
    min_views: int = 0
    min_comments: int = 0
    since_days: Optional[int] = None  # e.g. 30 means only videos published in last 30 days
    video_type: str = "all"  # all | shorts | long
    min_ratio_level: str = LEVEL_UNKNOWN  # view/subscriber level floor; "unknown" disables it


class VideoFilter:
    def __init__(self, metrics: MetricsCalculator | None = None) -> None:
        self._metrics = metrics or MetricsCalculator()

    def apply(self, videos: Iterable[Video], f: Filters) -> List[Video]:
        out: List[Video] = []
        cutoff = _since_cutoff(f.since_days)
        level_floor = _level_rank(f.min_ratio_level)

        for v in videos:
            if v.view_count < f.min_views:
                continue
            if (v.comment_count or 0) < f.min_comments:
                continue
            if cutoff and not _published_after(v, cutoff):
                continue
            if f.video_type == "shorts" and not v.is_short:
                continue
            if f.video_type == "long" and v.is_short:
                continue
            if level_floor > 0:
                metric = self._metrics.view_subscriber_ratio(v.view_count, v.subscriber_count)
                if _level_rank(metric.level) < level_floor:
                    continue
            out.append(v)

        return out


def _level_rank(level: str) -> int:
    try:
        return LEVELS.index(level)
    except ValueError:
        return 0


def _since_cutoff(days: Optional[int]) -> Optional[datetime]:
    if days is None:
        return None
    if days < 0:
        days = 0
    return datetime.now(timezone.utc) - timedelta(days=days)


def _published_after(v: Video, cutoff: datetime) -> bool:
    dt = v.published_dt
    if dt is None:
        return False
    return dt >= cutoff
