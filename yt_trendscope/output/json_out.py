from __future__ import annotations

import json
from typing import List

from yt_trendscope.models import KeywordRecommendation, Video
from yt_trendscope.services.metrics import MetricsCalculator


class JsonPrinter:
    def __init__(self, metrics: MetricsCalculator | None = None) -> None:
        self._metrics = metrics or MetricsCalculator()

    def print(self, videos: List[Video]) -> None:
        print(json.dumps(self.payload(videos), indent=2, ensure_ascii=False))

    def print_keywords(self, batches: List[KeywordRecommendation]) -> None:
        payload = [
            {
                "keyword": b.keyword,
                "total_views": b.total_views,
                "avg_engagement": b.avg_engagement,
                "videos": self.payload(b.videos),
            }
            for b in batches
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))

    def payload(self, videos: List[Video]) -> List[dict]:
        out = []
        for v in videos:
            ratio, engagement = self._metrics.for_video(v)
            out.append(
                {
                    "video_id": v.video_id,
                    "title": v.title,
                    "channel_title": v.channel_title,
                    "channel_id": v.channel_id,
                    "published_at": v.published_at,
                    "duration_seconds": v.duration_seconds,
                    "is_short": v.is_short,
                    "view_count": v.view_count,
                    "like_count": v.like_count,
                    "comment_count": v.comment_count,
                    "subscriber_count": v.subscriber_count,
                    "view_subscriber_ratio": {"ratio": ratio.ratio, "level": ratio.level},
                    "engagement": {"ratio": engagement.ratio, "level": engagement.level},
                    "thumbnail_url": v.thumbnail_url,
                    "url": v.url,
                }
            )
        return out
