from datetime import datetime, timedelta, timezone

import pytest

from yt_trendscope.models import Video

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def build_video(
    video_id,
    views=1000,
    likes=100,
    comments=10,
    subscribers=10_000,
    channel_id=None,
    title=None,
    channel_title=None,
    hours_ago=5,
    published_at=None,
    duration=300,
):
    return Video(
        video_id=video_id,
        title=title if title is not None else f"Video {video_id}",
        channel_title=channel_title if channel_title is not None else f"Channel {video_id}",
        channel_id=channel_id if channel_id is not None else f"UC{video_id}",
        published_at=published_at if published_at is not None else iso(NOW - timedelta(hours=hours_ago)),
        duration_seconds=duration,
        view_count=views,
        like_count=likes,
        comment_count=comments,
        subscriber_count=subscribers,
    )


class FakeYouTube:
    """Stands in for YouTubeClient: canned results per query, optional failures."""

    def __init__(self, results=None, failing=(), trending_results=None):
        self.results = results or {}
        self.failing = set(failing)
        self.trending_results = trending_results or {}
        self.calls = []
        self.trending_calls = []

    def search(self, query, max_results=50, order=None, published_after=None):
        self.calls.append(
            {"query": query, "max_results": max_results, "order": order, "published_after": published_after}
        )
        if query in self.failing:
            raise ConnectionError(f"quota exceeded for {query}")
        return list(self.results.get(query, []))

    def trending(self, category_id=None, region_code="KR", max_results=50):
        self.trending_calls.append({"category_id": category_id, "region_code": region_code})
        if category_id in self.failing:
            raise ConnectionError("trending unavailable")
        return list(self.trending_results.get(category_id, []))


@pytest.fixture
def make_video():
    return build_video


@pytest.fixture
def fake_yt_factory():
    return FakeYouTube


@pytest.fixture
def now():
    return NOW
