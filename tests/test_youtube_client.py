import threading
from datetime import datetime, timezone

import pytest

import yt_trendscope.youtube_client as client_module
from yt_trendscope.youtube_client import YouTubeClient, iso8601_duration_to_seconds, to_rfc3339


class _Request:
    def __init__(self, response, service):
        self._response = response
        self._service = service

    def execute(self, http=None):
        self._service.transports.append((threading.get_ident(), http))
        return self._response


class _Resource:
    def __init__(self, name, service):
        self._name = name
        self._service = service

    def list(self, **params):
        self._service.requests.append((self._name, params))
        return _Request(self._service.responses[self._name](params), self._service)


class FakeService:
    def __init__(self, responses):
        self.responses = responses
        self.requests = []
        self.transports = []

    def search(self):
        return _Resource("search", self)

    def videos(self):
        return _Resource("videos", self)

    def channels(self):
        return _Resource("channels", self)


def _video_item(video_id, channel_id, duration="PT3M", comments="5"):
    stats = {"viewCount": "1200", "likeCount": "30"}
    if comments is not None:
        stats["commentCount"] = comments
    return {
        "id": video_id,
        "snippet": {
            "title": f"Title {video_id}",
            "channelTitle": f"Channel {channel_id}",
            "channelId": channel_id,
            "publishedAt": "2025-02-28T10:00:00Z",
            "thumbnails": {"medium": {"url": f"https://img/{video_id}.jpg"}},
        },
        "statistics": stats,
        "contentDetails": {"duration": duration},
    }


@pytest.fixture
def service(monkeypatch):
    items = {
        "v1": _video_item("v1", "c1", duration="PT45S", comments=None),
        "v2": _video_item("v2", "c2", duration="PT1H2M3S"),
    }
    fake = FakeService(
        {
            "search": lambda p: {"items": [{"id": {"videoId": "v2"}}, {"id": {"videoId": "v1"}}, {"id": {"videoId": "v2"}}]},
            # videos.list answers in its own order
            "videos": lambda p: {"items": [items[i] for i in sorted(p.get("id", "v1,v2").split(","))]},
            "channels": lambda p: {
                "items": [
                    {"id": "c1", "statistics": {"subscriberCount": "20000"}},
                    {"id": "c2", "statistics": {"hiddenSubscriberCount": True}},
                ]
            },
        }
    )
    monkeypatch.setattr(client_module, "build", lambda *args, **kwargs: fake)
    return fake


def test_search_builds_enriched_videos(service):
    yt = YouTubeClient(api_key="test")
    after = datetime(2025, 2, 22, 12, 0, tzinfo=timezone.utc)
    videos = yt.search("trend", max_results=15, order="relevance", published_after=after)

    assert [v.video_id for v in videos] == ["v2", "v1"]
    v2, v1 = videos
    assert v1.duration_seconds == 45 and v1.is_short
    assert v2.duration_seconds == 3723 and not v2.is_short
    assert v1.comment_count is None
    assert v2.comment_count == 5
    assert v1.subscriber_count == 20000
    assert v2.subscriber_count is None
    assert v1.thumbnail_url == "https://img/v1.jpg"

    name, params = service.requests[0]
    assert name == "search"
    assert params["maxResults"] == 15
    assert params["order"] == "relevance"
    assert params["publishedAfter"] == "2025-02-22T12:00:00Z"


def test_search_caps_max_results(service):
    YouTubeClient(api_key="test").search_video_ids("q", max_results=500)
    assert service.requests[0][1]["maxResults"] == 50


def test_search_rejects_unknown_order(service):
    with pytest.raises(ValueError):
        YouTubeClient(api_key="test").search("q", order="rating")


def test_trending_passes_category(service):
    YouTubeClient(api_key="test").trending(category_id="10", region_code="US", max_results=5)
    name, params = service.requests[0]
    assert name == "videos"
    assert params["chart"] == "mostPopular"
    assert params["videoCategoryId"] == "10"
    assert params["regionCode"] == "US"


def test_trending_all_has_no_category(service):
    YouTubeClient(api_key="test").trending(category_id="all")
    assert "videoCategoryId" not in service.requests[0][1]


def test_empty_search_skips_detail_calls(monkeypatch):
    fake = FakeService({"search": lambda p: {"items": []}})
    monkeypatch.setattr(client_module, "build", lambda *args, **kwargs: fake)
    assert YouTubeClient(api_key="test").search("nothing") == []
    assert [name for name, _ in fake.requests] == ["search"]


@pytest.mark.parametrize(
    "duration, seconds",
    [("PT1H2M3S", 3723), ("PT45S", 45), ("PT5M", 300), ("P1DT1S", 86401), ("P0D", 0), ("", 0), ("junk", 0)],
)
def test_iso8601_duration_to_seconds(duration, seconds):
    assert iso8601_duration_to_seconds(duration) == seconds


def test_to_rfc3339_treats_naive_as_utc():
    assert to_rfc3339(datetime(2025, 1, 1, 8, 30)) == "2025-01-01T08:30:00Z"


def test_each_thread_executes_on_its_own_transport(service):
    yt = YouTubeClient(api_key="test")
    yt.search("first")
    yt.search("second")
    main_transports = {id(http) for _, http in service.transports}
    assert len(main_transports) == 1
    assert None not in {http for _, http in service.transports}

    worker = threading.Thread(target=lambda: yt.search("from worker"))
    worker.start()
    worker.join()

    by_thread = {}
    for ident, http in service.transports:
        by_thread.setdefault(ident, set()).add(id(http))
    assert len(by_thread) == 2
    first, second = by_thread.values()
    assert len(first) == 1 and len(second) == 1
    assert first != second
