from yt_trendscope.models import LEVEL_HIGH
from yt_trendscope.services.filtering import Filters, VideoFilter
from yt_trendscope.services.ranker import Ranker
from yt_trendscope.services.search_service import SearchService


def ids(videos):
    return [v.video_id for v in videos]


def test_filter_min_views_and_comments(make_video):
    videos = [
        make_video("a", views=50, comments=10),
        make_video("b", views=500, comments=None),
        make_video("c", views=500, comments=3),
    ]
    out = VideoFilter().apply(videos, Filters(min_views=100, min_comments=1))
    assert ids(out) == ["c"]


def test_filter_since_days(make_video):
    videos = [
        make_video("fresh", published_at="2999-01-01T00:00:00Z"),
        make_video("ancient", published_at="2001-01-01T00:00:00Z"),
        make_video("broken", published_at=""),
    ]
    assert ids(VideoFilter().apply(videos, Filters(since_days=30))) == ["fresh"]


def test_filter_video_type(make_video):
    videos = [make_video("short", duration=30), make_video("long", duration=900)]
    assert ids(VideoFilter().apply(videos, Filters(video_type="shorts"))) == ["short"]
    assert ids(VideoFilter().apply(videos, Filters(video_type="long"))) == ["long"]
    assert ids(VideoFilter().apply(videos, Filters())) == ["short", "long"]


def test_filter_min_ratio_level(make_video):
    videos = [
        make_video("high", views=20000, subscribers=10000),
        make_video("medium", views=6000, subscribers=10000),
        make_video("unknown", views=6000, subscribers=0),
    ]
    assert ids(VideoFilter().apply(videos, Filters(min_ratio_level=LEVEL_HIGH))) == ["high"]


class _FakeClient:
    def __init__(self, videos):
        self.videos = videos
        self.calls = []

    def search(self, query, max_results=50, order=None, published_after=None):
        self.calls.append(("search", query, max_results, order))
        return list(self.videos)

    def trending(self, category_id=None, region_code="KR", max_results=50):
        self.calls.append(("trending", category_id, region_code, max_results))
        return list(self.videos)


def test_search_service_filters_sorts_and_truncates(make_video):
    yt = _FakeClient(
        [
            make_video("a", views=10, likes=1),
            make_video("b", views=3000, likes=5),
            make_video("c", views=2000, likes=9),
        ]
    )
    svc = SearchService(yt=yt, ranker=Ranker())
    out = svc.search("q", max_results=20, top=1, sort="like_count", order="desc", filters=Filters(min_views=100))
    assert ids(out) == ["c"]
    assert yt.calls == [("search", "q", 20, "viewCount")]


def test_search_service_trending(make_video):
    yt = _FakeClient([make_video("a", views=1), make_video("b", views=2)])
    out = SearchService(yt=yt, ranker=Ranker()).trending(
        category_id="24", region_code="KR", max_results=10, top=0, sort="view_count", order="asc"
    )
    assert ids(out) == ["a"]
    assert yt.calls == [("trending", "24", "KR", 10)]
