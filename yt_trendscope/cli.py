import argparse
import logging
import sys

from yt_trendscope.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_RESULTS,
    DEFAULT_ORDER,
    DEFAULT_REGION,
    DEFAULT_SORT,
    DEFAULT_TOP,
    get_api_key,
    load_setting,
    save_api_key,
    save_setting,
)
from yt_trendscope.models import LEVEL_UNKNOWN, LEVELS
from yt_trendscope.output.table import TablePrinter
from yt_trendscope.output.json_out import JsonPrinter
from yt_trendscope.output.keyword_table import KeywordTablePrinter
from yt_trendscope.services.ranker import Ranker
from yt_trendscope.services.search_service import SearchService
from yt_trendscope.services.filtering import VIDEO_TYPES, Filters, VideoFilter
from yt_trendscope.services.recommender import MODES, Recommender
from yt_trendscope.youtube_client import YouTubeClient

logger = logging.getLogger(__name__)

SORT_CHOICES = sorted(Ranker.VALID_SORTS)


def run(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.log_level or load_setting("log_level", DEFAULT_LOG_LEVEL))

    try:
        if args.command == "search":
            _handle_search(args)
        elif args.command == "trending":
            _handle_trending(args)
        elif args.command == "recommend":
            _handle_recommend(args)
        elif args.command == "config":
            _handle_config(args)
    except RuntimeError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yt-trendscope",
        description="Search, sort and recommend YouTube videos by derived performance metrics.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging verbosity (default: saved setting or WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search YouTube and print sorted results.")
    search.add_argument("query", help="Search query string.")
    search.add_argument("--max-results", type=int, default=DEFAULT_MAX_RESULTS, help="Results to fetch (max 50).")
    search.add_argument("--top", type=int, default=DEFAULT_TOP, help="How many results to print.")
    _add_sort_args(search)
    search.add_argument("--min-views", type=int, default=0, help="Filter out videos with fewer views.")
    search.add_argument("--min-comments", type=int, default=0, help="Filter out videos with fewer comments.")
    search.add_argument("--since", type=str, default="", help='Only include videos from the last N days (e.g. "30d").')
    search.add_argument("--type", dest="video_type", choices=VIDEO_TYPES, default="all", help="Shorts, long-form or both.")
    search.add_argument(
        "--min-ratio-level",
        choices=LEVELS,
        default=LEVEL_UNKNOWN,
        help="Minimum view/subscriber level (unknown disables the filter).",
    )
    _add_format_arg(search)

    trending = sub.add_parser("trending", help="Most popular videos, optionally for one category.")
    trending.add_argument("--category", default="all", help='YouTube category id, e.g. "10" for music, or "all".')
    trending.add_argument("--region", default=None, help="Region code (default: saved setting or KR).")
    trending.add_argument("--max-results", type=int, default=DEFAULT_MAX_RESULTS, help="Results to fetch (max 50).")
    trending.add_argument("--top", type=int, default=DEFAULT_TOP, help="How many results to print.")
    _add_sort_args(trending)
    _add_format_arg(trending)

    rec = sub.add_parser("recommend", help="Smart recommendations.")
    rec.add_argument("mode", choices=MODES, help="time | keywords | gems | rising")
    rec.add_argument("--hour", type=int, default=None, help="Hour of day for the time mode (default: now).")
    rec.add_argument("--region", default=None, help="Region code for the time mode.")
    rec.add_argument("--workers", type=int, default=1, help="Concurrent API calls per strategy (default 1).")
    rec.add_argument("--sort", choices=SORT_CHOICES, default=None, help="Re-sort the recommended videos.")
    rec.add_argument("--order", choices=["asc", "desc"], default=DEFAULT_ORDER)
    _add_format_arg(rec)

    cfg = sub.add_parser("config", help="Save the API key or default settings.")
    cfg.add_argument("--api-key", default=None, help="Store the YouTube API key in the user config file.")
    cfg.add_argument("--region", default=None, help="Default region code.")
    cfg.add_argument("--default-log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    return parser


def _add_sort_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--sort", choices=SORT_CHOICES, default=DEFAULT_SORT, help="Sort results by this field.")
    p.add_argument("--order", choices=["asc", "desc"], default=DEFAULT_ORDER, help="Sort direction.")


def _add_format_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument("--format", choices=["table", "json"], default="table", help="Output format.")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _client() -> YouTubeClient:
    return YouTubeClient(api_key=get_api_key())


def _handle_search(args: argparse.Namespace) -> None:
    svc = SearchService(yt=_client(), ranker=Ranker(), vfilter=VideoFilter())

    filters = Filters(
        min_views=max(0, args.min_views),
        min_comments=max(0, args.min_comments),
        since_days=_parse_days(args.since),
        video_type=args.video_type,
        min_ratio_level=args.min_ratio_level,
    )

    videos = svc.search(
        query=args.query,
        max_results=args.max_results,
        top=args.top,
        sort=args.sort,
        order=args.order,
        filters=filters,
    )
    _print_videos(videos, args.format, source=f"search: {args.query}")


def _handle_trending(args: argparse.Namespace) -> None:
    svc = SearchService(yt=_client(), ranker=Ranker())
    videos = svc.trending(
        category_id=args.category,
        region_code=args.region or load_setting("region_code", DEFAULT_REGION),
        max_results=args.max_results,
        top=args.top,
        sort=args.sort,
        order=args.order,
    )
    _print_videos(videos, args.format, source=f"trending: {args.category}")


def _handle_recommend(args: argparse.Namespace) -> None:
    recommender = Recommender(
        yt=_client(),
        region_code=args.region or load_setting("region_code", DEFAULT_REGION),
        max_workers=max(1, args.workers),
    )
    result = recommender.recommend(args.mode, hour=args.hour)
    logger.info(f"{result.source}: {len(result.videos)} videos")

    videos = result.videos
    if args.sort:
        videos = Ranker().sort(videos, sort_key=args.sort, order=args.order)

    if args.mode == "keywords":
        if args.format == "json":
            JsonPrinter().print_keywords(result.keyword_batches)
            return
        KeywordTablePrinter().print(result.keyword_batches)
        print()

    _print_videos(videos, args.format, source=result.source)


def _handle_config(args: argparse.Namespace) -> None:
    if args.api_key:
        save_api_key(args.api_key)
        print("API key saved.")
    if args.region:
        save_setting("region_code", args.region.upper())
        print(f"Default region set to {args.region.upper()}.")
    if args.default_log_level:
        save_setting("log_level", args.default_log_level)
        print(f"Default log level set to {args.default_log_level}.")


def _print_videos(videos, fmt: str, source: str = "") -> None:
    if fmt == "json":
        JsonPrinter().print(videos)
    else:
        TablePrinter().print(videos, source=source)


def _parse_days(s: str):
    s = (s or "").strip().lower()
    if not s:
        return None
    if s.endswith("d"):
        s = s[:-1]
    try:
        return int(s)
    except ValueError:
        return None
