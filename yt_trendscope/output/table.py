from __future__ import annotations

from typing import List

from yt_trendscope.models import PerformanceMetric, Video, parse_published_at
from yt_trendscope.services.metrics import MetricsCalculator


class TablePrinter:
    def __init__(self, metrics: MetricsCalculator | None = None) -> None:
        self._metrics = metrics or MetricsCalculator()

    def print(self, videos: List[Video], source: str = "") -> None:
        if not videos:
            print("No results.")
            return

        rows = []
        for i, v in enumerate(videos, start=1):
            ratio, engagement = self._metrics.for_video(v)
            rows.append(
                [
                    str(i),
                    _truncate(v.title, 50),
                    _truncate(v.channel_title, 20),
                    format_number(v.subscriber_count),
                    format_published_at(v.published_at),
                    format_duration(v.duration_seconds),
                    format_number(v.view_count),
                    format_number(v.like_count),
                    format_number(v.comment_count),
                    format_metric(ratio),
                    format_metric(engagement),
                    "Shorts" if v.is_short else "Video",
                    v.url,
                ]
            )

        headers = [
            "#", "title", "channel", "subs", "published", "duration",
            "views", "likes", "comments", "view/sub", "like/comment", "type", "url",
        ]
        _print_table(headers, rows)

        footer = f"\n{len(videos)} videos"
        if source:
            footer += f" • source: {source}"
        print(footer)


def format_number(value) -> str:
    """Korean short units: 1억+ and 1만+ are abbreviated, smaller numbers get separators."""
    if value is None:
        return "0"
    try:
        num = int(value)
    except (TypeError, ValueError):
        return "0"
    if num >= 100_000_000:
        return f"{num / 100_000_000:.1f}".removesuffix(".0") + "억"
    if num >= 10_000:
        return f"{num // 10_000}만"
    return f"{num:,}"


def format_duration(seconds: int) -> str:
    hours, rest = divmod(max(0, seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_published_at(published_at: str) -> str:
    dt = parse_published_at(published_at)
    if dt is None:
        return published_at or ""
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def format_metric(metric: PerformanceMetric) -> str:
    if metric.ratio > 0:
        return f"{metric.ratio:.1f}배 {metric.label}"
    return f"계산불가 {metric.label}"


def _truncate(text: str, max_len: int) -> str:
    t = (text or "").strip()
    if len(t) <= max_len:
        return t
    return t[: max_len - 1] + "…"


def _print_table(headers: List[str], rows: List[List[str]]) -> None:
    # basic table printer (no deps)
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt_row(row):
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))

    print(fmt_row(headers))
    print("-+-".join("-" * w for w in widths))
    for row in rows:
        print(fmt_row(row))
