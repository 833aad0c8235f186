from __future__ import annotations
from typing import List
from yt_trendscope.models import KeywordRecommendation
from yt_trendscope.output.table import format_number

class KeywordTablePrinter:
    def print(self, batches: List[KeywordRecommendation]) -> None:
        if not batches:
            print("No keyword returned any videos.")
            return

        headers = ["#", "keyword", "total_views", "avg_engagement", "videos"]
        rows = []
        for i, b in enumerate(batches, start=1):
            rows.append([
                str(i),
                b.keyword,
                format_number(b.total_views),
                f"{b.avg_engagement:.2%}",
                str(len(b.videos)),
            ])

        _print_table(headers, rows)

        # top videos under each keyword
        for b in batches:
            print("\n---")
            print(b.keyword)
            for v in b.videos:
                title = (v.title[:60] + "…") if len(v.title) > 60 else v.title
                print(f"- {title} ({format_number(v.view_count)} views) {v.url}")

def _print_table(headers, rows):
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
