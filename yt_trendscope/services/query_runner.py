from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class QueryRunner:
    """
    Runs a strategy's sub-queries against the metadata provider.

    call_budget caps how many sub-queries run at all (the first N win).
    max_workers=1 keeps the calls sequential, one at a time, which is the
    default to stay gentle on API quota. Results come back in query order
    regardless of worker count; a failed sub-query yields None.
    """

    def __init__(self, call_budget: Optional[int] = None, max_workers: int = 1) -> None:
        self.call_budget = call_budget
        self.max_workers = max(1, max_workers)

    def select(self, queries: Sequence[str]) -> List[str]:
        if self.call_budget is None:
            return list(queries)
        return list(queries[: max(0, self.call_budget)])

    def run(self, queries: Sequence[str], fetch: Callable[[str], T]) -> List[Optional[T]]:
        selected = self.select(queries)

        def attempt(q: str) -> Optional[T]:
            try:
                return fetch(q)
            except Exception as e:
                # best effort: one failed sub-query must not sink the strategy
                logger.warning(f"Fetch failed for {q!r}: {e}")
                return None

        if self.max_workers == 1 or len(selected) <= 1:
            return [attempt(q) for q in selected]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(attempt, selected))
