"""
Crawl frontier for a single search session.

Holds the URLs discovered but not yet fetched, plus the set of every URL ever
enqueued.  Dedup happens at discovery time: a URL enters the frontier at most
once per session, no matter how many pages link to it.

Batches are drawn FIFO, so the site is walked breadth-first from the seed.

All mutating methods are synchronous and never await, so scans settling
concurrently on the same event loop cannot interleave inside one of them.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable


class Frontier:
    def __init__(self) -> None:
        self._pending: deque[str] = deque()
        self._visited: set[str] = set()
        self.total_discovered = 0
        self.searched = 0

    def seed(self, url: str) -> None:
        """Reset to a frontier holding only *url*."""
        self._pending = deque([url])
        self._visited = {url}
        self.total_discovered = 1
        self.searched = 0

    def next_batch(self, size: int) -> list[str]:
        """Remove and return up to *size* pending URLs (empty when drained)."""
        batch: list[str] = []
        while self._pending and len(batch) < size:
            batch.append(self._pending.popleft())
        return batch

    def report_discovered(self, urls: Iterable[str]) -> int:
        """Enqueue every URL not seen before; returns how many were new."""
        added = 0
        for url in urls:
            if url in self._visited:
                continue
            self._visited.add(url)
            self._pending.append(url)
            added += 1
        self.total_discovered += added
        return added

    def mark_searched(self, count: int) -> float:
        """Record *count* more searched pages and return the new progress."""
        self.searched += count
        return self.progress

    @property
    def progress(self) -> float:
        """Percentage of discovered pages searched so far, 0–100."""
        if not self.total_discovered:
            return 0.0
        return min(100.0, self.searched / self.total_discovered * 100)

    @property
    def pending(self) -> int:
        return len(self._pending)

    @property
    def visited_count(self) -> int:
        return len(self._visited)

    @property
    def is_empty(self) -> bool:
        return not self._pending

    def __contains__(self, url: object) -> bool:
        return url in self._visited
