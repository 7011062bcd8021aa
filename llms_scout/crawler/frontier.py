# llms_scout/crawler/frontier.py
"""
Crawl frontier: discovered-but-unvisited links ordered by priority.

Backed by a heap with lazy deletion; ``_best`` holds the single live
entry for every queued URL.
"""
from __future__ import annotations

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Set, Tuple

from llms_scout.crawler.models import ScoredLink

__all__ = ("CrawlFrontier",)

logger = logging.getLogger("LLMSScout.frontier")

_HeapEntry = Tuple[int, int, str]


class CrawlFrontier:
    """Deduplicated, depth-, budget- and capacity-bounded priority queue of links."""

    def __init__(
        self,
        max_depth: int,
        max_pages: int,
        capacity: int = 1000,
        retry_failed: int = 0,
    ) -> None:
        self.max_depth = max_depth
        self.max_pages = max_pages
        self.capacity = capacity
        self.retry_failed = retry_failed
        self.queued: Set[str] = set()
        self.visited: Set[str] = set()
        self._best: Dict[str, ScoredLink] = {}
        self._heap: List[_HeapEntry] = []
        self._seq = itertools.count()
        self._failures: Dict[str, int] = {}
        self.successes = 0

    def __len__(self) -> int:
        return len(self.queued)

    def __contains__(self, url: object) -> bool:
        return url in self.queued

    # ------------------------------------------------------------------ #
    # Budget                                                              #
    # ------------------------------------------------------------------ #

    @property
    def budget_remaining(self) -> int:
        return max(0, self.max_pages - self.successes)

    @property
    def exhausted(self) -> bool:
        return self.budget_remaining == 0

    def record_success(self) -> None:
        self.successes += 1

    # ------------------------------------------------------------------ #
    # Insertion                                                           #
    # ------------------------------------------------------------------ #

    def best(self, url: str) -> Optional[ScoredLink]:
        """Best known entry for a queued URL."""
        return self._best.get(url) if url in self.queued else None

    def insert(self, link: ScoredLink) -> bool:
        """
        Queue *link* or raise its score. Returns True when the frontier changed.

        Links deeper than ``max_depth`` and already visited URLs are rejected;
        a queued URL keeps its score unless the new one is higher.
        """
        url = link.url
        if link.depth > self.max_depth:
            logger.debug("Too deep (%d > %d): %s", link.depth, self.max_depth, url)
            return False
        if url in self.visited:
            return False
        current = self._best.get(url) if url in self.queued else None
        if current is not None and current.priority_score >= link.priority_score:
            return False
        if current is None and len(self.queued) >= self.capacity and not self._evict_below(link.priority_score):
            logger.debug("Frontier full, dropped %s (score %d)", url, link.priority_score)
            return False
        self.queued.add(url)
        self._best[url] = link
        heapq.heappush(self._heap, (-link.priority_score, next(self._seq), url))
        return True

    def _live(self, entry: _HeapEntry) -> bool:
        neg_score, _, url = entry
        link = self._best.get(url)
        return url in self.queued and link is not None and link.priority_score == -neg_score

    def _evict_below(self, score: int) -> bool:
        """Drop the lowest-scored queued link if it scores below *score*."""
        live = [entry for entry in self._heap if self._live(entry)]
        if not live:
            return True
        worst = max(live)  # lowest score, newest insertion
        if -worst[0] >= score:
            return False
        url = worst[2]
        self.queued.discard(url)
        self._best.pop(url, None)
        logger.debug("Frontier full, evicted %s (score %d)", url, -worst[0])
        return True

    # ------------------------------------------------------------------ #
    # Draining                                                            #
    # ------------------------------------------------------------------ #

    def next_batch(self, n: int) -> List[ScoredLink]:
        """Pop up to *n* highest-score entries; nothing once the page budget is spent."""
        batch: List[ScoredLink] = []
        if self.exhausted:
            return batch
        while self._heap and len(batch) < n:
            entry = heapq.heappop(self._heap)
            if not self._live(entry):
                continue
            url = entry[2]
            self.queued.discard(url)
            batch.append(self._best.pop(url))
        if len(self._heap) > 4 * max(len(self.queued), 16):
            self._compact()
        return batch

    def _compact(self) -> None:
        self._heap = [entry for entry in self._heap if self._live(entry)]
        heapq.heapify(self._heap)

    # ------------------------------------------------------------------ #
    # Visited bookkeeping                                                 #
    # ------------------------------------------------------------------ #

    def mark_visited(self, url: str) -> None:
        self.visited.add(url)
        if url in self.queued:
            self.queued.discard(url)
            self._best.pop(url, None)

    def is_visited(self, url: str) -> bool:
        return url in self.visited

    def retry(self, link: ScoredLink) -> bool:
        """Re-queue a failed link while ``retry_failed`` allows it."""
        attempts = self._failures.get(link.url, 0)
        if attempts >= self.retry_failed:
            return False
        self._failures[link.url] = attempts + 1
        self.visited.discard(link.url)
        return self.insert(link)
