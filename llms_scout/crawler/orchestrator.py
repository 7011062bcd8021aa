# llms_scout/crawler/orchestrator.py
"""
Crawl orchestrator: drains the frontier in concurrency-bounded rounds,
feeds discovered links back in and forwards pages to the dispatcher.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, List

from llms_scout.crawler.models import CandidateLink, CrawlResult, PageRecord, ScoredLink
from llms_scout.crawler.urls import normalize_url
from llms_scout.errors import SeedFetchError

if TYPE_CHECKING:
    from llms_scout.engine import CrawlSession

__all__ = ("CrawlOrchestrator",)


class CrawlOrchestrator:
    """Runs one crawl over the state owned by a :class:`CrawlSession`."""

    def __init__(self, session: CrawlSession) -> None:
        self.session = session
        self.config = session.config
        self.stats = session.stats
        self.pages: List[PageRecord] = []
        self.logger = logging.getLogger("LLMSScout.crawler")

    async def run(self) -> CrawlResult:
        s = self.session
        seed = normalize_url(self.config.seed)
        self.logger.info("Crawl started: %s (root domain %s)", seed, s.tracker.root_domain)
        start = time.monotonic()

        self.stats.attempted += 1
        page = await s.visitor.visit(seed, depth=0)
        if page is None:
            raise SeedFetchError(seed, s.visitor.failures.get(seed, ""))
        await self._on_success(page)

        while not s.frontier.exhausted and len(s.frontier):
            n = min(self.config.concurrency, s.frontier.budget_remaining)
            links = s.frontier.next_batch(n)
            if not links:
                break
            await self._visit_round(links)

        await s.dispatcher.flush()
        await s.dispatcher.close()

        duration = time.monotonic() - start
        self.stats.batches_emitted = len(s.dispatcher.batches)
        self.logger.info(
            "Crawl done: %d pages in %.2fs (%d queued, %d failed, %d skipped)",
            len(self.pages),
            duration,
            len(s.frontier),
            self.stats.failed,
            self.stats.skipped,
        )
        return CrawlResult(
            seed_url=seed,
            root_domain=s.tracker.root_domain,
            pages=list(self.pages),
            batches=list(s.dispatcher.batches),
            generated=s.dispatcher.generated,
            stats=self.stats,
            domains=s.tracker.snapshot(),
            duration=duration,
        )

    async def _visit_round(self, links: List[ScoredLink]) -> None:
        """Visit *links* concurrently; pages are appended as each fetch completes."""
        s = self.session

        async def _one(link: ScoredLink):
            return link, await s.visitor.visit(link.url, depth=link.depth)

        self.stats.attempted += len(links)
        for fut in asyncio.as_completed([_one(link) for link in links]):
            link, page = await fut
            if page is None and link.url in s.visitor.skipped:
                self.stats.skipped += 1
                continue
            if page is None:
                self.stats.failed += 1
                if s.frontier.retry(link):
                    self.stats.retried += 1
                    self.logger.debug("Re-queued %s", link.url)
                continue
            if s.frontier.exhausted:
                # budget reached by a sibling in this round
                continue
            await self._on_success(page)

    async def _on_success(self, page: PageRecord) -> None:
        s = self.session
        self.stats.succeeded += 1
        s.frontier.record_success()
        self.pages.append(page)
        await s.dispatcher.accept([page])
        self._enqueue_links(page)
        self.logger.debug("Visited %s (depth %d, %d links)", page.url, page.depth, len(page.outbound_links))

    def _enqueue_links(self, page: PageRecord) -> None:
        s = self.session
        for raw in page.outbound_links[: self.config.max_links_per_page]:
            self.stats.discovered += 1
            if not s.scorer.admit(raw.url):
                self.stats.filtered += 1
                continue
            url = normalize_url(raw.url)
            classification = s.tracker.classify(url)
            s.tracker.record(url, classification)
            if not classification.related:
                self.stats.unrelated += 1
                continue
            candidate = CandidateLink(
                url=url,
                anchor_text=raw.text,
                is_nav_origin=raw.is_nav,
                source_depth=page.depth,
            )
            scored = s.scorer.score_link(candidate, s.tracker)
            if s.frontier.insert(scored):
                self.stats.enqueued += 1
            elif scored.depth > s.frontier.max_depth:
                self.stats.rejected += 1
            self.logger.debug("Link %s score=%d", url, scored.priority_score)

