# llms_scout/crawler/visitor.py
"""
Page visitor: fetch one URL through the rendering engine and turn it
into a :class:`PageRecord`.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from llms_scout.crawler.domains import DomainTracker
from llms_scout.crawler.frontier import CrawlFrontier
from llms_scout.crawler.models import ExtractedLink, PageRecord
from llms_scout.crawler.urls import normalize_url
from llms_scout.doc_finder import classify_page
from llms_scout.engines.base import EnginePage, RenderingEngine
from llms_scout.engines.extractor import Extractor

__all__ = ("PageVisitor",)

_HEADING_LEVELS = ("h1", "h2", "h3")


class PageVisitor:
    """Visits pages one at a time; any failure yields None instead of an exception."""

    def __init__(
        self,
        engine: RenderingEngine,
        frontier: CrawlFrontier,
        tracker: DomainTracker,
        timeout: float = 30.0,
        extractor: Optional[Extractor] = None,
    ) -> None:
        self.engine = engine
        self.frontier = frontier
        self.tracker = tracker
        self.timeout = timeout
        self.extractor = extractor or Extractor()
        self.logger = logging.getLogger("LLMSScout.visitor")
        self.failures: Dict[str, str] = {}
        # URLs that resolved to an already visited page; not failures
        self.skipped: Set[str] = set()

    async def visit(self, url: str, depth: int = 0) -> Optional[PageRecord]:
        """Fetch *url*; None means it failed (see ``failures``) or was skipped (see ``skipped``)."""
        url = normalize_url(url)
        if self.frontier.is_visited(url):
            self.skipped.add(url)
            return None
        self.frontier.mark_visited(url)

        page: Optional[EnginePage] = None
        try:
            page = await self.engine.new_page()
            # the engine timeout is the primary bound; wait_for guards engines that ignore it
            nav = await asyncio.wait_for(page.navigate(url, self.timeout), timeout=self.timeout + 5)
            if not nav.ok:
                self.failures[url] = "no response" if nav.status is None else f"HTTP {nav.status}"
                self.logger.warning("Skipping %s: %s", url, self.failures[url])
                return None

            final = normalize_url(nav.final_url or url)
            if final != url:
                if self.frontier.is_visited(final):
                    self.skipped.add(url)
                    self.logger.debug("Skipping %s: redirect to already visited %s", url, final)
                    return None
                self.logger.info("Redirect %s -> %s", url, final)
                self.frontier.mark_visited(final)
                self.tracker.add_domain(final)

            data = await asyncio.wait_for(page.evaluate(self.extractor), timeout=self.timeout)
            return self._to_record(final, data, depth)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.failures[url] = f"{type(exc).__name__}: {exc}"
            self.logger.warning("Failed %s: %s", url, self.failures[url])
            return None
        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception as exc:
                    self.logger.debug("Error closing page for %s: %s", url, exc)

    @staticmethod
    def _headings(raw: Any) -> Dict[str, Tuple[str, ...]]:
        raw = raw if isinstance(raw, dict) else {}
        return {level: tuple(str(h) for h in raw.get(level, ()) if h) for level in _HEADING_LEVELS}

    @staticmethod
    def _links(raw: Iterable[Any]) -> Tuple[ExtractedLink, ...]:
        links = []
        for item in raw or ():
            if not isinstance(item, dict) or not item.get("url"):
                continue
            links.append(
                ExtractedLink(
                    url=str(item["url"]),
                    text=str(item.get("text") or ""),
                    is_nav=bool(item.get("is_nav")),
                )
            )
        return tuple(links)

    def _to_record(self, url: str, data: Dict[str, Any], depth: int) -> PageRecord:
        title = str(data.get("title") or "")
        headings = self._headings(data.get("headings"))
        return PageRecord(
            url=url,
            title=title,
            meta_description=str(data.get("meta_description") or ""),
            headings=headings,
            body_text=str(data.get("body_text") or ""),
            outbound_links=self._links(data.get("links")),
            is_documentation=classify_page(url, title, headings),
            depth=depth,
        )
