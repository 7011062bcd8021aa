# File: tests/conftest.py
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from llms_scout.config import CrawlConfig
from llms_scout.crawler.models import NavigationResult, PageRecord
from llms_scout.engines.extractor import Extractor


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@dataclass
class FakeResponse:
    """One page of the in-memory site served by :class:`FakeEngine`."""

    html: str = ""
    status: Optional[int] = 200
    final_url: Optional[str] = None
    error: Optional[BaseException] = None
    delay: float = 0.0


@dataclass
class FakeSite:
    pages: Dict[str, FakeResponse] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)

    def add(self, url: str, html: str = "", **kwargs) -> None:
        self.pages[url] = FakeResponse(html=html, **kwargs)


class FakePage:
    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine
        self._response: Optional[FakeResponse] = None
        self._url = ""
        self.closed = False

    async def navigate(self, url: str, timeout: float) -> NavigationResult:
        site = self.engine.site
        site.calls.append(url)
        response = site.pages.get(url)
        if response is None:
            return NavigationResult(final_url=url, status=404)
        if response.delay:
            if response.delay > timeout:
                await asyncio.sleep(timeout)
                raise asyncio.TimeoutError(f"Timeout {timeout}s exceeded")
            await asyncio.sleep(response.delay)
        if response.error is not None:
            raise response.error
        self._response = response
        self._url = response.final_url or url
        return NavigationResult(final_url=self._url, status=response.status)

    async def evaluate(self, extractor: Extractor):
        assert self._response is not None
        return extractor.from_html(self._response.html, self._url)

    async def close(self) -> None:
        self.closed = True
        self.engine.open_pages -= 1


class FakeEngine:
    """Rendering engine over a :class:`FakeSite`; counts lifecycle calls."""

    def __init__(self, site: FakeSite) -> None:
        self.site = site
        self.entered = 0
        self.exited = 0
        self.open_pages = 0

    async def __aenter__(self) -> "FakeEngine":
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited += 1

    async def new_page(self) -> FakePage:
        self.open_pages += 1
        return FakePage(self)


def links_html(*links: str, nav: tuple = (), title: str = "Page", body: str = "Some content") -> str:
    """Build a small HTML page; *links* go into <main>, *nav* into <nav>."""
    nav_html = "".join(f'<a href="{href}">{href}</a>' for href in nav)
    main_html = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return (
        f"<html><head><title>{title}</title></head><body>"
        f"<nav>{nav_html}</nav><main><p>{body}</p>{main_html}</main></body></html>"
    )


def make_page(url: str, depth: int = 0, is_documentation: bool = False) -> PageRecord:
    return PageRecord(
        url=url,
        title=url,
        meta_description="",
        headings={"h1": (), "h2": (), "h3": ()},
        body_text="text",
        outbound_links=(),
        is_documentation=is_documentation,
        depth=depth,
    )


@pytest.fixture()
def site() -> FakeSite:
    return FakeSite()


@pytest.fixture()
def fake_engine(site) -> FakeEngine:
    return FakeEngine(site)


@pytest.fixture()
def basic_config() -> CrawlConfig:
    """
    Return a basic valid CrawlConfig for crawler tests.
    """
    return CrawlConfig(
        seed_url="https://example.com",
        engine="http",
        max_depth=3,
        max_pages=20,
        concurrency=3,
        batch_size=2,
        page_timeout=2.0,
        user_agent="TestAgent/1.0",
    )
