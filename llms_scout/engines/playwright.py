# llms_scout/engines/playwright.py
"""
Headless Chromium engine built on Playwright's async API.

A single browser and context are shared by every page of a crawl and
released once, in ``__aexit__``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from llms_scout.crawler.models import NavigationResult
from llms_scout.engines.extractor import Extractor
from llms_scout.errors import EngineError

__all__ = ("PlaywrightEngine", "PlaywrightPage")

logger = logging.getLogger("LLMSScout.playwright")


class PlaywrightPage:
    def __init__(self, page: Page, wait_until: str = "networkidle") -> None:
        self.page = page
        self.wait_until = wait_until

    async def navigate(self, url: str, timeout: float) -> NavigationResult:
        response = await self.page.goto(url, wait_until=self.wait_until, timeout=timeout * 1000)
        status = response.status if response is not None else None
        return NavigationResult(final_url=self.page.url, status=status)

    async def evaluate(self, extractor: Extractor) -> Dict[str, Any]:
        return await self.page.evaluate(extractor.script, extractor.max_chars)

    async def close(self) -> None:
        if not self.page.is_closed():
            await self.page.close()


class PlaywrightEngine:
    """Rendering engine driving headless Chromium."""

    def __init__(
        self,
        headless: bool = True,
        user_agent: Optional[str] = None,
        wait_until: str = "networkidle",
    ) -> None:
        self.headless = headless
        self.user_agent = user_agent
        self.wait_until = wait_until
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def __aenter__(self) -> PlaywrightEngine:
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            self._context = await self._browser.new_context(
                user_agent=self.user_agent,
                viewport={"width": 1280, "height": 720},
            )
        except PlaywrightError as exc:
            await self._shutdown()
            raise EngineError(f"Failed to start Playwright: {exc}. Run: playwright install chromium") from exc
        logger.debug("Playwright browser started (headless=%s)", self.headless)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._shutdown()

    async def _shutdown(self) -> None:
        context, browser, playwright = self._context, self._browser, self._playwright
        self._context = self._browser = self._playwright = None
        for name, closer in (
            ("context", context.close if context else None),
            ("browser", browser.close if browser else None),
            ("playwright", playwright.stop if playwright else None),
        ):
            if closer is None:
                continue
            try:
                await closer()
            except PlaywrightError as exc:
                logger.warning("Error closing Playwright %s: %s", name, exc)
        logger.debug("Playwright browser closed")

    async def new_page(self) -> PlaywrightPage:
        if self._context is None:
            raise RuntimeError("Browser context not initialized")
        page = await self._context.new_page()
        return PlaywrightPage(page, self.wait_until)
