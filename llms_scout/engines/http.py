# llms_scout/engines/http.py
"""
Static HTTP engine: aiohttp for transport, BeautifulSoup for extraction.

No JavaScript is executed; good enough for server-rendered sites and
for tests against a local aiohttp server.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from llms_scout.crawler.models import NavigationResult
from llms_scout.engines.extractor import Extractor

__all__ = ("HttpEngine", "HttpPage")

logger = logging.getLogger("LLMSScout.http")


class HttpPage:
    """One navigation over a shared :class:`ClientSession`."""

    def __init__(self, session: ClientSession, retry_times: int = 1) -> None:
        self.session = session
        self.retry_times = retry_times
        self._html: Optional[str] = None
        self._url: Optional[str] = None

    async def navigate(self, url: str, timeout: float) -> NavigationResult:
        """
        GET *url* following redirects.

        Connection errors are retried with exponential backoff; HTTP
        statuses are reported as-is. A timeout propagates to the caller.
        """
        attempts = 0
        while True:
            try:
                async with self.session.get(
                    url, timeout=ClientTimeout(total=timeout), allow_redirects=True
                ) as resp:
                    final = str(resp.url)
                    ctype = resp.headers.get("Content-Type", "").lower()
                    if resp.status < 400 and ("html" in ctype or not ctype):
                        self._html = await resp.text(errors="replace")
                    else:
                        self._html = ""
                    self._url = final
                    return NavigationResult(final_url=final, status=resp.status)
            except asyncio.TimeoutError:
                raise
            except ClientError as exc:
                attempts += 1
                if attempts > self.retry_times:
                    raise
                backoff = min(2 ** attempts, 30)
                logger.debug("Retry %d/%d for %s after %s s: %s", attempts, self.retry_times, url, backoff, exc)
                await asyncio.sleep(backoff)

    async def evaluate(self, extractor: Extractor) -> Dict[str, Any]:
        if self._url is None:
            raise RuntimeError("evaluate() called before navigate()")
        return extractor.from_html(self._html or "", self._url)

    async def close(self) -> None:
        self._html = None


class HttpEngine:
    """Rendering engine over a single aiohttp session."""

    def __init__(self, user_agent: str = "LLMSScoutBot/1.0", retry_times: int = 1) -> None:
        self.user_agent = user_agent
        self.retry_times = retry_times
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> HttpEngine:
        self.session = ClientSession(
            headers={"User-Agent": self.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    async def new_page(self) -> HttpPage:
        if not self.session:
            raise RuntimeError("Session not initialized")
        return HttpPage(self.session, self.retry_times)
