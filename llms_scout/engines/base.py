# llms_scout/engines/base.py
"""
Contracts the crawler expects from a rendering engine.

An engine is an async context manager owning the expensive handle
(browser, HTTP session); pages are cheap and closed after each visit.
"""
from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable

from llms_scout.crawler.models import NavigationResult
from llms_scout.engines.extractor import Extractor

__all__ = ("EnginePage", "RenderingEngine")


@runtime_checkable
class EnginePage(Protocol):
    async def navigate(self, url: str, timeout: float) -> NavigationResult:
        """Load *url*; ``timeout`` is in seconds."""
        ...

    async def evaluate(self, extractor: Extractor) -> Dict[str, Any]:
        """Run *extractor* against the loaded document."""
        ...

    async def close(self) -> None:
        ...


@runtime_checkable
class RenderingEngine(Protocol):
    async def __aenter__(self) -> "RenderingEngine":
        ...

    async def __aexit__(self, exc_type, exc, tb) -> None:
        ...

    async def new_page(self) -> EnginePage:
        ...
