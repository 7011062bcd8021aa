# File: llms_scout/engines/__init__.py
"""llms_scout.engines: движки загрузки страниц (headless-браузер и HTTP)."""

from __future__ import annotations

from llms_scout.config import CrawlConfig
from llms_scout.engines.base import EnginePage, RenderingEngine
from llms_scout.engines.extractor import DEFAULT_EXTRACTOR, Extractor
from llms_scout.engines.http import HttpEngine

__all__ = [
    "EnginePage",
    "RenderingEngine",
    "Extractor",
    "DEFAULT_EXTRACTOR",
    "HttpEngine",
    "build_engine",
]


def build_engine(config: CrawlConfig) -> RenderingEngine:
    """Создаёт движок, выбранный в конфигурации."""
    if config.engine == "http":
        return HttpEngine(user_agent=config.user_agent, retry_times=config.retry_times)
    # импорт по требованию: Playwright тянет драйвер браузера
    from llms_scout.engines.playwright import PlaywrightEngine

    return PlaywrightEngine(headless=config.headless, user_agent=config.user_agent)
