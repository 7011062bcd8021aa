# File: llms_scout/errors.py
"""llms_scout.errors: исключения уровня всего обхода.

Ошибки отдельных страниц сюда не попадают: они гасятся в PageVisitor
и учитываются только в счётчиках CrawlStats.
"""

from __future__ import annotations

__all__ = ["ScoutError", "SeedFetchError", "EngineError", "describe_failure"]


class ScoutError(Exception):
    """Базовое исключение LLMSScout."""


class SeedFetchError(ScoutError):
    """Стартовый URL не удалось загрузить: обход невозможен."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        super().__init__(describe_failure(url, reason))


class EngineError(ScoutError):
    """Движок рендеринга не удалось запустить (например, не установлен браузер)."""


def describe_failure(url: str, reason: str) -> str:
    """Человекочитаемое сообщение о недоступности сайта."""
    text = reason or ""
    if "ERR_NAME_NOT_RESOLVED" in text or "Name or service not known" in text or "ENOTFOUND" in text:
        return f"Unable to access the website at {url}. Please verify the URL is correct and the website is online."
    if "TIMED_OUT" in text or "Timeout" in text or "timed out" in text:
        return f"Connection to {url} timed out. The website may be slow or unavailable."
    if text.startswith("HTTP "):
        return f"Could not load {url}: {text}"
    if text:
        return f"Error crawling website {url}: {text}"
    return f"Could not extract any content from {url}. Please check the URL and ensure the website is accessible."
