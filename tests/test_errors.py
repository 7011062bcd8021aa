# File: tests/test_errors.py
import pytest

from llms_scout.config import CrawlConfig
from llms_scout.engines import HttpEngine, build_engine
from llms_scout.errors import ScoutError, SeedFetchError, describe_failure

URL = "https://example.com"


@pytest.mark.parametrize(
    "reason,fragment",
    [
        ("net::ERR_NAME_NOT_RESOLVED", "verify the URL"),
        ("Cannot connect: Name or service not known", "verify the URL"),
        ("TimeoutError: Timeout 30s exceeded", "timed out"),
        ("HTTP 503", "Could not load https://example.com: HTTP 503"),
        ("ConnectionResetError: reset", "Error crawling website"),
        ("", "Could not extract any content"),
    ],
)
def test_describe_failure(reason, fragment):
    assert fragment in describe_failure(URL, reason)


def test_seed_fetch_error_keeps_details():
    err = SeedFetchError(URL, "HTTP 404")
    assert isinstance(err, ScoutError)
    assert err.url == URL
    assert err.reason == "HTTP 404"
    assert "HTTP 404" in str(err)


def test_build_http_engine():
    cfg = CrawlConfig(seed_url=URL, engine="http", user_agent="Agent/2", retry_times=4)
    engine = build_engine(cfg)
    assert isinstance(engine, HttpEngine)
    assert engine.user_agent == "Agent/2"
    assert engine.retry_times == 4
    assert engine.session is None


def test_build_playwright_engine_is_lazy():
    pytest.importorskip("playwright")
    from llms_scout.engines.playwright import PlaywrightEngine

    engine = build_engine(CrawlConfig(seed_url=URL, headless=False))
    assert isinstance(engine, PlaywrightEngine)
    assert engine.headless is False
