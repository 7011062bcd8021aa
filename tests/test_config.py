# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from llms_scout.config import CrawlConfig, ScoringProfile, load_config, read_config_file


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seed_url: https://example.com\nengine: http", ".yaml", None),
        (json.dumps({"seed_url": "https://example.com", "engine": "http"}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ('{"seed_url": ', ".json", ValueError),
        ("seed_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlConfig)
        assert cfg.seed == "https://example.com"
        assert cfg.engine == "http"


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_default_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "seed_url: https://acme.io\nmax_pages: 7\n", encoding="utf-8"
    )
    cfg = load_config(None)
    assert cfg.seed == "https://acme.io"
    assert cfg.max_pages == 7


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_config_file(tmp_path / "nope.yaml")


def test_overrides_take_precedence(tmp_path):
    cfg_path = write_file(tmp_path, "seed_url: https://example.com\nmax_pages: 10\n", ".yaml")
    cfg = load_config(cfg_path, max_pages=3, engine=None)
    assert cfg.max_pages == 3
    assert cfg.engine == "playwright"


def test_defaults():
    cfg = CrawlConfig(seed_url="https://example.com")
    assert cfg.max_depth == 3
    assert cfg.max_pages == 25
    assert cfg.concurrency == 3
    assert cfg.batch_size == 5
    assert cfg.retry_failed == 0
    assert cfg.crawl_timeout is None
    assert cfg.scoring == ScoringProfile()
    assert cfg.scoring.topics["legal"] == 9


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("example.com", "https://example.com"),
        ("  https://example.com/  ", "https://example.com"),
        ("http://example.com/docs/", "http://example.com/docs"),
        ("  acme.io/pricing/ ", "https://acme.io/pricing"),
    ],
)
def test_seed_url_normalisation(raw, expected):
    assert CrawlConfig(seed_url=raw).seed == expected


@pytest.mark.parametrize(
    "field,value",
    [
        ("concurrency", 0),
        ("concurrency", 11),
        ("batch_size", 0),
        ("max_pages", 0),
        ("max_depth", -1),
        ("page_timeout", 0),
        ("engine", "selenium"),
        ("unknown_option", 1),
    ],
)
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        CrawlConfig(seed_url="https://example.com", **{field: value})


def test_crawl_timeout_shorter_than_page_timeout():
    with pytest.raises(ValidationError):
        CrawlConfig(seed_url="https://example.com", page_timeout=30, crawl_timeout=10)


def test_config_is_frozen():
    cfg = CrawlConfig(seed_url="https://example.com")
    with pytest.raises(ValidationError):
        cfg.max_pages = 100
