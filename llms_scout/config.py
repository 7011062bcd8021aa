# === FILE: llms_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера LLMSScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

__all__ = ["ScoringProfile", "CrawlConfig", "load_config", "DEFAULT_CONFIG_PATH"]


class ScoringProfile(BaseModel):
    """Веса для приоритизации ссылок. Значения подобраны вручную и могут переопределяться."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    documentation: int = 50
    docs_landing: int = 30
    api_mention: int = 25
    sdk_mention: int = 20
    known_docs_host: int = 40
    related_host: int = 5
    nav_origin: int = 15
    depth_penalty: int = 1

    # бонусы по темам: ключевое слово -> вес
    topics: dict[str, int] = Field(
        default_factory=lambda: {
            "about": 10,
            "company": 10,
            "team": 10,
            "product": 8,
            "feature": 7,
            "service": 8,
            "pricing": 6,
            "contact": 5,
            "blog": 4,
            "privacy": 6,
            "terms": 7,
            "legal": 9,
        }
    )


class CrawlConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: HttpUrl = Field(..., description="Стартовый URL сайта компании.")
    company_name: str = Field("", description="Название компании (для генерации).")
    company_description: str = Field("", description="Краткое описание компании.")
    engine: Literal["playwright", "http"] = Field(
        "playwright", description="Движок загрузки страниц: headless-браузер или HTTP."
    )
    max_depth: int = Field(3, ge=0, description="Максимальная глубина обхода ссылок.")
    max_pages: int = Field(25, ge=1, description="Жесткий лимит по числу успешно загруженных страниц.")
    concurrency: int = Field(3, ge=1, le=10, description="Число одновременных загрузок.")
    batch_size: int = Field(5, ge=1, description="Размер пакета страниц для генерации.")
    page_timeout: float = Field(30.0, gt=0, description="Таймаут навигации на одну страницу (секунд).")
    crawl_timeout: Optional[float] = Field(None, gt=0, description="Таймаут всего обхода (секунд).")
    user_agent: str = Field("LLMSScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(1, ge=0, description="Повторы HTTP-движка при сетевых ошибках.")
    retry_failed: int = Field(0, ge=0, description="Сколько раз вернуть упавшую страницу в очередь.")
    frontier_capacity: int = Field(1000, ge=1, description="Максимальный размер очереди ссылок.")
    max_links_per_page: int = Field(200, ge=1, description="Сколько ссылок брать с одной страницы.")
    max_body_chars: int = Field(5000, ge=100, description="Обрезка текста страницы.")
    headless: bool = Field(True, description="Запуск браузера без окна.")
    concurrent_dispatch: bool = Field(False, description="Отправлять пакеты в фоне, не блокируя обход.")
    scoring: ScoringProfile = Field(default_factory=ScoringProfile)

    @field_validator("seed_url", mode="before")
    def _ensure_scheme(cls, v: Any) -> Any:
        # импорт здесь: llms_scout.crawler сам импортирует config (ScoringProfile)
        from llms_scout.crawler.urls import ensure_scheme

        if isinstance(v, str) and v.strip():
            return ensure_scheme(v).rstrip("/")
        return v

    @model_validator(mode="after")
    def _check_timeouts(self) -> CrawlConfig:
        if self.crawl_timeout is not None and self.crawl_timeout < self.page_timeout:
            raise ValueError("crawl_timeout must not be shorter than page_timeout")
        return self

    @property
    def seed(self) -> str:
        """Стартовый URL строкой, без завершающего слеша."""
        return str(self.seed_url).rstrip("/")


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path, None]) -> dict[str, Any]:
    """Читает YAML/JSON-файл конфигурации в словарь без валидации."""
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(DEFAULT_CONFIG_PATH))
        path_obj = DEFAULT_CONFIG_PATH
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None], **overrides: Any) -> CrawlConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlConfig.
    Значения из ``overrides`` (не None) перекрывают значения из файла.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return CrawlConfig(**data)
    except ValidationError:
        raise
