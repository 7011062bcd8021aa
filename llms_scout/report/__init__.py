# File: llms_scout/report/__init__.py
"""llms_scout.report: получатели пакетов страниц (генераторы) и запись итогового отчёта."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

from llms_scout.report.json_report import JsonBatchWriter, render_json
from llms_scout.report.outline import OutlineGenerator


@runtime_checkable
class BatchGenerator(Protocol):
    """Внешний генератор текста: получает пакет страниц, возвращает текст."""

    async def generate(self, batch_payload: Dict[str, Any]) -> str:
        ...


class CollectingGenerator:
    """Складывает пакеты в память; используется CLI без --out-dir и тестами."""

    def __init__(self) -> None:
        self.payloads: List[Dict[str, Any]] = []

    async def generate(self, batch_payload: Dict[str, Any]) -> str:
        self.payloads.append(batch_payload)
        return f"batch {batch_payload.get('batch')}: {batch_payload.get('size')} pages"


__all__ = [
    "BatchGenerator",
    "CollectingGenerator",
    "JsonBatchWriter",
    "OutlineGenerator",
    "render_json",
]
