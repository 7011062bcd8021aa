# llms_scout/report/json_report.py

"""
Запись JSON для проекта LLMSScout.

Сериализация итогового CrawlResult и отдельных пакетов страниц в файлы.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

from llms_scout.crawler.models import CrawlResult


def render_json(result: Union[CrawlResult, Dict[str, Any]], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет результат обхода в формате JSON по указанному пути.

    :param result: объект CrawlResult (или уже готовый словарь)
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from llms_scout.report.json_report import render_json
    report_path = render_json(result, 'reports/crawl.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = result.to_dict() if isinstance(result, CrawlResult) else result

    # Запись в файл с отступами и Unicode
    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output


class JsonBatchWriter:
    """Генератор-заглушка: пишет каждый пакет в ``batch-0001.json`` и возвращает путь."""

    def __init__(self, out_dir: Path | str) -> None:
        self.out_dir = Path(out_dir)

    async def generate(self, batch_payload: Dict[str, Any]) -> str:
        index = int(batch_payload.get("batch", 0))
        path = render_json(batch_payload, self.out_dir / f"batch-{index:04d}.json")
        return str(path)
