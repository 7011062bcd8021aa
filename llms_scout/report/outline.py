# File: llms_scout/report/outline.py
"""llms_scout.report.outline: черновик llms.txt по пакету страниц с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jinja2 import Environment, PackageLoader, StrictUndefined

_TEMPLATE = "llms_outline.md.j2"


class OutlineGenerator:
    """Рендерит markdown-оглавление в формате llms.txt без обращения к ИИ.

    Args:
        company_name: заголовок H1; по умолчанию заголовок первой страницы.
        description: текст цитаты; по умолчанию meta description первой страницы.
        out_dir: если задан, каждый пакет дополнительно сохраняется в ``llms-0001.md``.

    Пример:
    ```python
    generator = OutlineGenerator("Example", "Example builds widgets")
    text = await generator.generate(batch.to_payload())
    ```
    """

    def __init__(
        self,
        company_name: str = "",
        description: str = "",
        out_dir: Optional[Union[Path, str]] = None,
    ) -> None:
        self.company_name = company_name
        self.description = description
        self.out_dir = Path(out_dir) if out_dir else None
        self.env = Environment(
            loader=PackageLoader("llms_scout", "templates"),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def render(self, batch_payload: Dict[str, Any]) -> str:
        pages: List[Dict[str, Any]] = list(batch_payload.get("pages", []))
        first = pages[0] if pages else {}
        context: Dict[str, Any] = {
            "company_name": self.company_name or first.get("title") or "Website",
            "summary": self.description or first.get("meta_description") or "",
            "docs": [p for p in pages if p.get("is_documentation")],
            "others": [p for p in pages if not p.get("is_documentation")],
        }
        return self.env.get_template(_TEMPLATE).render(**context)

    async def generate(self, batch_payload: Dict[str, Any]) -> str:
        text = self.render(batch_payload)
        if self.out_dir is not None:
            self.out_dir.mkdir(parents=True, exist_ok=True)
            index = int(batch_payload.get("batch", 0))
            (self.out_dir / f"llms-{index:04d}.md").write_text(text, encoding="utf-8")
        return text
