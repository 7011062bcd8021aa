# File: llms_scout/dispatcher.py
"""llms_scout.dispatcher: накопление страниц в пакеты фиксированного размера и их отправка генератору."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, Set

from llms_scout.crawler.models import Batch, PageRecord
from llms_scout.report import BatchGenerator

__all__ = ["BatchDispatcher"]


class BatchDispatcher:
    """Собирает PageRecord в открытый пакет и отдаёт его генератору при достижении ``batch_size``.

    При ``concurrent=True`` генерация идёт фоновыми задачами и не блокирует обход;
    ``close()`` дожидается их завершения. Ошибки генератора логируются и
    складываются в ``errors``, обход они не прерывают.
    """

    def __init__(self, generator: BatchGenerator, batch_size: int, concurrent: bool = False) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.generator = generator
        self.batch_size = batch_size
        self.concurrent = concurrent
        self.logger = logging.getLogger("LLMSScout.dispatcher")
        self.open_batch: List[PageRecord] = []
        self.batches: List[Batch] = []
        self.outputs: List[Optional[str]] = []
        self.errors: List[str] = []
        self._seen: Set[str] = set()
        self._tasks: Set[asyncio.Task] = set()

    async def accept(self, pages: Iterable[PageRecord]) -> None:
        """Добавляет страницы в открытый пакет; повторный URL игнорируется."""
        for page in pages:
            if page.url in self._seen:
                self.logger.debug("Duplicate page ignored: %s", page.url)
                continue
            self._seen.add(page.url)
            self.open_batch.append(page)
            if len(self.open_batch) >= self.batch_size:
                await self._emit_open()

    async def flush(self) -> None:
        """Отправляет неполный пакет, если он не пуст."""
        if self.open_batch:
            await self._emit_open()

    async def close(self) -> None:
        """Дожидается фоновых генераций."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def cancel(self) -> None:
        """Отменяет незавершённые фоновые генерации (обход прерван)."""
        pending = [task for task in self._tasks if not task.done()]
        if not pending:
            return
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self.logger.warning("Cancelled %d pending batch generation(s)", len(pending))

    async def _emit_open(self) -> None:
        batch = Batch(index=len(self.batches) + 1, pages=tuple(self.open_batch))
        self.open_batch.clear()
        self.batches.append(batch)
        self.outputs.append(None)
        self.logger.info("Emitting batch %d (%d pages)", batch.index, len(batch))
        if self.concurrent:
            task = asyncio.create_task(self.emit(batch))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        else:
            await self.emit(batch)

    async def emit(self, batch: Batch) -> None:
        try:
            text = await self.generator.generate(batch.to_payload())
        except Exception as exc:
            message = f"batch {batch.index}: {type(exc).__name__}: {exc}"
            self.logger.error("Generation failed for %s", message)
            self.errors.append(message)
            return
        self.outputs[batch.index - 1] = text

    @property
    def generated(self) -> List[str]:
        """Тексты успешно сгенерированных пакетов в порядке отправки."""
        return [text for text in self.outputs if text is not None]
