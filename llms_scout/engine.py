# File: llms_scout/engine.py
"""llms_scout.engine: сессия обхода и фасад для CLI и тестов."""

from __future__ import annotations

import asyncio
from typing import Optional

from llms_scout.config import CrawlConfig
from llms_scout.crawler.domains import DomainTracker
from llms_scout.crawler.frontier import CrawlFrontier
from llms_scout.crawler.models import CrawlResult, CrawlStats
from llms_scout.crawler.orchestrator import CrawlOrchestrator
from llms_scout.crawler.scoring import LinkScorer
from llms_scout.crawler.visitor import PageVisitor
from llms_scout.dispatcher import BatchDispatcher
from llms_scout.engines import RenderingEngine, build_engine
from llms_scout.engines.extractor import Extractor
from llms_scout.logger import logger
from llms_scout.report import BatchGenerator, CollectingGenerator

__all__ = ["CrawlSession", "start_crawl"]


class CrawlSession:
    """Всё изменяемое состояние одного обхода: трекер доменов, очередь, диспетчер пакетов.

    Сессии независимы друг от друга, поэтому несколько обходов можно
    запускать параллельно в одном event loop.
    """

    def __init__(
        self,
        config: CrawlConfig,
        engine: Optional[RenderingEngine] = None,
        generator: Optional[BatchGenerator] = None,
    ) -> None:
        self.config = config
        self.engine = engine if engine is not None else build_engine(config)
        self.generator = generator if generator is not None else CollectingGenerator()
        self.tracker = DomainTracker(config.seed)
        self.frontier = CrawlFrontier(
            max_depth=config.max_depth,
            max_pages=config.max_pages,
            capacity=config.frontier_capacity,
            retry_failed=config.retry_failed,
        )
        self.scorer = LinkScorer(config.scoring)
        self.dispatcher = BatchDispatcher(
            self.generator,
            batch_size=config.batch_size,
            concurrent=config.concurrent_dispatch,
        )
        self.stats = CrawlStats()
        self.visitor = PageVisitor(
            self.engine,
            self.frontier,
            self.tracker,
            timeout=config.page_timeout,
            extractor=Extractor(max_chars=config.max_body_chars),
        )

    async def run(self) -> CrawlResult:
        """Открывает движок, выполняет обход и гарантированно освобождает браузер/сессию."""
        async with self.engine:
            orchestrator = CrawlOrchestrator(self)
            try:
                if self.config.crawl_timeout:
                    return await asyncio.wait_for(orchestrator.run(), timeout=self.config.crawl_timeout)
                return await orchestrator.run()
            finally:
                # no-op after a normal run: close() has already collected every task
                await self.dispatcher.cancel()


async def start_crawl(
    config: CrawlConfig,
    generator: Optional[BatchGenerator] = None,
    engine: Optional[RenderingEngine] = None,
) -> CrawlResult:
    """Запускает обход по конфигурации и возвращает CrawlResult."""
    logger.info("Starting crawl of %s with %s engine", config.seed, config.engine)
    session = CrawlSession(config, engine=engine, generator=generator)
    try:
        result = await session.run()
    except asyncio.TimeoutError:
        logger.error("Crawl did not finish within %s seconds", config.crawl_timeout)
        raise
    except Exception as exc:
        logger.error("Crawl failed: %s", exc)
        raise
    logger.info(
        "Crawl finished: %d pages, %d batches, stats=%s",
        len(result.pages),
        len(result.batches),
        result.stats.to_dict(),
    )
    return result
