# File: lead_miner/engine.py
"""lead_miner.engine: Orchestration layer для запуска сбора контактов и формирования ответа."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from lead_miner.aggregator import ScrapeResponse
from lead_miner.config import MinerConfig, load_config
from lead_miner.crawler.cache import ResponseCache
from lead_miner.crawler.crawler import ContactCrawler
from lead_miner.crawler.fetcher import Fetcher
from lead_miner.crawler.models import CrawlSnapshot, ScrapeRequest
from lead_miner.exceptions import MissingInputError
from lead_miner.logger import get_logger

__all__ = ["Engine", "start_scan"]

logger = get_logger("engine")

SnapshotCallback = Callable[[CrawlSnapshot], None]


async def start_scan(
    request: ScrapeRequest,
    config: MinerConfig,
    on_snapshot: Optional[SnapshotCallback] = None,
    cache: Optional[ResponseCache] = None,
) -> ScrapeResponse:
    """
    Запускает обход и возвращает итоговый ScrapeResponse.

    on_snapshot вызывается после каждой обработанной страницы; так вызывающий
    код видит промежуточные результаты глубокого сканирования.
    """
    if not request.target_url or not request.target_url.strip():
        error = MissingInputError()
        logger.warning("Rejected request: %s", error)
        return ScrapeResponse.from_error(error)

    last: Optional[CrawlSnapshot] = None
    async with Fetcher(config, cache=cache) as fetcher:
        async for snapshot in ContactCrawler(fetcher).crawl(request):
            if on_snapshot is not None:
                on_snapshot(snapshot)
            last = snapshot
    if last is None:
        raise RuntimeError(f"Crawl of {request.target_url!r} produced no snapshot")
    return ScrapeResponse.from_snapshot(last)


class Engine:
    """Фасад для CLI и тестов: конфиг, общий кэш страниц и синхронный запуск."""

    @staticmethod
    def load_config(path: Optional[str]) -> MinerConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(self, config: Optional[MinerConfig] = None) -> None:
        self.config = config or MinerConfig()
        self.cache = ResponseCache(self.config.cache_ttl)

    def scrape(
        self, request: ScrapeRequest, on_snapshot: Optional[SnapshotCallback] = None
    ) -> ScrapeResponse:
        """Выполняет один запрос синхронно; кэш переживает вызовы в рамках процесса."""
        return asyncio.run(start_scan(request, self.config, on_snapshot, self.cache))
