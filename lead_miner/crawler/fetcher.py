# lead_miner/crawler/fetcher.py
"""
Fetcher module: browser-like HTTP GET with a freshness cache and typed failures.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from lead_miner.config import MinerConfig
from lead_miner.crawler.cache import ResponseCache
from lead_miner.crawler.models import PageData
from lead_miner.exceptions import HttpStatusError, TransportError
from lead_miner.logger import get_logger
from lead_miner.utils import ensure_scheme

logger = get_logger("fetcher")


class Fetcher:
    """Fetches pages over one aiohttp session; no retries, no rate limiting."""

    def __init__(
        self,
        config: MinerConfig,
        cache: Optional[ResponseCache] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.config = config
        self.cache = cache if cache is not None else ResponseCache(config.cache_ttl)
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers=self.config.request_headers(),
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* (``https://`` is assumed when no scheme is given).

        Returns PageData for 2xx responses; raises HttpStatusError for any
        other status and TransportError for network, DNS and timeout failures.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        url = ensure_scheme(url)

        cached = self.cache.get(url)
        if cached is not None:
            logger.debug("Cache hit: %s", url)
            return cached

        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise HttpStatusError(url, resp.status, resp.reason)
                text = await resp.text(errors="replace")
                page = PageData(url=str(resp.url), content=text, status=resp.status)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(url, exc) from exc

        self.cache.put(url, page)
        logger.debug("Fetched %s (%d, %d chars)", url, page.status, len(page.content))
        return page
