"""
In-memory freshness cache for fetched pages.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from lead_miner.crawler.models import PageData


@dataclass(slots=True)
class CacheEntry:
    page: PageData
    expires_at: float

    def fresh(self, now: float) -> bool:
        return self.expires_at > now


class ResponseCache:
    """Keeps successful responses for ``ttl`` seconds, keyed by requested URL.

    A ``ttl`` of zero disables caching entirely.
    """

    def __init__(self, ttl: float = 3600.0, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl < 0:
            raise ValueError("ttl must be >= 0")
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def get(self, url: str) -> Optional[PageData]:
        entry = self._entries.get(url)
        if entry is None:
            return None
        if not entry.fresh(self._clock()):
            del self._entries[url]
            return None
        return entry.page

    def put(self, url: str, page: PageData) -> None:
        """Stores *page* and drops every entry that has already expired."""
        if not self.enabled:
            return
        now = self._clock()
        self.purge(now)
        self._entries[url] = CacheEntry(page, now + self.ttl)

    def purge(self, now: Optional[float] = None) -> int:
        """Removes expired entries; returns how many were dropped."""
        if now is None:
            now = self._clock()
        stale = [url for url, entry in self._entries.items() if not entry.fresh(now)]
        for url in stale:
            del self._entries[url]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
