# === FILE: lead_miner/crawler/crawler.py ===
from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, Deque, List, Optional, Set

from lead_miner.aggregator import AggregateResult
from lead_miner.crawler.link_extractor import collect_links
from lead_miner.crawler.models import (
    CrawlProgress,
    CrawlSnapshot,
    CrawlStatus,
    PageData,
    PageFetcher,
    PageResult,
    ScrapeRequest,
)
from lead_miner.exceptions import MissingInputError, ScrapeError, UnknownScrapeError
from lead_miner.extractor import extract
from lead_miner.logger import get_logger
from lead_miner.parser.html_parser import parse_html
from lead_miner.progress import estimate_remaining
from lead_miner.utils import ensure_scheme, extract_hostname, normalize_url

__all__ = ("CrawlState", "ContactCrawler", "process_page")

logger = get_logger("crawler")


@dataclass(slots=True)
class CrawlState:
    """Everything one crawl owns. Created per call to :meth:`ContactCrawler.crawl`."""

    visited: Set[str]
    frontier: Deque[str]
    progress: CrawlProgress
    aggregate: AggregateResult = field(default_factory=AggregateResult)
    discovered_urls: List[str] = field(default_factory=list)
    status: CrawlStatus = CrawlStatus.IDLE
    terminal_error: Optional[ScrapeError] = None

    @classmethod
    def start(cls, target_url: str, now: float) -> CrawlState:
        return cls(
            visited={target_url, normalize_url(target_url)},
            frontier=deque([target_url]),
            progress=CrawlProgress(discovered=1, completed=0, current_url=None, started_at=now),
            discovered_urls=[target_url],
            status=CrawlStatus.RUNNING,
        )

    def enqueue(self, url: str) -> bool:
        """Adds *url* to the frontier unless it was seen before."""
        if url in self.visited:
            return False
        self.visited.add(url)
        self.frontier.append(url)
        self.discovered_urls.append(url)
        self.progress.discovered += 1
        return True

    def finish(self, status: CrawlStatus, error: Optional[ScrapeError] = None) -> None:
        self.status = status
        if error is not None:
            self.terminal_error = error
        else:
            self.progress.current_url = None

    def snapshot(self, include_links: bool, now: float) -> CrawlSnapshot:
        progress = self.progress.copy()
        return CrawlSnapshot(
            status=self.status,
            data=self.aggregate.copy().dedupe(),
            progress=progress,
            links=list(self.discovered_urls) if include_links else None,
            eta_seconds=estimate_remaining(
                progress.started_at, progress.completed, progress.discovered, now
            ),
            error=self.terminal_error,
        )


def process_page(page: PageData, allowed_hostname: str, deep_scan: bool) -> PageResult:
    """Extracts contact fields from one fetched page and, for deep scans, its same-host links."""
    parsed = parse_html(page)
    result = extract(parsed.searchable_text())
    if deep_scan:
        result.links = collect_links(parsed, page.url, allowed_hostname)
    return result


class ContactCrawler:
    """Breadth-first, strictly sequential crawl that stops at the first fetch failure."""

    def __init__(self, fetcher: PageFetcher, clock: Callable[[], float] = time.monotonic) -> None:
        self.fetcher = fetcher
        self._clock = clock

    @staticmethod
    def _target(request: ScrapeRequest) -> str:
        if not request.target_url or not request.target_url.strip():
            raise MissingInputError()
        return ensure_scheme(request.target_url)

    async def crawl(self, request: ScrapeRequest) -> AsyncIterator[CrawlSnapshot]:
        """Yield a snapshot after every processed page.

        The last snapshot is either COMPLETED (frontier exhausted) or ABORTED
        (a fetch failed; the error is attached and the aggregate holds only
        pages fetched before it). MissingInputError is raised before any fetch.
        """
        target = self._target(request)
        try:
            allowed_hostname = extract_hostname(target) or ""
        except ValueError:
            allowed_hostname = ""
        state = CrawlState.start(target, self._clock())
        logger.info("Crawl started: %s (deep=%s)", target, request.deep_scan)

        while state.frontier and state.terminal_error is None:
            url = state.frontier.popleft()
            state.progress.current_url = url
            state.progress.completed += 1

            error: Optional[ScrapeError] = None
            try:
                page = await self.fetcher.fetch(url)
            except ScrapeError as exc:
                error = exc
            except Exception as exc:
                error = UnknownScrapeError(url, exc)

            if error is not None:
                state.finish(CrawlStatus.ABORTED, error)
                logger.warning("Crawl aborted at %s: %s", url, error)
                yield state.snapshot(request.deep_scan, self._clock())
                return

            result = process_page(page, allowed_hostname, request.deep_scan)
            state.aggregate.merge(result)
            for link in result.links or ():
                state.enqueue(link)
            logger.debug(
                "Processed %s: %d emails, %d phones, %d names, %d links",
                url, len(result.emails), len(result.phones), len(result.names),
                len(result.links or ()),
            )

            if not state.frontier:
                state.finish(CrawlStatus.COMPLETED)
                logger.info(
                    "Crawl finished: %d pages, %d emails, %d phones, %d names",
                    state.progress.completed, len(state.aggregate.emails),
                    len(state.aggregate.phones), len(state.aggregate.names),
                )
            yield state.snapshot(request.deep_scan, self._clock())

    async def run(self, request: ScrapeRequest) -> CrawlSnapshot:
        """Drive :meth:`crawl` to the end and return its final snapshot."""
        last: Optional[CrawlSnapshot] = None
        async for snapshot in self.crawl(request):
            last = snapshot
        if last is None:
            raise RuntimeError(f"Crawl of {request.target_url!r} produced no snapshot")
        return last
