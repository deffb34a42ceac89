"""
Data models for the LeadMiner crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Protocol

if TYPE_CHECKING:
    from lead_miner.aggregator import AggregateResult
    from lead_miner.exceptions import ScrapeError


@dataclass(frozen=True, slots=True)
class ScrapeRequest:
    """Input to one crawl: where to start and whether to follow same-host links."""

    target_url: str
    deep_scan: bool = False


@dataclass(slots=True)
class PageData:
    """Holds the final URL, HTTP status and markup of a fetched page."""

    url: str
    content: str
    status: int = 200


@dataclass(slots=True)
class PageResult:
    """Fields extracted from a single page; ``links`` is set only for deep scans."""

    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    links: Optional[List[str]] = None


class CrawlStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(slots=True)
class CrawlProgress:
    discovered: int
    completed: int
    current_url: Optional[str]
    started_at: float

    def copy(self) -> CrawlProgress:
        return replace(self)


@dataclass(slots=True)
class CrawlSnapshot:
    """State of a crawl as reported after one page has been processed."""

    status: CrawlStatus
    data: AggregateResult
    progress: CrawlProgress
    links: Optional[List[str]] = None
    eta_seconds: Optional[float] = None
    error: Optional[ScrapeError] = None

    @property
    def finished(self) -> bool:
        return self.status in (CrawlStatus.COMPLETED, CrawlStatus.ABORTED)


class PageFetcher(Protocol):
    """Anything that turns a URL into a fetched page or raises a ScrapeError."""

    async def fetch(self, url: str) -> PageData:
        ...
