# File: lead_miner/aggregator.py
"""lead_miner.aggregator: running union of extracted fields and the final scrape response."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from lead_miner.crawler.models import CrawlStatus, PageResult
from lead_miner.exceptions import ScrapeError
from lead_miner.utils import remove_duplicates

if TYPE_CHECKING:
    from lead_miner.crawler.models import CrawlSnapshot


def _union(current: List[str], incoming: Iterable[str]) -> List[str]:
    """Appends unseen items of *incoming* to *current*, keeping first-seen order."""
    seen = set(current)
    for item in incoming:
        if item not in seen:
            seen.add(item)
            current.append(item)
    return current


@dataclass(slots=True)
class AggregateResult:
    """Union of emails, phones and names over every successfully fetched page."""

    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    names: List[str] = field(default_factory=list)

    def merge(self, page: PageResult) -> AggregateResult:
        """Merges one page's fields in place; the result only ever grows."""
        _union(self.emails, page.emails)
        _union(self.phones, page.phones)
        _union(self.names, page.names)
        return self

    def dedupe(self) -> AggregateResult:
        self.emails = remove_duplicates(self.emails)
        self.phones = remove_duplicates(self.phones)
        self.names = remove_duplicates(self.names)
        return self

    def copy(self) -> AggregateResult:
        return AggregateResult(list(self.emails), list(self.phones), list(self.names))

    def is_empty(self) -> bool:
        return not (self.emails or self.phones or self.names)


@dataclass(slots=True)
class ScrapeResponse:
    """What a caller gets back from a scrape: data, error, or both after an aborted deep scan."""

    success: bool
    data: Optional[AggregateResult] = None
    links: Optional[List[str]] = None
    error: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot: CrawlSnapshot) -> ScrapeResponse:
        return cls(
            success=snapshot.status is CrawlStatus.COMPLETED,
            data=snapshot.data,
            links=snapshot.links,
            error=snapshot.error.user_message if snapshot.error else None,
        )

    @classmethod
    def from_error(cls, exc: ScrapeError) -> ScrapeResponse:
        return cls(success=False, error=exc.user_message)

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {"success": self.success}
        if self.data is not None:
            output["data"] = asdict(self.data)
            if self.links is not None:
                output["data"]["links"] = list(self.links)
        if self.error is not None:
            output["error"] = self.error
        return output

    def json(self, *, pretty: bool = False) -> str:
        """Returns the JSON representation of the response."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)
