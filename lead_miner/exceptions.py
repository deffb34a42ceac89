"""Error taxonomy for LeadMiner scrapes.

Every failure a caller can observe is a :class:`ScrapeError`. ``kind`` tells
the category, ``user_message`` is the text placed in ``ScrapeResponse.error``
and ``str(exc)`` keeps the technical context (URL, status, original error)
for logs.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

__all__ = (
    "ErrorKind",
    "ScrapeError",
    "MissingInputError",
    "TransportError",
    "HttpStatusError",
    "UnknownScrapeError",
)


class ErrorKind(str, Enum):
    MISSING_INPUT = "missing_input"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    UNKNOWN = "unknown"


class ScrapeError(Exception):
    """Base class for all scrape failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        self.url = url
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return str(self)


class MissingInputError(ScrapeError):
    """Raised when a request carries no target URL."""

    kind = ErrorKind.MISSING_INPUT

    def __init__(self) -> None:
        super().__init__("URL is required.")


class TransportError(ScrapeError):
    """Raised when a page cannot be fetched because of network/DNS/connection errors."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, url: str, original: BaseException) -> None:
        self.original = original
        super().__init__(f"Transport failure for {url}: {original!r}", url)

    @property
    def user_message(self) -> str:
        return (
            f"Failed to fetch {self.url}. This could be due to network issues, a typo in the URL, "
            "or the website blocking requests. Please verify the URL and your connection."
        )


class HttpStatusError(ScrapeError):
    """Raised when the server answers with a non-2xx status."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, url: str, status: int, reason: Optional[str] = None) -> None:
        self.status = status
        self.reason = reason or ""
        super().__init__(f"HTTP {status} {self.reason} for {url}".replace("  ", " "), url)

    @property
    def user_message(self) -> str:
        status_text = f"{self.status} {self.reason}".strip()
        return f"Failed to fetch {self.url}. Status: {status_text}. Please check the URL and try again."


class UnknownScrapeError(ScrapeError):
    """Wraps any uncategorized failure raised while fetching a page."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, url: Optional[str], original: BaseException) -> None:
        self.original = original
        super().__init__(f"Unexpected failure for {url}: {original!r}", url)

    @property
    def user_message(self) -> str:
        detail = str(self.original)
        if detail:
            return f"An error occurred: {detail}"
        return "An unknown error occurred during scraping."
