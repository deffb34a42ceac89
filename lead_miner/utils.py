# File: lead_miner/utils.py
"""lead_miner.utils: URL helpers shared by the fetcher, the link collector and the crawler."""

from __future__ import annotations

from typing import Collection, List, Optional, Sequence
from urllib.parse import urlparse, urlunparse

from lead_miner.logger import get_logger

__all__: Sequence[str] = (
    "ensure_scheme",
    "normalize_url",
    "extract_hostname",
    "is_same_host",
    "remove_duplicates",
)

logger = get_logger("utils")

_HTTP_SCHEMES = ("http://", "https://")


def ensure_scheme(url: str) -> str:
    """Prefixes ``https://`` when the URL carries no http(s) scheme."""
    url = url.strip()
    if not url.lower().startswith(_HTTP_SCHEMES):
        url = f"https://{url}"
    return url


def normalize_url(url: str) -> str:
    """Drops query string and fragment; the result is the identity key of a page.

    An empty path becomes ``/`` so ``https://a.example`` and ``https://a.example/``
    share one key.
    """
    parsed = urlparse(url)
    path = parsed.path or "/"
    normalized = urlunparse((parsed.scheme, parsed.netloc, path, parsed.params, "", ""))
    logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def extract_hostname(url: str) -> Optional[str]:
    """Returns the lower-cased hostname of *url* (port excluded) or None."""
    return urlparse(url).hostname


def is_same_host(url: str, hostname: str) -> bool:
    """Checks that *url* is http(s) and its hostname equals *hostname* exactly."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and parsed.hostname == hostname.lower()


def remove_duplicates(items: Collection[str]) -> List[str]:
    """Removes duplicates, keeping first-seen order."""
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicates", removed)
    return unique
