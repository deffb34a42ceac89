"""
Same-host link collection for LeadMiner deep scans.
"""
from __future__ import annotations

from typing import Iterable, List, Union
from urllib.parse import urljoin

from lead_miner.logger import get_logger
from lead_miner.parser.html_parser import ParsedPage, parse_html
from lead_miner.utils import is_same_host, normalize_url

logger = get_logger("links")

_SKIPPED_PREFIXES = ("mailto:", "tel:", "javascript:")


def _resolve(hrefs: Iterable[str], page_url: str, allowed_hostname: str) -> List[str]:
    links: dict[str, None] = {}
    for href in hrefs:
        raw = href.strip()
        if not raw or raw.lower().startswith(_SKIPPED_PREFIXES):
            continue
        try:
            absolute = urljoin(page_url, raw)
            if not is_same_host(absolute, allowed_hostname):
                continue
            links.setdefault(normalize_url(absolute), None)
        except ValueError as exc:
            logger.debug("Skipping malformed href %r on %s: %s", raw, page_url, exc)
    return list(links)


def collect_links(
    page: Union[str, ParsedPage], page_url: str, allowed_hostname: str
) -> List[str]:
    """
    Return normalized absolute URLs of every anchor on the page whose hostname
    equals *allowed_hostname* exactly.

    *page* is raw markup or an already parsed page. Query strings and
    fragments are stripped, duplicates collapse, malformed hrefs are skipped.
    """
    parsed = page if isinstance(page, ParsedPage) else parse_html(page, page_url)
    return _resolve(parsed.hrefs, page_url, allowed_hostname)
