"""HTML parsing utilities for LeadMiner.

:func:`parse_html` turns raw markup into a :class:`ParsedPage` exposing just
what the extractor and the link collector need:

* title: document <title> text or ``""`` if absent.
* text: visible body text with layout chrome (header/footer/nav) and
  non-content elements removed, whitespace collapsed.
* meta: ``description`` and ``keywords`` <meta> values when present.
* hrefs: raw ``href`` values of every <a> tag, in document order.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("ParsedPage", "parse_html")

_NON_CONTENT_TAGS = ("script", "style", "noscript", "svg", "header", "footer", "nav")
_META_FIELDS = ("description", "keywords")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(slots=True)
class ParsedPage:
    """Lightweight representation of an HTML page."""

    url: str
    title: str
    text: str
    meta: dict[str, str] = field(default_factory=dict)
    hrefs: list[str] = field(default_factory=list)

    def searchable_text(self) -> str:
        """Visible text followed by description/keywords metadata."""
        parts = [self.text] + [self.meta[name] for name in _META_FIELDS if self.meta.get(name)]
        return " ".join(p for p in parts if p)


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _meta_values(soup: BeautifulSoup) -> dict[str, str]:
    meta: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        if not isinstance(tag, Tag):
            continue
        name = tag.get("name")
        content = tag.get("content")
        if not isinstance(name, str) or not isinstance(content, str):
            continue
        key = name.strip().lower()
        if key in _META_FIELDS and key not in meta:
            meta[key] = _collapse(content)
    return meta


def parse_html(page: Any, url: str = "") -> ParsedPage:
    """Parse raw HTML (string) or :class:`~lead_miner.crawler.models.PageData`.

    Parameters
    ----------
    page
        Either a *str* (HTML markup) **or** a ``PageData`` object with
        ``url`` and ``content`` attributes.
    url
        Page URL used when *page* is plain markup.
    """
    if hasattr(page, "content") and hasattr(page, "url"):
        html = page.content
        url = str(page.url)
    else:
        html = str(page)

    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""
    meta = _meta_values(soup)

    hrefs: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str):
            hrefs.append(href)

    # Visible text only; links were collected above, before chrome is removed
    for element in soup(list(_NON_CONTENT_TAGS)):
        element.decompose()
    body = soup.body or soup
    text = _collapse(" ".join(body.stripped_strings))

    return ParsedPage(url=url, title=title, text=text, meta=meta, hrefs=hrefs)
