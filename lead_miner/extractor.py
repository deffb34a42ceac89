# File: lead_miner/extractor.py
"""lead_miner.extractor: pattern-based extraction of emails, NANP phone numbers and name candidates.

Matching is purely syntactic: nothing here checks that an address exists or
that a number is in service.
"""

from __future__ import annotations

import re
from typing import List, Pattern, Sequence

from lead_miner.crawler.models import PageResult

__all__: Sequence[str] = (
    "EMAIL_RE",
    "PHONE_RE",
    "NAME_RE",
    "BOILERPLATE_PHRASES",
    "extract",
    "find_emails",
    "find_phones",
    "find_names",
    "is_boilerplate",
)

EMAIL_RE: Pattern[str] = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

_AREA = r"[2-9]1[02-9]|[2-9][02-8]1|[2-9][02-8][02-9]"
_EXCHANGE = r"[2-9]1[02-9]|[2-9][02-9]1|[2-9][02-9]{2}"
_SEP = r"\s*(?:[.-]\s*)?"

PHONE_RE: Pattern[str] = re.compile(
    r"(?<![\d+.-])"
    rf"(?:(?:\+?1{_SEP})?(?:\(\s*(?:{_AREA})\s*\)|(?:{_AREA})){_SEP})?"
    rf"(?:{_EXCHANGE}){_SEP}[0-9]{{4}}"
    r"(?:\s*(?:#|x\.?|ext\.?|extension)\s*\d+)?"
    r"(?!\d)"
)

NAME_RE: Pattern[str] = re.compile(r"\b[A-Z][a-z']{2,}\s+[A-Z][a-z']{2,}\b")

BOILERPLATE_PHRASES: Sequence[str] = (
    "Privacy Policy",
    "Terms Of Service",
    "Contact Us",
    "About Us",
    "All Rights Reserved",
    "Cookie Policy",
    "Terms And Conditions",
    "Return Policy",
    "Shipping Policy",
)
_BOILERPLATE_LOWER = tuple(phrase.lower() for phrase in BOILERPLATE_PHRASES)


def _unique_matches(pattern: Pattern[str], text: str) -> List[str]:
    return list(dict.fromkeys(m.group(0) for m in pattern.finditer(text)))


def find_emails(text: str) -> List[str]:
    return _unique_matches(EMAIL_RE, text)


def find_phones(text: str) -> List[str]:
    return _unique_matches(PHONE_RE, text)


def is_boilerplate(candidate: str) -> bool:
    """True when *candidate* contains a denylisted phrase, ignoring case."""
    lowered = candidate.lower()
    return any(phrase in lowered for phrase in _BOILERPLATE_LOWER)


def find_names(text: str) -> List[str]:
    """Two consecutive capitalized words, minus boilerplate phrases."""
    return [n for n in _unique_matches(NAME_RE, text) if not is_boilerplate(n)]


def extract(text: str) -> PageResult:
    """Runs all matchers over *text*; never raises, empty input gives empty lists."""
    if not text:
        return PageResult()
    return PageResult(
        emails=find_emails(text),
        phones=find_phones(text),
        names=find_names(text),
    )
