# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Dict, List, Union

import pytest
from aiohttp import web

from lead_miner.config import MinerConfig
from lead_miner.logger import configure
from lead_miner.crawler.models import PageData
from lead_miner.exceptions import HttpStatusError


class FakeFetcher:
    """In-memory PageFetcher: URL -> markup, or an exception to raise. Unknown URLs give 404."""

    def __init__(self, pages: Dict[str, Union[str, BaseException]]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> PageData:
        self.calls.append(url)
        outcome = self.pages.get(url)
        if outcome is None:
            raise HttpStatusError(url, 404, "Not Found")
        if isinstance(outcome, BaseException):
            raise outcome
        return PageData(url=url, content=outcome)


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def fake_fetcher_factory():
    return FakeFetcher


@pytest.fixture()
def basic_config() -> MinerConfig:
    """
    Return a MinerConfig suitable for local test servers (no caching).
    """
    return MinerConfig(
        user_agent="TestAgent/1.0",
        timeout=5.0,
        cache_ttl=0,
    )


@pytest.fixture()
def contact_page_html() -> str:
    """
    Provide a simple page with one email, one phone and a few links.
    """
    return (
        "<html><head><title>Acme</title>"
        '<meta name="description" content="Reach Jane Doe at sales@acme.test">'
        "</head><body>"
        "<nav><a href=\"/about\">About</a></nav>"
        "<p>Contact: jane@acme.com or 415-555-0199</p>"
        '<a href="/team">Team</a><a href="https://other.test/x">X</a>'
        "<script>var spam = 'hidden@script.test';</script>"
        "</body></html>"
    )


@pytest.fixture()
def app_server():
    """Expose :func:`serve_app` to test modules."""
    return serve_app


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests reconfigure the project logger onto CliRunner streams; restore it."""
    yield
    configure()
