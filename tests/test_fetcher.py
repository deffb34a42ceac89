# File: tests/test_fetcher.py
from __future__ import annotations

import itertools

import pytest
import pytest_asyncio
from aiohttp import web

from lead_miner.config import MinerConfig
from lead_miner.crawler.cache import ResponseCache
from lead_miner.crawler.fetcher import Fetcher
from lead_miner.crawler.models import PageData
from lead_miner.exceptions import ErrorKind, HttpStatusError, TransportError


@pytest_asyncio.fixture
async def echo_server(unused_tcp_port: int, app_server):
    """Server that records request headers and counts hits per path."""
    app = web.Application()
    app["hits"] = {}
    app["headers"] = []

    async def handle(request: web.Request):
        path = request.path
        app["hits"][path] = app["hits"].get(path, 0) + 1
        app["headers"].append(dict(request.headers))
        if path == "/missing":
            return web.Response(status=404, text="nope")
        if path == "/boom":
            return web.Response(status=500, text="error")
        if path == "/moved":
            raise web.HTTPFound("/")
        return web.Response(text="<p>hello</p>", content_type="text/html")

    app.router.add_get("/{tail:.*}", handle)

    async for url in app_server(app, unused_tcp_port):
        yield url, app


@pytest.mark.asyncio()
async def test_sends_browser_like_headers(echo_server):
    base, app = echo_server
    config = MinerConfig(cache_ttl=0)
    async with Fetcher(config) as fetcher:
        page = await fetcher.fetch(f"{base}/")

    assert page.status == 200
    assert page.content == "<p>hello</p>"
    headers = app["headers"][0]
    assert headers["User-Agent"] == config.user_agent
    assert "Mozilla/5.0" in headers["User-Agent"]
    assert headers["Accept"] == config.accept
    assert headers["Accept-Language"] == "en-US,en;q=0.9"


@pytest.mark.asyncio()
async def test_non_2xx_raises_http_status_error(echo_server, basic_config):
    base, app = echo_server
    async with Fetcher(basic_config) as fetcher:
        with pytest.raises(HttpStatusError) as info:
            await fetcher.fetch(f"{base}/missing")

    assert info.value.status == 404
    assert info.value.reason == "Not Found"
    assert info.value.kind is ErrorKind.HTTP_STATUS
    assert info.value.url == f"{base}/missing"
    assert info.value.user_message.startswith(f"Failed to fetch {base}/missing. Status: 404 Not Found.")


@pytest.mark.asyncio()
async def test_server_error_is_not_retried(echo_server, basic_config):
    base, app = echo_server
    async with Fetcher(basic_config) as fetcher:
        with pytest.raises(HttpStatusError) as info:
            await fetcher.fetch(f"{base}/boom")
    assert info.value.status == 500
    assert app["hits"]["/boom"] == 1


@pytest.mark.asyncio()
async def test_redirect_reports_final_url(echo_server, basic_config):
    base, _ = echo_server
    async with Fetcher(basic_config) as fetcher:
        page = await fetcher.fetch(f"{base}/moved")
    assert page.url == f"{base}/"


@pytest.mark.asyncio()
async def test_connection_refused_is_transport_error(unused_tcp_port, basic_config):
    async with Fetcher(basic_config) as fetcher:
        with pytest.raises(TransportError) as info:
            await fetcher.fetch(f"http://localhost:{unused_tcp_port}/")
    assert info.value.kind is ErrorKind.TRANSPORT
    assert "network issues" in info.value.user_message
    assert f"http://localhost:{unused_tcp_port}/" in info.value.user_message


@pytest.mark.asyncio()
async def test_fresh_responses_come_from_cache(echo_server):
    base, app = echo_server
    async with Fetcher(MinerConfig(cache_ttl=3600)) as fetcher:
        first = await fetcher.fetch(f"{base}/cached")
        second = await fetcher.fetch(f"{base}/cached")
    assert first == second
    assert app["hits"]["/cached"] == 1


@pytest.mark.asyncio()
async def test_cache_disabled_refetches(echo_server, basic_config):
    base, app = echo_server
    async with Fetcher(basic_config) as fetcher:
        await fetcher.fetch(f"{base}/again")
        await fetcher.fetch(f"{base}/again")
    assert app["hits"]["/again"] == 2


@pytest.mark.asyncio()
async def test_errors_are_not_cached(echo_server):
    base, app = echo_server
    async with Fetcher(MinerConfig(cache_ttl=3600)) as fetcher:
        for _ in range(2):
            with pytest.raises(HttpStatusError):
                await fetcher.fetch(f"{base}/missing")
    assert app["hits"]["/missing"] == 2


@pytest.mark.asyncio()
async def test_fetch_requires_open_session(basic_config):
    with pytest.raises(RuntimeError):
        await Fetcher(basic_config).fetch("https://example.com/")


def test_response_cache_expires_entries():
    clock = itertools.count(0.0, 10.0).__next__
    cache = ResponseCache(ttl=15.0, clock=clock)
    page = PageData(url="https://a.example/", content="x")
    cache.put("https://a.example/", page)  # t=0, expires at 15
    assert cache.get("https://a.example/") is page  # t=10
    assert cache.get("https://a.example/") is None  # t=20
    assert len(cache) == 0


def test_response_cache_zero_ttl_stores_nothing():
    cache = ResponseCache(ttl=0)
    cache.put("https://a.example/", PageData(url="https://a.example/", content="x"))
    assert not cache.enabled
    assert cache.get("https://a.example/") is None


def test_response_cache_rejects_negative_ttl():
    with pytest.raises(ValueError):
        ResponseCache(ttl=-1)


def test_response_cache_put_drops_expired_entries():
    now = [0.0]
    cache = ResponseCache(ttl=10.0, clock=lambda: now[0])
    cache.put("https://a.example/old", PageData(url="https://a.example/old", content="x"))
    now[0] = 30.0
    cache.put("https://a.example/new", PageData(url="https://a.example/new", content="y"))
    assert len(cache) == 1
    assert cache.get("https://a.example/new") is not None
    assert cache.purge() == 0
