"""
🧪 test_remote_fetcher.py: мережевий шар поверх httpx.MockTransport

Перевіряє:
- Успішне завантаження з ретраями та реальними паузами
- Таймаут спроби як невдалу спробу
- Відʼємний retry_limit → рівно одна спроба
- Злиття заголовків (заголовки запиту перекривають дефолтні)
"""

import asyncio
import time

import httpx
import pytest

from netimage.infrastructure.network import DEFAULT_HEADERS, RemoteFetcher

URL = "https://img.example.com/cat.png"


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class Sequence:
    """Обробник MockTransport: статуси по черзі, тіло = номер спроби."""

    def __init__(self, *statuses):
        self.statuses = list(statuses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        idx = min(len(self.requests), len(self.statuses)) - 1
        return httpx.Response(self.statuses[idx], content=f"attempt-{len(self.requests)}".encode())


@pytest.mark.asyncio
async def test_fail_fail_success_returns_third_body_after_real_backoff():
    handler = Sequence(500, 502, 200)
    base, factor = 0.05, 2.0
    async with _client(handler) as client:
        fetcher = RemoteFetcher(client)
        started = time.monotonic()
        body = await fetcher.fetch(URL, None, 2, base, factor, 1.0)
        elapsed = time.monotonic() - started

    assert body == b"attempt-3"
    assert len(handler.requests) == 3
    assert elapsed >= base + base * factor


@pytest.mark.asyncio
async def test_exhausted_retries_return_none(sleep_recorder):
    handler = Sequence(404)
    async with _client(handler) as client:
        body = await RemoteFetcher(client, sleep=sleep_recorder).fetch(URL, None, 2, 0.5, 1.5, 1.0)

    assert body is None
    assert len(handler.requests) == 3
    assert sleep_recorder.delays == pytest.approx([0.5, 0.75])


@pytest.mark.asyncio
async def test_negative_retry_limit_makes_exactly_one_attempt(sleep_recorder):
    handler = Sequence(500)
    async with _client(handler) as client:
        body = await RemoteFetcher(client, sleep=sleep_recorder).fetch(URL, None, -3, 0.5, 1.5, 1.0)

    assert body is None
    assert len(handler.requests) == 1
    assert sleep_recorder.delays == []


@pytest.mark.asyncio
async def test_slow_attempt_times_out_and_is_retried(sleep_recorder):
    calls = {"n": 0}

    async def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] == 1:
            await asyncio.sleep(1.0)
        return httpx.Response(200, content=b"fast")

    async with _client(handler) as client:
        body = await RemoteFetcher(client, sleep=sleep_recorder).fetch(URL, None, 1, 0.0, 1.0, 0.05)

    assert body == b"fast"
    assert calls["n"] == 2


@pytest.mark.asyncio
async def test_transport_error_counts_as_failed_attempt(sleep_recorder):
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, content=b"ok")

    async with _client(handler) as client:
        body = await RemoteFetcher(client, sleep=sleep_recorder).fetch(URL, None, 3, 0.2, 1.5, 1.0)

    assert body == b"ok"
    assert sleep_recorder.delays == pytest.approx([0.2])


@pytest.mark.asyncio
async def test_request_headers_override_defaults():
    handler = Sequence(200)
    async with _client(handler) as client:
        fetcher = RemoteFetcher(client)
        await fetcher.fetch(URL, {"user-agent": "custom/1.0", "X-Token": "abc"}, 0, 0.0, 1.0, 1.0)

    sent = handler.requests[0].headers
    assert sent["User-Agent"] == "custom/1.0"
    assert sent["X-Token"] == "abc"
    assert sent["Accept"] == DEFAULT_HEADERS["Accept"]


@pytest.mark.asyncio
async def test_default_headers_can_be_replaced():
    handler = Sequence(200)
    async with _client(handler) as client:
        fetcher = RemoteFetcher(client, default_headers={"User-Agent": "netimage-tests"})
        await fetcher.fetch(URL, None, 0, 0.0, 1.0, 1.0)

    assert handler.requests[0].headers["User-Agent"] == "netimage-tests"
