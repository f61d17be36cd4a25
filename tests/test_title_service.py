import asyncio
import time

import httpx
import pytest

from bookmark_manager_api.app.core.errors import TransientFetchError
from bookmark_manager_api.app.services.title_service import MAX_TITLE_BYTES, extract_title, fetch_page_title


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)


async def test_returns_stripped_title_and_sends_user_agent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["user_agent"] = request.headers.get("user-agent")
        return httpx.Response(
            200,
            headers={"content-type": "text/html; charset=utf-8"},
            text="<html><head><title>\n  Example Domain \n</title></head><body></body></html>",
        )

    async with mock_client(handler) as client:
        title = await fetch_page_title("https://example.com", client=client)
    assert title == "Example Domain"
    assert seen["user_agent"].startswith("Mozilla/5.0")


async def test_non_2xx_yields_none():
    def handler(request):
        return httpx.Response(404, headers={"content-type": "text/html"}, text="<title>Not Found</title>")

    async with mock_client(handler) as client:
        assert await fetch_page_title("https://example.com/missing", client=client) is None


async def test_timeout_yields_none():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with mock_client(handler) as client:
        assert await fetch_page_title("https://slow.example.com", client=client, timeout=0.01) is None


async def test_connection_error_yields_none():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with mock_client(handler) as client:
        assert await fetch_page_title("https://down.example.com", client=client) is None


async def test_non_html_yields_none():
    def handler(request):
        return httpx.Response(200, headers={"content-type": "application/json"}, text='{"title": "x"}')

    async with mock_client(handler) as client:
        assert await fetch_page_title("https://api.example.com", client=client) is None


async def test_missing_title_yields_none():
    def handler(request):
        return httpx.Response(200, headers={"content-type": "text/html"}, text="<html><body>hi</body></html>")

    async with mock_client(handler) as client:
        assert await fetch_page_title("https://example.com", client=client) is None


def test_extract_title_rejects_blank_title():
    with pytest.raises(TransientFetchError):
        extract_title("<html><head><title>   </title></head></html>")
    assert extract_title("<title>Hello</title>") == "Hello"


async def test_slow_body_is_cut_off_by_overall_timeout():
    async def trickle():
        for byte in b"<html><head><title>Slow page</title></head></html>":
            await asyncio.sleep(0.2)
            yield bytes([byte])

    def handler(request):
        return httpx.Response(200, headers={"content-type": "text/html"}, content=trickle())

    started = time.monotonic()
    async with mock_client(handler) as client:
        title = await fetch_page_title("https://slow.example.com", client=client, timeout=0.5)
    assert title is None
    assert time.monotonic() - started < 2


async def test_body_read_stops_after_byte_limit():
    sent = {"bytes": 0}

    async def endless():
        yield b"<html><head><title>Big page</title></head><body>"
        while True:
            chunk = b"x" * 65536
            sent["bytes"] += len(chunk)
            yield chunk

    def handler(request):
        return httpx.Response(200, headers={"content-type": "text/html"}, content=endless())

    async with mock_client(handler) as client:
        title = await fetch_page_title("https://big.example.com", client=client, timeout=5)
    assert title == "Big page"
    assert sent["bytes"] <= MAX_TITLE_BYTES + 65536
