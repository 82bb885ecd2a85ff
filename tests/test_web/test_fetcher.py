"""Tests for web fetcher."""

import asyncio
import socket
import time

import httpx
import pytest

from navmark.web.fetcher import _validate_url, WebFetcher, normalize_url
from navmark.exceptions import WebFetchError


def test_validate_url_blocked_scheme():
    is_safe, error, _ = _validate_url("file:///etc/passwd")
    assert is_safe is False
    assert "Blocked URL scheme" in error


def test_validate_url_localhost():
    is_safe, error, _ = _validate_url("http://localhost:8080")
    assert is_safe is False
    assert "localhost" in error


def test_validate_url_no_hostname():
    is_safe, error, _ = _validate_url("http://")
    assert is_safe is False


def test_validate_url_private_ip():
    is_safe, error, _ = _validate_url("http://192.168.1.1")
    assert is_safe is False
    assert "private" in error.lower()


def test_normalize_url_adds_scheme():
    assert normalize_url("example.com") == "https://example.com"
    assert normalize_url("http://example.com") == "http://example.com"
    assert normalize_url("  https://example.com/a ") == "https://example.com/a"


def _fetcher(handler, **kwargs):
    return WebFetcher(transport=httpx.MockTransport(handler), validate_hosts=False, **kwargs)


def test_fetch_returns_html():
    def handler(request):
        return httpx.Response(200, html="<html><title>Hi</title></html>")

    result = asyncio.run(_fetcher(handler).fetch("example.com"))
    assert result.url.rstrip("/") == "https://example.com"
    assert "<title>Hi</title>" in result.html
    assert result.status_code == 200
    assert "text/html" in result.content_type


def test_fetch_sends_browser_headers():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, html="<p>x</p>")

    asyncio.run(_fetcher(handler).fetch("https://example.com"))
    assert "Mozilla" in seen["user-agent"]
    assert seen["accept-language"].startswith("zh-CN")


def test_fetch_follows_redirects():
    def handler(request):
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://example.com/new"})
        return httpx.Response(200, html="<p>moved</p>")

    result = asyncio.run(_fetcher(handler).fetch("https://example.com/old"))
    assert result.url == "https://example.com/new"
    assert "moved" in result.html


def test_fetch_non_2xx_raises():
    def handler(request):
        return httpx.Response(404, text="missing")

    with pytest.raises(WebFetchError, match="Fetch failed"):
        asyncio.run(_fetcher(handler).fetch("https://example.com"))


def test_fetch_too_large_raises():
    def handler(request):
        return httpx.Response(200, text="x" * 100)

    with pytest.raises(WebFetchError, match="too large"):
        asyncio.run(_fetcher(handler, max_response_bytes=10).fetch("https://example.com"))


def test_fetch_network_error_raises():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(WebFetchError):
        asyncio.run(_fetcher(handler).fetch("https://example.com"))


def test_fetch_times_out():
    async def handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, html="<p>late</p>")

    with pytest.raises(WebFetchError, match="timed out"):
        asyncio.run(_fetcher(handler, timeout=0.05).fetch("https://example.com"))


def test_fetch_blocks_private_hosts():
    def handler(request):
        raise AssertionError("should not be called")

    fetcher = WebFetcher(transport=httpx.MockTransport(handler))
    with pytest.raises(WebFetchError, match="localhost"):
        asyncio.run(fetcher.fetch("http://localhost/admin"))


def test_validate_url_overlong_label():
    is_safe, error, _ = _validate_url("https://" + "a" * 64 + ".com")
    assert is_safe is False
    assert "Cannot resolve" in error


def test_fetch_wraps_unexpected_errors():
    def handler(request):
        raise RuntimeError("transport exploded")

    with pytest.raises(WebFetchError, match="Fetch failed"):
        asyncio.run(_fetcher(handler).fetch("https://example.com"))


def test_slow_dns_counts_against_timeout(monkeypatch):
    def slow_getaddrinfo(*args, **kwargs):
        time.sleep(0.5)
        raise socket.gaierror("too slow")

    monkeypatch.setattr(socket, "getaddrinfo", slow_getaddrinfo)
    fetcher = WebFetcher(timeout=0.05, transport=httpx.MockTransport(lambda r: httpx.Response(200)))

    async def timed_fetch():
        start = time.monotonic()
        with pytest.raises(WebFetchError, match="timed out"):
            await fetcher.fetch("https://slow.example.com")
        return time.monotonic() - start

    assert asyncio.run(timed_fetch()) < 0.4
