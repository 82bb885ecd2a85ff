"""SSRF-safe async HTML fetcher with a hard overall timeout."""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from urllib.parse import urlparse

import httpx

from navmark import config
from navmark.exceptions import WebFetchError
from navmark.web.models import FetchResult

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = {"http", "https"}

_BLOCKED_NETWORKS = [
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
]

BROWSER_HEADERS = {
    "User-Agent": config.USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Cache-Control": "no-cache",
}


def normalize_url(url: str) -> str:
    """Prepend ``https://`` when the URL has no http(s) scheme."""
    url = (url or "").strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def _validate_url(url: str) -> tuple[bool, str | None, str | None]:
    """Validate a URL for safety. Returns (is_safe, error_message, resolved_ip)."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False, "Invalid URL format", None

    if parsed.scheme not in _ALLOWED_SCHEMES:
        return False, f"Blocked URL scheme: {parsed.scheme}. Only http/https allowed.", None

    hostname = parsed.hostname
    if not hostname:
        return False, "URL has no hostname", None

    if hostname in ("localhost", "0.0.0.0"):
        return False, "Blocked: localhost access not allowed", None

    resolved_ip = None
    try:
        addr_infos = socket.getaddrinfo(hostname, None)
        for addr_info in addr_infos:
            ip = ipaddress.ip_address(addr_info[4][0])
            for network in _BLOCKED_NETWORKS:
                if ip in network:
                    return False, f"Blocked: URL resolves to private/internal IP ({ip})", None
            if resolved_ip is None:
                resolved_ip = str(ip)
    except (socket.gaierror, UnicodeError):
        return False, f"Cannot resolve hostname: {hostname}", None

    return True, None, resolved_ip


class WebFetcher:
    """Fetches HTML documents for metadata extraction.

    Args:
        timeout: Overall deadline in seconds for one fetch, redirects included.
        max_response_bytes: Maximum response size in bytes.
        max_redirects: Maximum number of redirects to follow (default 5).
        validate_hosts: Reject private/internal hosts before each request.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        timeout: float = config.FETCH_TIMEOUT,
        max_response_bytes: int = config.MAX_RESPONSE_BYTES,
        max_redirects: int = 5,
        validate_hosts: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self.max_response_bytes = max_response_bytes
        self.max_redirects = max_redirects
        self.validate_hosts = validate_hosts
        self._transport = transport

    async def _check(self, url: str, prefix: str = "") -> None:
        if not self.validate_hosts:
            return
        # getaddrinfo blocks, so resolve off the event loop
        is_safe, error, _ = await asyncio.to_thread(_validate_url, url)
        if not is_safe:
            raise WebFetchError(f"{prefix}{error}")

    async def fetch(self, url: str) -> FetchResult:
        """Fetch ``url`` and return its HTML.

        Raises:
            WebFetchError: on blocked hosts, network errors, non-2xx status,
                oversize bodies, or when the deadline passes.
        """
        url = normalize_url(url)
        try:
            return await asyncio.wait_for(self._fetch(url), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise WebFetchError(f"Fetch timed out after {self.timeout}s: {url}") from e

    async def _fetch(self, url: str) -> FetchResult:
        await self._check(url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                current_url = url
                response = None
                for _ in range(self.max_redirects + 1):
                    response = await client.get(current_url, headers=BROWSER_HEADERS)
                    if response.is_redirect and response.has_redirect_location:
                        redirect_url = (
                            str(response.next_request.url)
                            if response.next_request
                            else None
                        )
                        if redirect_url is None:
                            break
                        await self._check(redirect_url, prefix="Redirect blocked: ")
                        logger.debug(f"Following redirect {current_url} -> {redirect_url}")
                        current_url = redirect_url
                    else:
                        break

                if response is None:
                    raise WebFetchError("No response received")

                if len(response.content) > self.max_response_bytes:
                    raise WebFetchError(
                        f"Response too large (>{self.max_response_bytes} bytes)"
                    )

                response.raise_for_status()

            return FetchResult(
                url=str(response.url),
                html=response.text,
                status_code=response.status_code,
                content_type=response.headers.get("content-type", ""),
            )
        except WebFetchError:
            raise
        except Exception as e:
            raise WebFetchError(f"Fetch failed: {e}") from e
