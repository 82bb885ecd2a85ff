"""High-quality favicon lookup across third-party icon services."""

from __future__ import annotations

import asyncio
import logging

import httpx

from navmark import config
from navmark.web.extractor import default_favicon, hostname_of
from navmark.web.fetcher import BROWSER_HEADERS

logger = logging.getLogger(__name__)


def is_placeholder(favicon: str | None) -> bool:
    """True when the favicon is missing or a known placeholder marker."""
    return not favicon or "placeholder" in favicon


def candidate_urls(hostname: str) -> list[str]:
    """Icon candidates for ``hostname``, best quality first."""
    return [
        f"https://www.google.com/s2/favicons?domain={hostname}&sz=64",
        f"https://favicon.yandex.net/favicon/{hostname}",
        f"https://icons.duckduckgo.com/ip3/{hostname}.ico",
        f"https://{hostname}/apple-touch-icon.png",
        f"https://{hostname}/favicon.ico",
    ]


class FaviconResolver:
    """Probe icon services in a fixed order and return the first image.

    Candidates are tried sequentially so results are deterministic; each
    probe is a HEAD request bounded by ``timeout`` seconds.
    """

    def __init__(
        self,
        timeout: float = config.FAVICON_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def resolve_high_quality(self, url: str) -> str:
        hostname = hostname_of(url)
        if not hostname:
            return config.PLACEHOLDER_FAVICON

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            for icon_url in candidate_urls(hostname):
                if await self._probe(client, icon_url):
                    return icon_url

        logger.warning(f"No favicon service answered for {hostname}, using default")
        return default_favicon(url)

    async def _probe(self, client: httpx.AsyncClient, icon_url: str) -> bool:
        try:
            response = await asyncio.wait_for(
                client.head(icon_url, headers={"User-Agent": BROWSER_HEADERS["User-Agent"]}),
                timeout=self.timeout,
            )
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            logger.debug(f"Favicon probe failed: {icon_url} ({e})")
            return False

        content_type = response.headers.get("content-type", "")
        ok = response.is_success and "image" in content_type
        logger.debug(f"Favicon probe {icon_url}: {response.status_code} {content_type}")
        return ok
