"""Extract title, description, icon and content signals from a web page.

Every field has a ranked list of sources; the first non-empty one wins.
Extraction never raises: fetch or parse failures yield a degraded
``ExtractedInfo`` built from the URL alone.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from navmark import config
from navmark.exceptions import WebFetchError
from navmark.web.fetcher import WebFetcher, normalize_url
from navmark.web.models import ExtractedInfo

logger = logging.getLogger(__name__)

# (attribute, value) pairs, highest priority first
_TITLE_META = [("property", "og:title"), ("name", "twitter:title")]
_DESCRIPTION_META = [
    ("name", "description"),
    ("property", "og:description"),
    ("name", "twitter:description"),
    ("itemprop", "description"),
]
_ICON_RELS = ["icon", "shortcut icon", "apple-touch-icon", "apple-touch-icon-precomposed"]

_NOISE_SELECTORS = [
    "script", "style", "noscript", "nav", "header", "footer", "aside",
    ".advertisement", ".ads", ".sidebar", ".navigation", ".menu",
    ".cookie", ".cookie-banner", ".popup",
]
_CONTENT_SELECTORS = [
    "main", "article", ".content", ".main-content", ".post-content",
    ".entry-content", ".article-content", ".page-content", "section", ".container",
]
_MIN_CONTENT_LENGTH = 100
_MIN_PARAGRAPH_LENGTH = 20
_MAX_PARAGRAPH_LENGTH = 200

_WHITESPACE_RE = re.compile(r"\s+")


def resolve_url(href: str, base_url: str) -> str:
    """Resolve an absolute, protocol-relative, root-relative or relative href."""
    href = href.strip()
    if href.startswith(("http://", "https://")):
        return href
    base = urlparse(base_url)
    if not base.scheme or not base.netloc:
        return href
    if href.startswith("//"):
        return f"{base.scheme}:{href}"
    if href.startswith("/"):
        return f"{base.scheme}://{base.netloc}{href}"
    return urljoin(base_url, href)


def _parse(url: str):
    """``urlparse`` of the normalized URL, or None when it cannot be parsed."""
    if not url:
        return None
    try:
        return urlparse(normalize_url(url))
    except ValueError:
        # e.g. an unclosed IPv6 bracket
        return None


def hostname_of(url: str) -> str | None:
    parsed = _parse(url)
    return parsed.hostname if parsed else None


def title_from_url(url: str) -> str:
    """Capitalized second-level domain label, e.g. ``Github`` for github.com."""
    hostname = hostname_of(url)
    if not hostname:
        return "Unknown Website"
    if hostname.startswith("www."):
        hostname = hostname[4:]
    parts = hostname.split(".")
    if len(parts) >= 2:
        name = parts[-2]
        return name[:1].upper() + name[1:]
    return hostname


def default_favicon(url: str) -> str:
    """``{origin}/favicon.ico``, or the placeholder when the URL has no host."""
    parsed = _parse(url)
    if not parsed or not parsed.netloc:
        return config.PLACEHOLDER_FAVICON
    return f"{parsed.scheme}://{parsed.netloc}/favicon.ico"


def degraded_info(url: str) -> ExtractedInfo:
    """Fallback info derived purely from the URL string."""
    return ExtractedInfo(
        url=normalize_url(url) if url else "",
        title=title_from_url(url),
        description="",
        favicon=default_favicon(url),
        keywords=[],
        degraded=True,
    )


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> str:
    tag = soup.find("meta", attrs={attr: value})
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def _rel_of(tag) -> str:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        return rel.strip().lower()
    return " ".join(rel).lower()


def extract_title(soup: BeautifulSoup, url: str) -> str:
    for attr, value in _TITLE_META:
        title = _meta_content(soup, attr, value)
        if title:
            return title
    for name in ("title", "h1"):
        tag = soup.find(name)
        if tag is not None:
            title = collapse_whitespace(tag.get_text(" "))
            if title:
                return title
    return title_from_url(url)


def extract_description(soup: BeautifulSoup) -> str:
    for attr, value in _DESCRIPTION_META:
        desc = _meta_content(soup, attr, value)
        if desc:
            return desc

    first_p = soup.find("p")
    if first_p is not None:
        text = collapse_whitespace(first_p.get_text(" "))
        if len(text) > _MIN_PARAGRAPH_LENGTH:
            if len(text) > _MAX_PARAGRAPH_LENGTH:
                return text[:_MAX_PARAGRAPH_LENGTH] + "..."
            return text
    return ""


def extract_favicon(soup: BeautifulSoup, url: str) -> str:
    links = soup.find_all("link", href=True)
    for rel in _ICON_RELS:
        for link in links:
            href = link["href"].strip()
            if href and _rel_of(link) == rel:
                return resolve_url(href, url)

    og_image = _meta_content(soup, "property", "og:image")
    if og_image:
        return resolve_url(og_image, url)
    return default_favicon(url)


def extract_keywords(soup: BeautifulSoup) -> list[str]:
    content = _meta_content(soup, "name", "keywords")
    return [k.strip() for k in content.split(",") if k.strip()]


def extract_og_image(soup: BeautifulSoup, url: str) -> str | None:
    image = _meta_content(soup, "property", "og:image")
    return resolve_url(image, url) if image else None


def extract_site_name(soup: BeautifulSoup) -> str | None:
    return _meta_content(soup, "property", "og:site_name") or None


def extract_page_content(soup: BeautifulSoup, max_length: int = config.PAGE_CONTENT_MAX_LENGTH) -> str:
    """Main readable text of the page, whitespace-collapsed and capped.

    Mutates ``soup``: noise elements are removed first.
    """
    for element in soup.select(", ".join(_NOISE_SELECTORS)):
        element.decompose()

    content = ""
    for selector in _CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = element.get_text(" ").strip()
        if len(text) > _MIN_CONTENT_LENGTH:
            logger.debug(f"Page content taken from '{selector}'")
            content = text
            break

    if not content:
        body = soup.body or soup
        content = body.get_text(" ")

    cleaned = collapse_whitespace(content)
    if len(cleaned) > max_length:
        return cleaned[:max_length] + "..."
    return cleaned


def parse_html(html: str, url: str) -> ExtractedInfo:
    """Build ``ExtractedInfo`` from an HTML document fetched from ``url``."""
    soup = BeautifulSoup(html, "html.parser")
    info = ExtractedInfo(
        url=url,
        title=extract_title(soup, url),
        description=extract_description(soup),
        favicon=extract_favicon(soup, url),
        keywords=extract_keywords(soup),
        og_image=extract_og_image(soup, url),
        site_name=extract_site_name(soup),
    )
    # Runs last because it strips elements from the tree.
    try:
        info.page_content = extract_page_content(soup)
    except Exception as e:
        logger.warning(f"Page content extraction failed for {url}: {e}")
    return info


class WebsiteExtractor:
    """Fetch a page and extract its metadata, degrading instead of failing."""

    def __init__(self, fetcher: WebFetcher | None = None):
        self.fetcher = fetcher or WebFetcher()

    async def extract(self, url: str) -> ExtractedInfo:
        normalized = normalize_url(url)
        logger.info(f"Extracting website info: {normalized}")
        try:
            page = await self.fetcher.fetch(normalized)
        except WebFetchError as e:
            logger.warning(f"Extraction degraded for {normalized}: {e}")
            return degraded_info(url)

        try:
            info = parse_html(page.html, page.url)
        except Exception as e:
            logger.warning(f"HTML parsing failed for {normalized}: {e}")
            return degraded_info(url)

        info.url = normalized
        logger.info(f"Extraction finished: {info.title}")
        return info
