"""Data models for the web module."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FetchResult:
    """A successfully fetched HTML document."""

    url: str  # effective URL after redirects
    html: str
    status_code: int
    content_type: str = ""


@dataclass
class ExtractedInfo:
    """Page signals extracted from a website, fed to classification."""

    url: str
    title: str
    description: str
    favicon: str
    keywords: list[str] = field(default_factory=list)
    og_image: str | None = None
    site_name: str | None = None
    page_content: str = ""
    degraded: bool = False
