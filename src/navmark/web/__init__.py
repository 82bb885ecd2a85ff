"""Web page fetching, metadata extraction and favicon lookup."""

from navmark.web.extractor import WebsiteExtractor, default_favicon, hostname_of, resolve_url, title_from_url
from navmark.web.favicon import FaviconResolver, is_placeholder
from navmark.web.fetcher import WebFetcher, normalize_url
from navmark.web.models import ExtractedInfo, FetchResult

__all__ = [
    "WebsiteExtractor",
    "WebFetcher",
    "FaviconResolver",
    "ExtractedInfo",
    "FetchResult",
    "default_favicon",
    "hostname_of",
    "resolve_url",
    "title_from_url",
    "is_placeholder",
    "normalize_url",
]
