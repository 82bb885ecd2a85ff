"""Recommendation markers in model output.

The model is told to emit ``[RECOMMEND:<absolute-url>]`` for each stored
website it recommends. Markers are hidden from displayed text and
resolved against the website pool once the reply is complete, since a
marker may be split across stream chunks.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from navmark import config
from navmark.store.models import WebsiteRecord

logger = logging.getLogger(__name__)

MARKER_PREFIX = "[RECOMMEND:"
MARKER_RE = re.compile(r"\[RECOMMEND:(https?://[^\]\s]+)\]")

# A partial marker longer than this is released as plain text.
_MAX_HELD = 2048


def extract_recommendations(
    text: str,
    available: Iterable[WebsiteRecord],
    limit: int = config.MAX_RECOMMENDATIONS,
) -> list[WebsiteRecord]:
    """Websites named by markers in ``text``, in order of first appearance.

    URLs not present in ``available`` (exact string match) are dropped.
    """
    by_url: dict[str, WebsiteRecord] = {}
    for site in available:
        by_url.setdefault(site.url, site)

    urls = MARKER_RE.findall(text or "")
    logger.debug(f"Recommendation markers found: {urls}")

    picked: list[WebsiteRecord] = []
    seen: set[str] = set()
    for url in urls:
        if url in seen or url not in by_url:
            continue
        seen.add(url)
        picked.append(by_url[url])
        if len(picked) >= limit:
            break
    return picked


def strip_markers(text: str) -> str:
    return MARKER_RE.sub("", text)


def _partial_marker_start(text: str) -> int | None:
    """Index where an unfinished marker begins at the end of ``text``."""
    start = text.rfind(MARKER_PREFIX)
    if start != -1 and len(text) - start <= _MAX_HELD:
        url = text[start + len(MARKER_PREFIX):]
        if "]" not in url and not any(c.isspace() for c in url):
            return start

    # a trailing "[", "[R", ... "[RECOMMEND" may still grow into a marker
    for size in range(min(len(MARKER_PREFIX) - 1, len(text)), 0, -1):
        if text.endswith(MARKER_PREFIX[:size]):
            return len(text) - size
    return None


class MarkerFilter:
    """Strip markers from a chunked stream without leaking split markers."""

    def __init__(self):
        self._pending = ""

    def feed(self, chunk: str) -> str:
        text = strip_markers(self._pending + chunk)
        hold = _partial_marker_start(text)
        if hold is None:
            self._pending = ""
            return text
        self._pending = text[hold:]
        return text[:hold]

    def flush(self) -> str:
        """Release whatever is held; an unfinished marker was not a marker."""
        rest, self._pending = self._pending, ""
        return rest
