"""Runtime settings read from the environment, plus tunable heuristics."""

from __future__ import annotations

import os

FETCH_TIMEOUT = float(os.environ.get("NAVMARK_FETCH_TIMEOUT", "10"))
FAVICON_TIMEOUT = float(os.environ.get("NAVMARK_FAVICON_TIMEOUT", "5"))
MAX_RESPONSE_BYTES = int(os.environ.get("NAVMARK_MAX_RESPONSE_BYTES", str(2 * 1_048_576)))

DEFAULT_LLM_MODEL = os.environ.get("DEFAULT_LLM_MODEL", "glm-4-flash")
ZHIPU_BASE_URL = os.environ.get("ZHIPU_BASE_URL", "https://open.bigmodel.cn/api/paas/v4")

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Similarity heuristics
CATEGORY_MATCH_THRESHOLD = 0.3
SUGGEST_MIN_SIMILARITY = 0.6
MAX_SUGGESTIONS = 3

MAX_TAGS = 5
MAX_RECOMMENDATIONS = 3
PAGE_CONTENT_MAX_LENGTH = 2000

PLACEHOLDER_FAVICON = "/placeholder.svg?height=32&width=32"
