"""Model-backed website classification."""

from __future__ import annotations

import json
import logging
import re

from navmark import config
from navmark.categories import icons
from navmark.categories.similarity import most_similar
from navmark.classify.models import ClassificationResult
from navmark.classify.prompts import build_system_prompt, build_user_prompt
from navmark.exceptions import ClassificationError
from navmark.llm.base import BaseChatBackend
from navmark.store.models import CategorySummary

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_MAX_DESCRIPTION_LENGTH = 80


def parse_classification(text: str) -> dict:
    """Decode the model's JSON answer, tolerating code fences and chatter around it.

    Raises:
        ClassificationError: if no JSON object with a ``category`` and a
            ``tags`` list can be recovered.
    """
    cleaned = _FENCE_RE.sub("", text or "").strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        start, end = cleaned.find("{"), cleaned.rfind("}")
        if start == -1 or end <= start:
            raise ClassificationError(f"Model output is not JSON: {cleaned[:200]!r}")
        try:
            data = json.loads(cleaned[start:end + 1])
        except json.JSONDecodeError as e:
            raise ClassificationError(f"Model output is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise ClassificationError("Model output is not a JSON object")
    category = data.get("category")
    if not isinstance(category, str) or not category.strip():
        raise ClassificationError("Model output has no category")
    if not isinstance(data.get("tags"), list):
        raise ClassificationError("Model output tags is not a list")
    return data


def match_existing(category: str, existing: list[CategorySummary]) -> str | None:
    """Existing category name to use instead of ``category``, if any.

    Exact matches return themselves; otherwise the closest name by keyword
    overlap above the configured threshold.
    """
    names = [c.name for c in existing]
    if category in names:
        return category
    return most_similar(category, names, threshold=config.CATEGORY_MATCH_THRESHOLD)


class AIClassifier:
    """Classify websites with a chat model.

    Args:
        backend: Chat backend used for the completion call.
        model: Optional model override for the backend.
        temperature: Sampling temperature.
    """

    def __init__(self, backend: BaseChatBackend, model: str | None = None, temperature: float = 0.3):
        self.backend = backend
        self.model = model
        self.temperature = temperature

    async def classify(
        self,
        url: str,
        title: str,
        description: str,
        keywords: list[str] | None = None,
        existing_categories: list[CategorySummary] | None = None,
        page_content: str | None = None,
    ) -> ClassificationResult:
        """Ask the model for category, tags, description and icon.

        Raises:
            LLMError: the backend call failed.
            ClassificationError: the answer was malformed.
        """
        existing = existing_categories or []
        messages = [
            {"role": "system", "content": build_system_prompt(existing)},
            {"role": "user", "content": build_user_prompt(url, title, description, keywords, page_content)},
        ]
        raw = await self.backend.complete(messages, model=self.model, temperature=self.temperature)
        logger.debug(f"Classifier raw output for {url}: {raw}")

        data = parse_classification(raw)
        category = data["category"].strip()
        corrected_from = None

        if existing and category not in {c.name for c in existing}:
            logger.warning(
                f"Model proposed new category '{category}', existing: "
                f"{', '.join(c.name for c in existing)}"
            )
            replacement = match_existing(category, existing)
            if replacement:
                logger.info(f"Corrected category '{category}' -> '{replacement}'")
                corrected_from, category = category, replacement

        tags = [str(t).strip() for t in data["tags"] if str(t).strip()][:config.MAX_TAGS]

        description_out = str(data.get("description") or "").strip()
        if not description_out:
            description_out = f"{title} - {category}相关服务"
        elif len(description_out) > _MAX_DESCRIPTION_LENGTH:
            description_out = description_out[:_MAX_DESCRIPTION_LENGTH - 3] + "..."

        raw_icon = data.get("suggestedCategoryIcon") or data.get("icon")
        return ClassificationResult(
            category=category,
            tags=tags,
            description=description_out,
            suggested_icon=icons.normalize(raw_icon) if isinstance(raw_icon, str) and raw_icon.strip() else "",
            source="ai",
            corrected_from=corrected_from,
        )
