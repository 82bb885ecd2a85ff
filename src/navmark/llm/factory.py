"""Pick a chat backend from the environment."""

from __future__ import annotations

import logging
import os

from navmark.llm.base import BaseChatBackend

logger = logging.getLogger(__name__)


def chat_backend_from_env() -> BaseChatBackend | None:
    """Build a fresh backend from available credentials.

    ``ZHIPU_API_KEY`` wins over ``ANTHROPIC_API_KEY``. Returns None when
    neither is set, in which case callers use rule-based classification.
    """
    if os.environ.get("ZHIPU_API_KEY"):
        from navmark.llm.zhipu import ZhipuChatClient

        return ZhipuChatClient()
    if os.environ.get("ANTHROPIC_API_KEY"):
        from navmark.llm.client import AnthropicChatClient

        return AnthropicChatClient()
    logger.info("No model credentials configured")
    return None
