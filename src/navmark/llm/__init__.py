"""Chat-model backends (Zhipu GLM, Anthropic Claude)."""

from navmark.llm.base import BaseChatBackend
from navmark.llm.client import AnthropicChatClient
from navmark.llm.factory import chat_backend_from_env
from navmark.llm.zhipu import ZhipuChatClient

__all__ = ["BaseChatBackend", "AnthropicChatClient", "ZhipuChatClient", "chat_backend_from_env"]
