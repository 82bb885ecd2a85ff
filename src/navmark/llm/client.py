"""Anthropic Claude backend for the chat interface."""

from __future__ import annotations

import logging
import os
from typing import AsyncIterator

from navmark.exceptions import LLMError, UpstreamError
from navmark.llm.base import BaseChatBackend

logger = logging.getLogger(__name__)


DEFAULT_CLAUDE_MODEL = os.environ.get("DEFAULT_CLAUDE_MODEL", "claude-haiku-4-5-20251001")


def split_system(messages: list[dict]) -> tuple[str, list[dict]]:
    """Lift system-role messages out into a single system prompt."""
    system_parts = [m["content"] for m in messages if m.get("role") == "system"]
    rest = [
        {"role": m["role"], "content": m["content"]}
        for m in messages
        if m.get("role") != "system"
    ]
    return "\n\n".join(system_parts), rest


class AnthropicChatClient(BaseChatBackend):
    """Asynchronous wrapper around the Anthropic SDK."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_CLAUDE_MODEL,
    ):
        if not api_key and not os.environ.get("ANTHROPIC_API_KEY"):
            raise LLMError(
                "Anthropic API key is required. "
                "Pass it directly or set ANTHROPIC_API_KEY in your environment."
            )
        try:
            from anthropic import AsyncAnthropic
        except ImportError:
            raise ImportError(
                "anthropic is required for AnthropicChatClient. "
                "Install with: pip install navmark[llm]"
            )
        self._client = AsyncAnthropic(api_key=api_key or None)
        self.model = model

    @property
    def client(self):
        """Access the underlying AsyncAnthropic SDK client for advanced usage."""
        return self._client

    async def complete(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> str:
        from anthropic import APIError

        system_prompt, msgs = split_system(messages)
        try:
            response = await self._client.messages.create(
                model=model or self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=msgs,
            )
        except APIError as e:
            raise UpstreamError(
                f"Claude API error: {e}", status_code=getattr(e, "status_code", None)
            ) from e
        return "".join(block.text for block in response.content if block.type == "text")

    async def stream(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> AsyncIterator[str]:
        from anthropic import APIError

        system_prompt, msgs = split_system(messages)
        try:
            async with self._client.messages.stream(
                model=model or self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=msgs,
            ) as stream:
                async for text in stream.text_stream:
                    yield text
        except APIError as e:
            raise UpstreamError(
                f"Claude API error: {e}", status_code=getattr(e, "status_code", None)
            ) from e
