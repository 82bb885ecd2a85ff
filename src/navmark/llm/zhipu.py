"""Zhipu GLM (OpenAI-compatible chat completions) backend over httpx."""

from __future__ import annotations

import json
import logging
import os
from typing import AsyncIterator

import httpx

from navmark import config
from navmark.exceptions import LLMError, UpstreamError
from navmark.llm.base import BaseChatBackend

logger = logging.getLogger(__name__)

_SSE_PREFIX = "data:"
_SSE_DONE = "[DONE]"


def parse_sse_line(line: str) -> str | None:
    """Content delta carried by one SSE line, ``""`` for none, None at ``[DONE]``."""
    line = line.strip()
    if not line.startswith(_SSE_PREFIX):
        return ""
    data = line[len(_SSE_PREFIX):].strip()
    if data == _SSE_DONE:
        return None
    try:
        parsed = json.loads(data)
    except json.JSONDecodeError:
        return ""
    choices = parsed.get("choices") or []
    if not choices:
        return ""
    delta = choices[0].get("delta") or {}
    return delta.get("content") or ""


class ZhipuChatClient(BaseChatBackend):
    """Chat completions against ``{base_url}/chat/completions``.

    Args:
        api_key: Bearer token. Falls back to ``ZHIPU_API_KEY``.
        model: Default model identifier.
        base_url: API root, without the trailing ``/chat/completions``.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = config.DEFAULT_LLM_MODEL,
        base_url: str = config.ZHIPU_BASE_URL,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        api_key = api_key or os.environ.get("ZHIPU_API_KEY")
        if not api_key:
            raise LLMError(
                "Zhipu API key is required. "
                "Pass it directly or set ZHIPU_API_KEY in your environment."
            )
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )

    def _payload(self, messages, model, temperature, max_tokens, stream) -> dict:
        return {
            "model": model or self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "stream": stream,
        }

    async def complete(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> str:
        try:
            async with self._client() as client:
                response = await client.post(
                    "/chat/completions",
                    json=self._payload(messages, model, temperature, max_tokens, False),
                )
                if not response.is_success:
                    raise UpstreamError(
                        f"API request failed: {response.status_code} - {response.text}",
                        status_code=response.status_code,
                    )
                data = response.json()
        except LLMError:
            raise
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"Zhipu API error: {e}") from e

        choices = data.get("choices") or []
        if not choices:
            raise UpstreamError("No response from model")
        return choices[0].get("message", {}).get("content") or ""

    async def stream(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> AsyncIterator[str]:
        try:
            async with self._client() as client:
                async with client.stream(
                    "POST",
                    "/chat/completions",
                    json=self._payload(messages, model, temperature, max_tokens, True),
                ) as response:
                    if not response.is_success:
                        body = (await response.aread()).decode("utf-8", errors="replace")
                        raise UpstreamError(
                            f"API request failed: {response.status_code} - {body}",
                            status_code=response.status_code,
                        )
                    async for line in response.aiter_lines():
                        delta = parse_sse_line(line)
                        if delta is None:
                            return
                        if delta:
                            yield delta
        except LLMError:
            raise
        except httpx.HTTPError as e:
            raise UpstreamError(f"Zhipu stream error: {e}") from e
