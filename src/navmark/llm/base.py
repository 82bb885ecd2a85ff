"""Abstract base class for chat-model backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator


class BaseChatBackend(ABC):
    """Abstract interface for a chat-completion endpoint.

    Messages are ``[{"role": "system" | "user" | "assistant", "content": str}, ...]``.
    """

    model: str

    @abstractmethod
    async def complete(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> str:
        """Return the full completion text."""
        ...

    @abstractmethod
    def stream(
        self,
        messages: list[dict],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ) -> AsyncIterator[str]:
        """Yield content deltas until the endpoint signals completion."""
        ...
