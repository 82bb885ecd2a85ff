"""Data models for the chat module."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

SSE_DONE = "data: [DONE]\n\n"


@dataclass
class ChatEvent:
    """One event of a streamed chat reply.

    Exactly one of ``content``, ``recommendations``, ``error`` or ``done``
    is meaningful per event. ``error`` and ``done`` events are terminal.
    """

    content: str = ""
    recommendations: list[dict] = field(default_factory=list)
    error: str | None = None
    done: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.done or self.error is not None

    def to_sse(self) -> str:
        """Render as a server-sent-events frame."""
        if self.done:
            return SSE_DONE
        if self.error is not None:
            payload: dict = {"error": self.error}
        else:
            payload = {"content": self.content}
            if self.recommendations:
                payload["recommendations"] = self.recommendations
        return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"
