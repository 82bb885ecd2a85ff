"""Shared fixtures."""

import pytest

from navmark.exceptions import UpstreamError
from navmark.llm.base import BaseChatBackend


class FakeChatBackend(BaseChatBackend):
    """Scripted backend: returns ``reply`` or streams ``chunks``."""

    def __init__(self, reply="", chunks=(), error=None, fail_after=None):
        self.model = "fake-model"
        self.reply = reply
        self.chunks = list(chunks)
        self.error = error
        self.fail_after = fail_after
        self.calls = []
        self.stream_closed = False
        self.chunks_sent = 0

    async def complete(self, messages, model=None, temperature=0.7, max_tokens=4096):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply

    async def stream(self, messages, model=None, temperature=0.7, max_tokens=4096):
        self.calls.append(messages)
        try:
            for i, chunk in enumerate(self.chunks):
                if self.fail_after is not None and i >= self.fail_after:
                    raise self.error or UpstreamError("stream broke")
                self.chunks_sent += 1
                yield chunk
            if self.error is not None and self.fail_after is None:
                raise self.error
        finally:
            self.stream_closed = True


@pytest.fixture
def make_backend():
    return FakeChatBackend
