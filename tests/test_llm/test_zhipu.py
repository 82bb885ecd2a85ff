"""Tests for the Zhipu chat-completions backend."""

import asyncio
import json

import httpx
import pytest

from navmark.exceptions import LLMError, UpstreamError
from navmark.llm.zhipu import ZhipuChatClient, parse_sse_line


def _client(handler, **kwargs):
    return ZhipuChatClient(
        api_key="test-key",
        base_url="https://llm.example.com/api/v4/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


async def _collect(agen):
    return [chunk async for chunk in agen]


def _sse(*deltas):
    lines = [
        "data: " + json.dumps({"choices": [{"delta": {"content": d}}]}, ensure_ascii=False)
        for d in deltas
    ]
    lines.append("data: [DONE]")
    return "\n\n".join(lines) + "\n\n"


def test_requires_api_key(monkeypatch):
    monkeypatch.delenv("ZHIPU_API_KEY", raising=False)
    with pytest.raises(LLMError, match="API key is required"):
        ZhipuChatClient()


def test_api_key_from_env(monkeypatch):
    monkeypatch.setenv("ZHIPU_API_KEY", "env-key")
    assert ZhipuChatClient().api_key == "env-key"


def test_parse_sse_line():
    assert parse_sse_line('data: {"choices": [{"delta": {"content": "你好"}}]}') == "你好"
    assert parse_sse_line("data: [DONE]") is None
    assert parse_sse_line("") == ""
    assert parse_sse_line(": keep-alive") == ""
    assert parse_sse_line("data: not json") == ""
    assert parse_sse_line('data: {"choices": []}') == ""
    assert parse_sse_line('data: {"choices": [{"delta": {}}]}') == ""


def test_complete_posts_chat_completion():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    reply = asyncio.run(_client(handler).complete(
        [{"role": "user", "content": "hi"}], temperature=0.3
    ))
    assert reply == "ok"
    assert seen["url"] == "https://llm.example.com/api/v4/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    assert seen["body"]["model"] == "glm-4-flash"
    assert seen["body"]["temperature"] == 0.3
    assert seen["body"]["stream"] is False


def test_complete_model_override():
    def handler(request):
        assert json.loads(request.content)["model"] == "glm-4-plus"
        return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

    assert asyncio.run(_client(handler).complete([], model="glm-4-plus")) == "ok"


def test_complete_error_status():
    def handler(request):
        return httpx.Response(401, text="bad key")

    with pytest.raises(UpstreamError, match="401") as exc_info:
        asyncio.run(_client(handler).complete([{"role": "user", "content": "hi"}]))
    assert exc_info.value.status_code == 401


def test_complete_empty_choices():
    def handler(request):
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(UpstreamError, match="No response"):
        asyncio.run(_client(handler).complete([{"role": "user", "content": "hi"}]))


def test_complete_connection_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(UpstreamError, match="Zhipu API error"):
        asyncio.run(_client(handler).complete([{"role": "user", "content": "hi"}]))


def test_stream_yields_deltas_until_done():
    def handler(request):
        assert json.loads(request.content)["stream"] is True
        body = _sse("你", "好") + _sse("never")
        return httpx.Response(200, text=body, headers={"content-type": "text/event-stream"})

    chunks = asyncio.run(_collect(_client(handler).stream([{"role": "user", "content": "hi"}])))
    assert chunks == ["你", "好"]


def test_stream_error_status():
    def handler(request):
        return httpx.Response(503, text="overloaded")

    with pytest.raises(UpstreamError, match="503"):
        asyncio.run(_collect(_client(handler).stream([{"role": "user", "content": "hi"}])))
