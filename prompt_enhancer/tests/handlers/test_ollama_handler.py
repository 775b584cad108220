"""OllamaHandler against an in-process ``httpx.MockTransport``."""

from __future__ import annotations

import json

import httpx
import pytest

from prompt_enhancer.base.errors import ErrorCode, ProviderError
from prompt_enhancer.base.interfaces import SingleCompletionHandler
from prompt_enhancer.base.models import Message, ProviderSettings
from prompt_enhancer.base.utils import single_completion_handler
from prompt_enhancer.base.utils import single_completion as sc
from prompt_enhancer.ollama import OllamaHandler
from prompt_enhancer.ollama.client import build_chat_payload


def _ndjson(*objs) -> bytes:
    return ("\n".join(json.dumps(o) for o in objs) + "\n").encode("utf-8")


def _handler(body: bytes, status: int = 200, seen=None) -> OllamaHandler:
    def _respond(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(json.loads(request.content))
        return httpx.Response(status, content=body)

    client = httpx.AsyncClient(transport=httpx.MockTransport(_respond), base_url="http://ollama.test")
    return OllamaHandler(settings=ProviderSettings(api_provider="ollama", api_model_id="llama3.1"), client=client)


def test_build_chat_payload_flattens_text():
    payload = build_chat_payload("m", "", [Message.user_text("hi")])
    assert payload == {"model": "m", "messages": [{"role": "user", "content": "hi"}], "stream": True}  # nosec B101
    with_system = build_chat_payload("m", "sys", [])
    assert with_system["messages"] == [{"role": "system", "content": "sys"}]  # nosec B101


def test_streaming_only_and_defaults():
    handler = OllamaHandler(settings=ProviderSettings(api_provider="ollama", base_url="  "))
    assert not isinstance(handler, SingleCompletionHandler)  # nosec B101
    assert handler.get_model().id == "llama3.1"  # nosec B101
    assert handler.get_model().info.context_window == 8192  # nosec B101


@pytest.mark.asyncio
async def test_stream_yields_text_then_usage():
    seen = []
    handler = _handler(
        _ndjson(
            {"message": {"content": "Better "}, "done": False},
            {"message": {"content": "prompt"}, "done": False},
            {"message": {"content": ""}, "done": True, "prompt_eval_count": 9, "eval_count": 2},
        ),
        seen=seen,
    )
    chunks = [c async for c in handler.create_message("", [Message.user_text("p")])]
    assert [c.type for c in chunks] == ["text", "text", "usage"]  # nosec B101
    assert chunks[-1].input_tokens == 9 and chunks[-1].output_tokens == 2  # nosec B101
    assert seen[0]["messages"] == [{"role": "user", "content": "p"}]  # nosec B101


@pytest.mark.asyncio
async def test_adapter_streams_through_ollama(monkeypatch):
    handler = _handler(_ndjson({"message": {"content": "Enhanced prompt"}, "done": True}))
    monkeypatch.setattr(sc, "build_api_handler", lambda settings: handler)
    assert await single_completion_handler({"apiProvider": "ollama"}, "p") == "Enhanced prompt"  # nosec B101


@pytest.mark.asyncio
async def test_error_line_raises_provider_error():
    handler = _handler(_ndjson({"message": {"content": "part"}}, {"error": "model not found"}))
    with pytest.raises(ProviderError) as ei:
        [c async for c in handler.create_message("", [Message.user_text("p")])]
    assert ei.value.code is ErrorCode.SERVER_ERROR  # nosec B101
    assert str(ei.value) == "model not found"  # nosec B101


@pytest.mark.asyncio
async def test_http_status_error_propagates():
    handler = _handler(b"{}", status=500)
    with pytest.raises(httpx.HTTPStatusError):
        [c async for c in handler.create_message("", [Message.user_text("p")])]
