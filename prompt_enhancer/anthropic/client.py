"""Anthropic handler.

Uses the ``anthropic`` SDK Messages API: ``messages.create`` for
``complete_prompt`` and ``messages.create(stream=True)`` for
``create_message``. Streamed events are translated as follows:

* ``message_start``: input token count (plus cache read/write counts)
* ``content_block_start`` / ``content_block_delta``: ``text`` and
  ``thinking`` blocks become text and reasoning chunks
* ``message_delta``: output token count

A single usage chunk is emitted after the stream ends.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict, List, Optional

from anthropic import AsyncAnthropic

from ..base.models import (
    ApiStreamChunk,
    ApiStreamReasoningChunk,
    ApiStreamTextChunk,
    ApiStreamUsageChunk,
    Message,
    ModelDescriptor,
    ModelInfo,
    ProviderSettings,
)
from ..base.timeouts import get_timeout_config
from ..config import get_provider_config
from ..config.defaults import (
    ANTHROPIC_DEFAULT_CONTEXT_WINDOW,
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_DEFAULT_MODEL,
)

__all__ = ["AnthropicHandler"]


class AnthropicHandler:
    """Handler for the Anthropic Messages API."""

    provider_name = "anthropic"

    def __init__(self, *, settings: ProviderSettings, client: Optional[AsyncAnthropic] = None) -> None:
        cfg = get_provider_config(self.provider_name)
        self._settings = settings
        self._api_key = settings.api_key or cfg.get("api_key")
        self._base_url = settings.base_url or cfg.get("base_url")
        self._model_id = settings.api_model_id or cfg.get("model") or ANTHROPIC_DEFAULT_MODEL
        self._client = client

    def get_model(self) -> ModelDescriptor:
        return ModelDescriptor(
            id=self._model_id,
            info=ModelInfo(
                max_tokens=int(self._settings.option("max_tokens", ANTHROPIC_DEFAULT_MAX_TOKENS)),
                context_window=ANTHROPIC_DEFAULT_CONTEXT_WINDOW,
                supports_prompt_cache=True,
                input_price=self._settings.option("input_price"),
                output_price=self._settings.option("output_price"),
            ),
        )

    async def complete_prompt(self, prompt: str) -> str:
        """Return the concatenated text blocks of a single non-streaming reply."""
        response = await self._get_client().messages.create(
            model=self._model_id,
            max_tokens=self.get_model().info.max_tokens,
            messages=[{"role": "user", "content": prompt}],
            **self._request_options(),
        )
        return "".join(block.text for block in response.content if getattr(block, "type", None) == "text")

    async def create_message(self, system_prompt: str, messages: List[Message]) -> AsyncIterator[ApiStreamChunk]:
        """Stream the reply; see the module docstring for the event mapping."""
        params: Dict[str, Any] = {
            "model": self._model_id,
            "max_tokens": self.get_model().info.max_tokens,
            "messages": [m.to_dict() for m in messages],
            "stream": True,
            **self._request_options(),
        }
        if system_prompt:
            params["system"] = system_prompt
        stream = await self._get_client().messages.create(**params)

        input_tokens = output_tokens = 0
        cache_write: Optional[int] = None
        cache_read: Optional[int] = None
        async for event in stream:
            kind = event.type
            if kind == "message_start":
                usage = event.message.usage
                input_tokens = usage.input_tokens or 0
                output_tokens = usage.output_tokens or 0
                cache_write = getattr(usage, "cache_creation_input_tokens", None)
                cache_read = getattr(usage, "cache_read_input_tokens", None)
            elif kind == "message_delta":
                output_tokens = event.usage.output_tokens or output_tokens
            elif kind == "content_block_start":
                chunk = _block_chunk(event.content_block)
                if chunk is not None:
                    yield chunk
            elif kind == "content_block_delta":
                chunk = _delta_chunk(event.delta)
                if chunk is not None:
                    yield chunk

        yield ApiStreamUsageChunk(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cache_write_tokens=cache_write,
            cache_read_tokens=cache_read,
            total_cost=self.get_model().info.cost(input_tokens, output_tokens),
        )

    def _request_options(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {}
        budget = self._settings.option("thinking_budget_tokens")
        if self._settings.enable_reasoning_effort and budget:
            opts["thinking"] = {"type": "enabled", "budget_tokens": int(budget)}
        temperature = self._settings.option("temperature")
        if temperature is not None:
            opts["temperature"] = temperature
        return opts

    def _get_client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(
                api_key=self._api_key,
                base_url=self._base_url,
                default_headers=dict(self._settings.headers) or None,
                timeout=get_timeout_config().http_timeout_seconds,
                max_retries=0,
            )
        return self._client


def _block_chunk(block: Any) -> Optional[ApiStreamChunk]:
    kind = getattr(block, "type", None)
    if kind == "text" and block.text:
        return ApiStreamTextChunk(text=block.text)
    if kind == "thinking" and getattr(block, "thinking", None):
        return ApiStreamReasoningChunk(text=block.thinking)
    return None


def _delta_chunk(delta: Any) -> Optional[ApiStreamChunk]:
    kind = getattr(delta, "type", None)
    if kind == "text_delta":
        return ApiStreamTextChunk(text=delta.text)
    if kind == "thinking_delta":
        return ApiStreamReasoningChunk(text=delta.thinking)
    return None
