"""OpenAI handler.

Implements both handler variants on top of ``openai.AsyncOpenAI``:
``complete_prompt`` issues a non-streaming Chat Completions request and
``create_message`` streams one with ``stream_options.include_usage`` so a
final usage chunk can be reported.

Other OpenAI-compatible endpoints reuse this class by overriding the provider
name and default base URL (see ``prompt_enhancer.openrouter``).

Timeout semantics: the SDK client timeout comes from
``get_timeout_config().http_timeout_seconds``. The SDK's own retry policy is
disabled (``max_retries=0``); errors reach the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from openai import AsyncOpenAI

from ..base.logging import LogContext, get_logger, normalized_log_event
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
    OPENAI_DEFAULT_CONTEXT_WINDOW,
    OPENAI_DEFAULT_MAX_TOKENS,
    OPENAI_DEFAULT_MODEL,
)

__all__ = ["OpenAiHandler", "to_openai_messages"]


def to_openai_messages(system_prompt: str, messages: List[Message]) -> List[Dict[str, Any]]:
    """Translate messages into Chat Completions payload entries.

    The system prompt is prepended only when non-empty.
    """
    out: List[Dict[str, Any]] = []
    if system_prompt:
        out.append({"role": "system", "content": system_prompt})
    for m in messages:
        out.append({"role": m.role, "content": [p.to_dict() for p in m.content]})
    return out


class OpenAiHandler:
    """Handler for the OpenAI Chat Completions API."""

    provider_name = "openai"
    default_model_id = OPENAI_DEFAULT_MODEL
    default_base_url: Optional[str] = None

    def __init__(self, *, settings: ProviderSettings, client: Optional[AsyncOpenAI] = None) -> None:
        """Resolve credentials and model from ``settings`` then the config layer.

        Args:
            settings: Provider settings selected by the caller.
            client: Pre-built SDK client, mainly for tests.
        """
        cfg = get_provider_config(self.provider_name)
        self._settings = settings
        self._api_key = settings.api_key or cfg.get("api_key")
        self._base_url = settings.base_url or cfg.get("base_url") or self.default_base_url
        self._model_id = settings.api_model_id or cfg.get("model") or self.default_model_id
        self._client = client
        self._logger = get_logger(f"enhancer.{self.provider_name}")

    # ------------------------------------------------------------------
    # ApiHandler

    def get_model(self) -> ModelDescriptor:
        """Return the configured model with default OpenAI limits."""
        return ModelDescriptor(
            id=self._model_id,
            info=ModelInfo(
                max_tokens=OPENAI_DEFAULT_MAX_TOKENS,
                context_window=OPENAI_DEFAULT_CONTEXT_WINDOW,
                supports_prompt_cache=False,
                input_price=self._settings.option("input_price"),
                output_price=self._settings.option("output_price"),
            ),
        )

    async def complete_prompt(self, prompt: str) -> str:
        """Return the first choice's message content for a single user prompt."""
        ctx = LogContext(provider=self.provider_name, model=self._model_id, operation="complete_prompt")
        normalized_log_event(self._logger, "complete.start", ctx, phase="start", level=logging.DEBUG)
        response = await self._get_client().chat.completions.create(
            model=self._model_id,
            messages=[{"role": "user", "content": prompt}],
            **self._request_options(),
        )
        text = response.choices[0].message.content if response.choices else None
        normalized_log_event(self._logger, "complete.end", ctx, phase="finalize", emitted=bool(text), level=logging.DEBUG)
        return text or ""

    async def create_message(self, system_prompt: str, messages: List[Message]) -> AsyncIterator[ApiStreamChunk]:
        """Stream the reply as text, reasoning and a trailing usage chunk."""
        stream = await self._get_client().chat.completions.create(
            model=self._model_id,
            messages=to_openai_messages(system_prompt, messages),
            stream=True,
            stream_options={"include_usage": True},
            **self._request_options(),
        )
        async for chunk in stream:
            if chunk.choices:
                delta = chunk.choices[0].delta
                reasoning = getattr(delta, "reasoning_content", None)
                if reasoning:
                    yield ApiStreamReasoningChunk(text=reasoning)
                if delta.content:
                    yield ApiStreamTextChunk(text=delta.content)
            if chunk.usage is not None:
                yield self._usage_chunk(chunk.usage)

    # ------------------------------------------------------------------
    # Internal helpers

    def _request_options(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {}
        effort = self._settings.option("reasoning_effort")
        if self._settings.enable_reasoning_effort and effort:
            opts["reasoning_effort"] = effort
        temperature = self._settings.option("temperature")
        if temperature is not None:
            opts["temperature"] = temperature
        return opts

    def _usage_chunk(self, usage: Any) -> ApiStreamUsageChunk:
        input_tokens = getattr(usage, "prompt_tokens", 0) or 0
        output_tokens = getattr(usage, "completion_tokens", 0) or 0
        details = getattr(usage, "prompt_tokens_details", None)
        cached = getattr(details, "cached_tokens", None) if details is not None else None
        return ApiStreamUsageChunk(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cache_read_tokens=cached,
            total_cost=self.get_model().info.cost(input_tokens, output_tokens),
        )

    @staticmethod
    def _http_timeout() -> float:
        return get_timeout_config().http_timeout_seconds

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                default_headers=dict(self._settings.headers) or None,
                timeout=self._http_timeout(),
                max_retries=0,
            )
        return self._client
