"""Ollama handler.

Purpose:
        Streams chat replies from a local Ollama daemon (default
        ``http://localhost:11434``) via ``POST /api/chat``. Ollama offers no
        separate one-shot endpoint here, so this handler implements only the
        streaming contract and prompt enhancement goes through the stream
        aggregation path.

External dependencies:
        - ``httpx.AsyncClient``. No API key is required.

Wire format:
        The response body is NDJSON. Each line carries
        ``{"message": {"content": "..."}, "done": false}``; the final line has
        ``"done": true`` plus ``prompt_eval_count`` / ``eval_count`` token
        counts. A line with an ``"error"`` key aborts the stream with
        :class:`ProviderError`.

Timeout strategy:
        The client timeout comes from ``get_timeout_config()``; HTTP status
        errors are raised with ``raise_for_status`` and reach the caller
        unchanged.
"""

from __future__ import annotations

import json
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

from ..base.errors import ErrorCode, ProviderError
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
from ..config.defaults import OLLAMA_DEFAULT_CONTEXT_WINDOW, OLLAMA_DEFAULT_HOST, OLLAMA_DEFAULT_MODEL

__all__ = ["OllamaHandler", "build_chat_payload"]


def _coerce_non_empty_str(candidate: Any, fallback: str) -> str:
    """Return ``candidate`` stripped, or ``fallback`` when it is empty or missing."""
    if candidate is None:
        return fallback
    stripped = str(candidate).strip()
    return stripped or fallback


def build_chat_payload(model: str, system_prompt: str, messages: List[Message]) -> Dict[str, Any]:
    """Build the ``/api/chat`` request body with flattened text content."""
    chat: List[Dict[str, str]] = []
    if system_prompt:
        chat.append({"role": "system", "content": system_prompt})
    chat.extend({"role": m.role, "content": m.text()} for m in messages)
    return {"model": model, "messages": chat, "stream": True}


class OllamaHandler:
    """Streaming-only handler for a local Ollama server."""

    provider_name = "ollama"

    def __init__(self, *, settings: ProviderSettings, client: Optional[httpx.AsyncClient] = None) -> None:
        cfg = get_provider_config(self.provider_name)
        self._settings = settings
        self._host = _coerce_non_empty_str(settings.base_url or cfg.get("base_url"), OLLAMA_DEFAULT_HOST).rstrip("/")
        self._model_id = _coerce_non_empty_str(settings.api_model_id or cfg.get("model"), OLLAMA_DEFAULT_MODEL)
        self._client = client
        self._logger = get_logger("enhancer.ollama")

    def get_model(self) -> ModelDescriptor:
        return ModelDescriptor(
            id=self._model_id,
            info=ModelInfo(
                context_window=int(self._settings.option("num_ctx", OLLAMA_DEFAULT_CONTEXT_WINDOW)),
                supports_prompt_cache=False,
                input_price=0.0,
                output_price=0.0,
            ),
        )

    async def create_message(self, system_prompt: str, messages: List[Message]) -> AsyncIterator[ApiStreamChunk]:
        """Stream ``/api/chat`` NDJSON lines as text chunks and a final usage chunk."""
        payload = build_chat_payload(self._model_id, system_prompt, messages)
        ctx = LogContext(provider=self.provider_name, model=self._model_id, operation="create_message")
        owns_client = self._client is None
        client = self._client or httpx.AsyncClient(
            base_url=self._host,
            headers=dict(self._settings.headers),
            timeout=get_timeout_config().http_timeout_seconds,
        )
        try:
            async with client.stream("POST", "/api/chat", json=payload) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    obj = json.loads(line)
                    if obj.get("error"):
                        normalized_log_event(
                            self._logger,
                            "stream.error",
                            ctx,
                            phase="mid_stream",
                            error_code=ErrorCode.SERVER_ERROR.value,
                        )
                        raise ProviderError(
                            code=ErrorCode.SERVER_ERROR,
                            message=str(obj["error"]),
                            provider=self.provider_name,
                            model=self._model_id,
                        )
                    message = obj.get("message") or {}
                    thinking = message.get("thinking")
                    if thinking:
                        yield ApiStreamReasoningChunk(text=thinking)
                    content = message.get("content")
                    if content:
                        yield ApiStreamTextChunk(text=content)
                    if obj.get("done"):
                        yield ApiStreamUsageChunk(
                            input_tokens=int(obj.get("prompt_eval_count") or 0),
                            output_tokens=int(obj.get("eval_count") or 0),
                            total_cost=0.0,
                        )
        finally:
            if owns_client:
                await client.aclose()
