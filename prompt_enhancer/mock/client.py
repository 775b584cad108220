"""Deterministic mock handler backed by JSON fixtures for offline use.

Purpose
-------
Implement the streaming-only handler contract without network traffic so the
CLI, logging and the stream aggregation path can be exercised end to end.
The factory routes every provider here when ``ENHANCER_USE_MOCKS`` is set.

Fixture lookup
--------------
The last user message's text selects a response from the provider block (or
the ``"*"`` provider block), trying the exact text, its lowercase form, then
the ``"*"`` wildcard entry. ``{prompt}`` in a fixture text is replaced with the
prompt itself. Responses stream in fixed-size chunks (or the fixture's
explicit ``stream`` list) followed by one usage chunk.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from importlib import resources
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    ApiStreamChunk,
    ApiStreamTextChunk,
    ApiStreamUsageChunk,
    Message,
    ModelDescriptor,
    ModelInfo,
    ProviderSettings,
)

_FIXTURE_RESOURCE = "enhancements.json"
_DEFAULT_CHUNK_SIZE = 16


@dataclass
class FixtureResponse:
    """A single fixture response entry."""

    text: str
    stream: List[str]
    usage: Mapping[str, Any] = field(default_factory=dict)


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON fixture catalog bundled under ``prompt_enhancer.mock.fixtures``."""
    data = resources.files("prompt_enhancer.mock.fixtures").joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


class MockHandler:
    """Streaming-only handler returning canned fixture responses."""

    def __init__(
        self,
        *,
        settings: Optional[ProviderSettings] = None,
        provider: str = "mock",
        catalog: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the handler.

        Parameters
        ----------
        settings:
            Caller settings; ``api_model_id`` overrides the fixture model and
            ``extra["chunk_size"]`` overrides the streaming chunk size.
        provider:
            Logical provider name for logging. When the factory routes a real
            provider here this is the requested provider key.
        catalog:
            Pre-parsed fixture catalog, mainly for tests.
        """
        self._settings = settings or ProviderSettings()
        self._provider = provider or "mock"
        self._catalog = catalog if catalog is not None else load_fixture_catalog()
        self._logger = get_logger(f"enhancer.mock.{self._provider}")
        providers = self._catalog.get("providers", {})
        self._fallback_block: Mapping[str, Any] = providers.get("*", {})
        self._provider_block: Mapping[str, Any] = providers.get(self._provider, self._fallback_block)
        self._model_id = str(
            self._settings.api_model_id
            or self._provider_block.get("model")
            or self._catalog.get("default_model", "mock-enhancer")
        )
        self._chunk_size = int(self._settings.option("chunk_size", _DEFAULT_CHUNK_SIZE))

    @property
    def provider_name(self) -> str:
        return self._provider

    def get_model(self) -> ModelDescriptor:
        return ModelDescriptor(id=self._model_id, info=ModelInfo(max_tokens=4096, context_window=8192))

    async def create_message(self, system_prompt: str, messages: List[Message]) -> AsyncIterator[ApiStreamChunk]:
        """Yield the selected fixture as text chunks followed by a usage chunk."""
        prompt = messages[-1].text().strip() if messages else ""
        entry = self._select_response(prompt)
        ctx = LogContext(provider=self._provider, model=self._model_id, operation="create_message")
        normalized_log_event(self._logger, "stream.mock.start", ctx, phase="start")
        for piece in entry.stream:
            yield ApiStreamTextChunk(text=piece)
        yield ApiStreamUsageChunk(
            input_tokens=int(entry.usage.get("input_tokens", 0)),
            output_tokens=int(entry.usage.get("output_tokens", 0)),
            total_cost=entry.usage.get("total_cost"),
        )
        normalized_log_event(self._logger, "stream.mock.complete", ctx, phase="finalize", emitted=bool(entry.stream))

    def _select_response(self, prompt: str) -> FixtureResponse:
        key = prompt or "*"
        responses = self._provider_block.get("responses", {})
        fallback = self._fallback_block.get("responses", {})
        raw = (
            responses.get(key)
            or responses.get(key.lower())
            or fallback.get(key)
            or fallback.get(key.lower())
            or responses.get("*")
            or fallback.get("*")
            or {"text": ""}
        )
        text = str(raw.get("text", "")).replace("{prompt}", prompt)
        stream = [str(s) for s in raw.get("stream", [])] or _chunk_text(text, self._chunk_size)
        return FixtureResponse(text=text, stream=stream, usage=raw.get("usage", {}) or {})


def _chunk_text(text: str, chunk_size: int = _DEFAULT_CHUNK_SIZE) -> List[str]:
    """Split ``text`` into ``chunk_size`` pieces (empty text yields no chunks)."""
    if not text:
        return []
    return [text[i : i + chunk_size] for i in range(0, len(text), chunk_size)]


__all__ = ["MockHandler", "load_fixture_catalog"]
