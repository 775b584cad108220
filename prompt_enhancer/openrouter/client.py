"""OpenRouter handler.

OpenRouter exposes an OpenAI-compatible Chat Completions endpoint, so this
handler reuses :class:`OpenAiHandler` with OpenRouter's base URL, default
model and attribution headers. Usage chunks report the ``cost`` field
OpenRouter adds to the usage object when present.
"""

from __future__ import annotations

from typing import Any, Dict

from openai import AsyncOpenAI

from ..base.models import ApiStreamUsageChunk
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_MODEL
from ..openai.client import OpenAiHandler

_ATTRIBUTION_HEADERS: Dict[str, str] = {
    "HTTP-Referer": "https://github.com/prompt-enhancer/prompt-enhancer",
    "X-Title": "prompt-enhancer",
}


class OpenRouterHandler(OpenAiHandler):
    """Handler for OpenRouter's OpenAI-compatible API."""

    provider_name = "openrouter"
    default_model_id = OPENROUTER_DEFAULT_MODEL
    default_base_url = OPENROUTER_DEFAULT_BASE_URL

    def _usage_chunk(self, usage: Any) -> ApiStreamUsageChunk:
        chunk = super()._usage_chunk(usage)
        reported = getattr(usage, "cost", None)
        if reported is None:
            return chunk
        return ApiStreamUsageChunk(
            input_tokens=chunk.input_tokens,
            output_tokens=chunk.output_tokens,
            cache_read_tokens=chunk.cache_read_tokens,
            total_cost=float(reported),
        )

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            headers = dict(_ATTRIBUTION_HEADERS)
            headers.update(self._settings.headers)
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                default_headers=headers,
                timeout=self._http_timeout(),
                max_retries=0,
            )
        return self._client
