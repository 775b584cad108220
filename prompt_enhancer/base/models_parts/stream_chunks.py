"""
Chunk types yielded by ``ApiHandler.create_message`` streams.

The stream is a tagged union on ``type``. Consumers that only want text look
at ``"text"`` chunks and skip the rest; usage chunks carry token and cost
telemetry for the whole response.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Union


@dataclass(frozen=True)
class ApiStreamTextChunk:
    """Incremental piece of the assistant's answer."""

    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class ApiStreamReasoningChunk:
    """Incremental piece of model reasoning; never part of the answer text."""

    text: str
    type: Literal["reasoning"] = "reasoning"


@dataclass(frozen=True)
class ApiStreamUsageChunk:
    """Token usage and cost for the response."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_write_tokens: Optional[int] = None
    cache_read_tokens: Optional[int] = None
    total_cost: Optional[float] = None
    type: Literal["usage"] = "usage"


ApiStreamChunk = Union[ApiStreamTextChunk, ApiStreamReasoningChunk, ApiStreamUsageChunk]


def chunk_type(chunk: Any) -> Optional[str]:
    """Return the ``type`` tag of a chunk object or mapping (``None`` if absent)."""
    if isinstance(chunk, Mapping):
        value = chunk.get("type")
    else:
        value = getattr(chunk, "type", None)
    return value if isinstance(value, str) else None


def chunk_field(chunk: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a chunk object or mapping."""
    if isinstance(chunk, Mapping):
        return chunk.get(name, default)
    return getattr(chunk, name, default)


__all__ = [
    "ApiStreamChunk",
    "ApiStreamTextChunk",
    "ApiStreamReasoningChunk",
    "ApiStreamUsageChunk",
    "chunk_type",
    "chunk_field",
]
