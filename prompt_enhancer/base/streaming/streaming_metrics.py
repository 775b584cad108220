"""Streaming metrics collected while draining a ``create_message`` stream."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters for one stream drain.

    Attributes:
        chunks: Total chunks received, any type.
        text_chunks: Chunks that contributed answer text.
        ignored_chunks: Chunks skipped by the aggregator (reasoning, unknown).
        time_to_first_token_ms: Delay until the first text chunk.
        total_duration_ms: Wall time for the whole drain.
        input_tokens / output_tokens / total_cost: Copied from usage chunks.
    """

    chunks: int = 0
    text_chunks: int = 0
    ignored_chunks: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_cost: Optional[float] = None

    def token_usage(self) -> Optional[Dict[str, Any]]:
        """Return ``{"prompt", "completion", "total"}`` or ``None`` when no usage arrived."""
        if self.input_tokens is None and self.output_tokens is None:
            return None
        total = None
        if self.input_tokens is not None and self.output_tokens is not None:
            total = self.input_tokens + self.output_tokens
        return {"prompt": self.input_tokens, "completion": self.output_tokens, "total": total}


__all__ = ["StreamMetrics"]
