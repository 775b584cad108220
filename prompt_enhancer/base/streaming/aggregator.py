"""Drain a ``create_message`` stream into the final answer text.

The drain is an explicit pull loop over ``__anext__``. Text fragments go into
a :class:`TextAccumulator` owned by the call; the joined value is produced
only after the iterator signals ``StopAsyncIteration``. Any other exception
leaves the loop before a result exists, so a failed stream can never be
mistaken for a short answer.
"""
from __future__ import annotations

import time
from typing import Any, AsyncIterable, AsyncIterator, List, Optional

from ..models import chunk_field, chunk_type
from .streaming_metrics import StreamMetrics


class TextAccumulator:
    """Append-only buffer of text fragments in arrival order."""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def append(self, fragment: str) -> None:
        self._parts.append(fragment)

    def __len__(self) -> int:
        return len(self._parts)

    def result(self) -> str:
        return "".join(self._parts)


def _observe(chunk: Any, kind: Optional[str], metrics: StreamMetrics) -> None:
    if kind == "usage":
        metrics.input_tokens = chunk_field(chunk, "input_tokens", chunk_field(chunk, "inputTokens"))
        metrics.output_tokens = chunk_field(chunk, "output_tokens", chunk_field(chunk, "outputTokens"))
        metrics.total_cost = chunk_field(chunk, "total_cost", chunk_field(chunk, "totalCost"))
    else:
        metrics.ignored_chunks += 1


async def collect_stream_text(
    stream: AsyncIterable[Any],
    *,
    metrics: Optional[StreamMetrics] = None,
) -> str:
    """Concatenate the ``text`` of every ``"text"`` chunk in ``stream``.

    Parameters
    ----------
    stream:
        Single-use async iterable of stream chunks (dataclasses or mappings
        with a ``type`` key).
    metrics:
        Optional :class:`StreamMetrics` updated in place.

    Returns
    -------
    str
        The joined text, once the stream is exhausted.

    Raises
    ------
    Exception
        Whatever the stream raises, unchanged. Fragments received before the
        failure are discarded with the accumulator.
    """
    metrics = metrics if metrics is not None else StreamMetrics()
    accumulator = TextAccumulator()
    iterator: AsyncIterator[Any] = stream.__aiter__()
    started = time.perf_counter()
    while True:
        try:
            chunk = await iterator.__anext__()
        except StopAsyncIteration:
            break
        metrics.chunks += 1
        kind = chunk_type(chunk)
        if kind == "text":
            text = chunk_field(chunk, "text")
            if text:
                if metrics.time_to_first_token_ms is None:
                    metrics.time_to_first_token_ms = (time.perf_counter() - started) * 1000.0
                accumulator.append(text)
                metrics.text_chunks += 1
            continue
        _observe(chunk, kind, metrics)
    metrics.total_duration_ms = (time.perf_counter() - started) * 1000.0
    return accumulator.result()


__all__ = ["TextAccumulator", "collect_stream_text"]
