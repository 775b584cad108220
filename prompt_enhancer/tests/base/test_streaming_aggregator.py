"""Unit tests for ``collect_stream_text`` and ``StreamMetrics``."""

from __future__ import annotations

import pytest

from prompt_enhancer.base.models import ApiStreamReasoningChunk, ApiStreamTextChunk, ApiStreamUsageChunk
from prompt_enhancer.base.streaming import StreamMetrics, TextAccumulator, collect_stream_text


async def _gen(items):
    for item in items:
        if isinstance(item, BaseException):
            raise item
        yield item


class _CountingIterator:
    """Async iterator that records how many items were pulled."""

    def __init__(self, items):
        self._items = list(items)
        self.pulled = 0

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.pulled >= len(self._items):
            raise StopAsyncIteration
        item = self._items[self.pulled]
        self.pulled += 1
        return item


@pytest.mark.asyncio
async def test_text_chunks_joined_in_arrival_order():
    chunks = [ApiStreamTextChunk(text=t) for t in ("a", "b", "c")]
    assert await collect_stream_text(_gen(chunks)) == "abc"  # nosec B101


@pytest.mark.asyncio
async def test_metrics_record_usage_and_ignored_chunks():
    metrics = StreamMetrics()
    items = [
        ApiStreamReasoningChunk(text="hmm"),
        ApiStreamTextChunk(text="x"),
        {"type": "text", "text": ""},
        {"type": "unknown"},
        ApiStreamUsageChunk(input_tokens=7, output_tokens=2, total_cost=0.5),
    ]

    assert await collect_stream_text(_gen(items), metrics=metrics) == "x"  # nosec B101
    assert metrics.chunks == 5  # nosec B101
    assert metrics.text_chunks == 1  # nosec B101
    assert metrics.ignored_chunks == 2  # nosec B101
    assert metrics.token_usage() == {"prompt": 7, "completion": 2, "total": 9}  # nosec B101
    assert metrics.total_cost == 0.5  # nosec B101
    assert metrics.time_to_first_token_ms is not None  # nosec B101
    assert metrics.total_duration_ms is not None  # nosec B101


@pytest.mark.asyncio
async def test_error_propagates_unchanged():
    error = ValueError("Stream error")
    with pytest.raises(ValueError) as ei:
        await collect_stream_text(_gen([{"type": "text", "text": "a"}, error, {"type": "text", "text": "b"}]))
    assert ei.value is error  # nosec B101


@pytest.mark.asyncio
async def test_plain_async_iterator_is_drained_once():
    it = _CountingIterator([{"type": "text", "text": "one"}, {"type": "text", "text": "two"}])
    assert await collect_stream_text(it) == "onetwo"  # nosec B101
    assert it.pulled == 2  # nosec B101


def test_token_usage_none_without_usage_chunk():
    assert StreamMetrics().token_usage() is None  # nosec B101


def test_text_accumulator():
    acc = TextAccumulator()
    acc.append("x")
    acc.append("y")
    assert len(acc) == 2  # nosec B101
    assert acc.result() == "xy"  # nosec B101
