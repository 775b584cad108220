"""Streaming package: aggregation of handler streams and their metrics."""

from .aggregator import TextAccumulator, collect_stream_text
from .streaming_metrics import StreamMetrics

__all__ = ["TextAccumulator", "collect_stream_text", "StreamMetrics"]
