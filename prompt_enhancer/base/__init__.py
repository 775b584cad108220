"""
Enhancer base package.

Exports the handler contracts, domain models, factory and streaming helpers
used by the concrete provider handlers and by the one-shot completion helper.
"""

from .errors import ErrorCode, InvalidInputError, ProviderError, classify_exception
from .factory import HandlerFactory, UnknownProviderError, build_api_handler
from .interfaces import ApiHandler, SingleCompletionHandler
from .models import (
    ApiStreamChunk,
    ApiStreamReasoningChunk,
    ApiStreamTextChunk,
    ApiStreamUsageChunk,
    ContentPart,
    Message,
    ModelDescriptor,
    ModelInfo,
    ProviderSettings,
)
from .streaming import StreamMetrics, TextAccumulator, collect_stream_text
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Errors
    "ErrorCode",
    "InvalidInputError",
    "ProviderError",
    "classify_exception",
    # Models
    "ApiStreamChunk",
    "ApiStreamTextChunk",
    "ApiStreamReasoningChunk",
    "ApiStreamUsageChunk",
    "ContentPart",
    "Message",
    "ModelDescriptor",
    "ModelInfo",
    "ProviderSettings",
    # Interfaces
    "ApiHandler",
    "SingleCompletionHandler",
    # Factory
    "HandlerFactory",
    "UnknownProviderError",
    "build_api_handler",
    # Streaming
    "StreamMetrics",
    "TextAccumulator",
    "collect_stream_text",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
