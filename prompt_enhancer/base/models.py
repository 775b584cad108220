"""
Provider-agnostic domain models public surface.

Re-exports the one-class-per-file implementations under
``prompt_enhancer.base.models_parts``.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import Message, Role
from .models_parts.model_info import ModelDescriptor, ModelInfo
from .models_parts.provider_settings import ProviderSettings
from .models_parts.stream_chunks import (
    ApiStreamChunk,
    ApiStreamReasoningChunk,
    ApiStreamTextChunk,
    ApiStreamUsageChunk,
    chunk_field,
    chunk_type,
)

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "ModelInfo",
    "ModelDescriptor",
    "ProviderSettings",
    "ApiStreamChunk",
    "ApiStreamTextChunk",
    "ApiStreamReasoningChunk",
    "ApiStreamUsageChunk",
    "chunk_type",
    "chunk_field",
]
