"""ApiHandler Protocol (single-class module).

The streaming-only handler contract every provider handler satisfies.
"""

from __future__ import annotations

from typing import AsyncIterator, List, Protocol, runtime_checkable

from ..models import ApiStreamChunk, Message, ModelDescriptor


@runtime_checkable
class ApiHandler(Protocol):
    """Minimal interface for provider handlers.

    ``create_message`` returns a single-use async iterator of
    :data:`ApiStreamChunk`. It is a plain method returning the iterator (an
    async generator function qualifies), not a coroutine.
    """

    def create_message(self, system_prompt: str, messages: List[Message]) -> AsyncIterator[ApiStreamChunk]:
        """Stream the assistant reply to ``messages``."""
        ...

    def get_model(self) -> ModelDescriptor:
        """Return the model this handler targets."""
        ...
