"""SingleCompletionHandler Protocol (single-class module).

Capability marker for handlers offering a one-shot completion call.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SingleCompletionHandler(Protocol):
    """Handler that can answer a prompt in one call without streaming.

    Concrete handlers implement this alongside :class:`ApiHandler`; the
    protocol itself only names ``complete_prompt`` so the capability check
    depends on nothing else.
    """

    async def complete_prompt(self, prompt: str) -> str:
        """Return the full completion text for ``prompt``."""
        ...
