"""Error raised by a handler for failures the provider reports in-band.

Example: an Ollama stream line carrying ``{"error": "..."}`` instead of a
message. SDK and transport exceptions are never converted to this type.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """In-band provider failure.

    ``str()`` returns ``message`` unchanged so callers see the provider's own
    wording.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None

    def __str__(self) -> str:
        return self.message


__all__ = ["ProviderError"]
