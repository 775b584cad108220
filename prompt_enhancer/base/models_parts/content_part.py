"""
Structured content part carried inside a chat ``Message``.

Only text parts are produced by this package; the literal leaves room for the
image parts some handlers accept.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal

ContentPartType = Literal["text", "image"]


@dataclass(frozen=True)
class ContentPart:
    """A single block of message content.

    Attributes:
        type: Content kind; ``"text"`` for plain text blocks.
        text: Text payload for ``"text"`` parts.
    """

    type: ContentPartType
    text: str

    def to_dict(self) -> Dict[str, Any]:
        """Return ``{"type": ..., "text": ...}``."""
        return asdict(self)


__all__ = ["ContentPart", "ContentPartType"]
