"""
Message DTO sent to ``ApiHandler.create_message``.

Content is always a list of ``ContentPart`` blocks, which is the shape every
bundled handler translates into its SDK payload.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

from .content_part import ContentPart

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A chat message made of content blocks.

    Attributes:
        role: ``"user"`` or ``"assistant"``. System text travels separately as
            the ``system_prompt`` argument of ``create_message``.
        content: Ordered content blocks.
    """

    role: Role
    content: List[ContentPart] = field(default_factory=list)

    @classmethod
    def user_text(cls, text: str) -> "Message":
        """Build a user message holding a single text block."""
        return cls(role="user", content=[ContentPart(type="text", text=text)])

    def text(self) -> str:
        """Return the text blocks joined with newlines."""
        return "\n".join(p.text for p in self.content if p.type == "text")

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": [p.to_dict() for p in self.content]}


__all__ = ["Message", "Role"]
