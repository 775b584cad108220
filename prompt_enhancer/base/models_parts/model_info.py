"""
Model descriptor returned by ``ApiHandler.get_model``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelInfo:
    """Static capabilities and pricing of a model.

    Attributes:
        max_tokens: Maximum completion tokens the handler requests.
        context_window: Total context window in tokens.
        supports_prompt_cache: Whether the provider offers prompt caching.
        input_price: USD per million input tokens, when known.
        output_price: USD per million output tokens, when known.
    """

    max_tokens: Optional[int] = None
    context_window: Optional[int] = None
    supports_prompt_cache: bool = False
    input_price: Optional[float] = None
    output_price: Optional[float] = None

    def cost(self, input_tokens: int, output_tokens: int) -> Optional[float]:
        """Return the USD cost of a call, or ``None`` when prices are unknown."""
        if self.input_price is None or self.output_price is None:
            return None
        return (input_tokens * self.input_price + output_tokens * self.output_price) / 1_000_000


@dataclass(frozen=True)
class ModelDescriptor:
    """Pair of model id and its :class:`ModelInfo`."""

    id: str
    info: ModelInfo = field(default_factory=ModelInfo)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ModelInfo", "ModelDescriptor"]
