"""Per-call context merged into every enhancer log event."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Who is logging: provider, model and operation, plus free-form ``extra``.

    ``to_dict`` flattens ``extra`` into the top level and leaves out unset
    values.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        merged = {"provider": self.provider, "model": self.model, "operation": self.operation, **self.extra}
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]
