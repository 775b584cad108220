"""Credential environment variables per provider.

``ENV_MAP`` names the canonical API key variable of each provider that needs
one; ``ENV_ALIASES`` lists further accepted names after it. Lookups never
raise: an unknown provider simply has no candidates.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "anthropic": ("CLAUDE_API_KEY",),
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True for values copied from a template rather than real secrets.

    Case-insensitive: any of ``placeholder``, ``changeme``, ``example``, or a
    ``test_`` prefix.
    """
    if val is None:
        return False
    lowered = str(val).strip().lower()
    return lowered.startswith("test_") or any(marker in lowered for marker in _PLACEHOLDER_MARKERS)


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield accepted variable names for ``provider``, canonical first."""
    key = (provider or "").lower()
    seen = set()
    for name in (ENV_MAP.get(key), *ENV_ALIASES.get(key, ())):
        if name and name not in seen:
            seen.add(name)
            yield name


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, variable_name)`` of the first usable key, else ``(None, None)``."""
    for name in get_env_var_candidates(provider):
        value = os.environ.get(name)
        if value and not is_placeholder(value):
            return value, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]
