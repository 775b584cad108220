"""Timeout configuration for enhancement calls and handler HTTP clients.

Key Components
--------------
TimeoutConfig
    Normalized timeout values in seconds.

get_timeout_config()
    Process-cached configuration parsed from the environment. The cache is
    refreshed whenever one of the variables below changes, so tests can
    adjust them with ``monkeypatch``:
        ENHANCER_TIMEOUT_SECONDS       overall deadline for one enhancement
        ENHANCER_HTTP_TIMEOUT_SECONDS  per-request timeout for SDK/HTTP clients

resolve_deadline(explicit)
    Pick the deadline for a single call: an explicit positive value wins,
    otherwise the configured overall timeout (``None`` means no deadline).

Failure Modes
-------------
The deadline itself is enforced by the caller with ``asyncio.wait_for``; an
expired deadline surfaces as the ``TimeoutError`` asyncio raises.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

OVERALL_TIMEOUT_ENV = "ENHANCER_TIMEOUT_SECONDS"
HTTP_TIMEOUT_ENV = "ENHANCER_HTTP_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        overall_timeout_seconds: Deadline for one enhancement call; ``None``
            disables it.
        http_timeout_seconds: Timeout handed to SDK and ``httpx`` clients.
    """

    overall_timeout_seconds: Optional[float] = None
    http_timeout_seconds: float = 60.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: Optional[float]) -> Optional[float]:
    """Read ``name`` as a positive float; ``default`` when unset or invalid."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join([os.getenv(OVERALL_TIMEOUT_ENV, ""), os.getenv(HTTP_TIMEOUT_ENV, "")])
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    http = _parse_env_float(HTTP_TIMEOUT_ENV, 60.0)
    _CACHED = TimeoutConfig(
        overall_timeout_seconds=_parse_env_float(OVERALL_TIMEOUT_ENV, None),
        http_timeout_seconds=float(http if http is not None else 60.0),
    )
    _ENV_GUARD = guard
    return _CACHED


def resolve_deadline(explicit: Optional[float]) -> Optional[float]:
    """Return the deadline in seconds for one call, or ``None`` for no deadline."""
    if explicit is not None:
        return explicit if explicit > 0 else None
    return get_timeout_config().overall_timeout_seconds


__all__ = ["TimeoutConfig", "get_timeout_config", "resolve_deadline"]
