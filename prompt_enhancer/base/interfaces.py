"""
Provider-agnostic handler interfaces.

Two variants exist: every handler is an :class:`ApiHandler` (streaming via
``create_message``); handlers that also offer ``complete_prompt`` are
:class:`SingleCompletionHandler`. Callers pick the path with a single
``isinstance`` check against these protocols.
"""

from __future__ import annotations

from .interfaces_parts import ApiHandler, SingleCompletionHandler

__all__ = ["ApiHandler", "SingleCompletionHandler"]
