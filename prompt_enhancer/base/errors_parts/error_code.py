"""Failure categories attached to enhancer log events.

The string values appear verbatim in logs (``error_code``) and should not be
renamed.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Coarse cause of a failed enhancement."""

    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
