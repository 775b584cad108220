"""
Best-effort ``ErrorCode`` for an arbitrary exception.

Only feeds the ``error_code`` field of ``enhance.error`` log events. The
exception itself is re-raised untouched by the caller.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional, Tuple

from .error_code import ErrorCode
from .invalid_input import InvalidInputError
from .provider_error import ProviderError

_STATUS_CODES: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# First match wins; checked against the lowercased message.
_KEYWORDS: Tuple[Tuple[str, ErrorCode], ...] = (
    ("timed out", ErrorCode.TIMEOUT),
    ("timeout", ErrorCode.TIMEOUT),
    ("rate limit", ErrorCode.RATE_LIMIT),
    ("too many requests", ErrorCode.RATE_LIMIT),
    ("unauthorized", ErrorCode.AUTH),
    ("forbidden", ErrorCode.AUTH),
    ("api key", ErrorCode.AUTH),
    ("not supported", ErrorCode.UNSUPPORTED),
    ("unsupported", ErrorCode.UNSUPPORTED),
    ("not found", ErrorCode.NOT_FOUND),
    ("does not exist", ErrorCode.NOT_FOUND),
    ("connection refused", ErrorCode.UNAVAILABLE),
    ("unavailable", ErrorCode.UNAVAILABLE),
    ("internal error", ErrorCode.SERVER_ERROR),
    ("server error", ErrorCode.SERVER_ERROR),
)


def _http_status(exc: BaseException) -> Optional[int]:
    """HTTP status carried by SDK errors (``status_code``) or ``httpx`` errors (``response``)."""
    response = getattr(exc, "response", None)
    for candidate in (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(response, "status_code", None),
    ):
        if isinstance(candidate, int) and 100 <= candidate <= 599:
            return candidate
    return None


def _status_code(status: int) -> Optional[ErrorCode]:
    if status in _STATUS_CODES:
        return _STATUS_CODES[status]
    if status >= 500:
        return ErrorCode.SERVER_ERROR
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Return the :class:`ErrorCode` for ``exc``.

    Order: codes carried by our own error types, cancellation and timeouts,
    HTTP status, message keywords, then ``UNKNOWN``.
    """
    if isinstance(exc, (ProviderError, InvalidInputError)):
        return exc.code
    if isinstance(exc, asyncio.CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _http_status(exc)
    if status is not None:
        code = _status_code(status)
        if code is not None:
            return code
    message = str(exc).lower()
    return next((code for keyword, code in _KEYWORDS if keyword in message), ErrorCode.UNKNOWN)


__all__ = ["classify_exception"]
