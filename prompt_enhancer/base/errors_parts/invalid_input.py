"""Local input validation error raised before any handler is resolved."""
from __future__ import annotations

from .error_code import ErrorCode


class InvalidInputError(ValueError):
    """Raised when the prompt text or provider settings are unusable.

    The message is part of the public contract; callers match on it, so it is
    returned verbatim by ``str()``.
    """

    code = ErrorCode.VALIDATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


__all__ = ["InvalidInputError"]
