"""Errors parts package public surface.

Prefer importing from `prompt_enhancer.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .invalid_input import InvalidInputError
from .classification import classify_exception

__all__ = ["ErrorCode", "ProviderError", "InvalidInputError", "classify_exception"]
