"""Unified error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``prompt_enhancer.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.invalid_input import InvalidInputError
from .errors_parts.classification import classify_exception

__all__ = ["ErrorCode", "ProviderError", "InvalidInputError", "classify_exception"]
