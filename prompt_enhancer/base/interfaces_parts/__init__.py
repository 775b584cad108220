"""Single-class protocol modules re-exported by ``base.interfaces``."""

from .api_handler import ApiHandler
from .single_completion_handler import SingleCompletionHandler

__all__ = ["ApiHandler", "SingleCompletionHandler"]
