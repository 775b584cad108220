"""Convenience helpers built on the handler interfaces."""

from .single_completion import enhance_prompt, single_completion_handler

__all__ = ["enhance_prompt", "single_completion_handler"]
