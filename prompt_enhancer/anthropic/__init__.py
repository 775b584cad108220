"""Anthropic handler package."""

from .client import AnthropicHandler

__all__ = ["AnthropicHandler"]
