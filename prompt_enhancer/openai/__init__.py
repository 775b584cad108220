"""OpenAI handler package."""

from .client import OpenAiHandler

__all__ = ["OpenAiHandler"]
