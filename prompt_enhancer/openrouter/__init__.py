"""OpenRouter handler package."""

from .client import OpenRouterHandler

__all__ = ["OpenRouterHandler"]
