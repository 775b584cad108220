"""Ollama handler package."""

from .client import OllamaHandler

__all__ = ["OllamaHandler"]
