"""Handler factory.

Purpose
-------
Resolve :class:`ProviderSettings` into a concrete handler implementing
:class:`ApiHandler` (and possibly :class:`SingleCompletionHandler`). Handler
modules are imported lazily with ``importlib`` so that importing the package
does not import every provider SDK.

Timeout and fallback semantics
------------------------------
None. The factory performs no retries or fallbacks; it returns a handler or
raises.

Mock routing
------------
When ``ENHANCER_USE_MOCKS`` is truthy every provider name resolves to
``MockHandler`` (which keeps the requested provider name for logging).
"""

from __future__ import annotations

import os
from importlib import import_module
from typing import Any, Dict, Mapping, Tuple, Type

from .interfaces import ApiHandler
from .models import ProviderSettings

USE_MOCKS_ENV = "ENHANCER_USE_MOCKS"
DEFAULT_PROVIDER = "openai"


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved to a handler class.

    Failure modes: the provider name is not registered, its module cannot be
    imported, the class is missing, or the constructor rejects its arguments.
    """


def _mocks_enabled() -> bool:
    return os.getenv(USE_MOCKS_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


class HandlerFactory:
    """Create handlers from a canonical provider name (``settings.api_provider``)."""

    _HANDLERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "prompt_enhancer.openai.client", "class": "OpenAiHandler"},
        "openrouter": {"module": "prompt_enhancer.openrouter.client", "class": "OpenRouterHandler"},
        "anthropic": {"module": "prompt_enhancer.anthropic.client", "class": "AnthropicHandler"},
        "ollama": {"module": "prompt_enhancer.ollama.client", "class": "OllamaHandler"},
        "mock": {"module": "prompt_enhancer.mock.client", "class": "MockHandler"},
    }

    @classmethod
    def create(cls, settings: ProviderSettings | Mapping[str, Any]) -> ApiHandler:
        """Create the handler selected by ``settings``.

        Parameters
        ----------
        settings:
            ``ProviderSettings`` or a mapping accepted by it. When
            ``api_provider`` is unset, ``"openai"`` is used.

        Returns
        -------
        ApiHandler
            A handler constructed with the validated settings.

        Raises
        ------
        UnknownProviderError
            Unknown provider, import failure, missing class or bad constructor
            arguments. Other constructor exceptions propagate unchanged.
        """
        resolved = ProviderSettings.coerce(settings) or ProviderSettings()
        requested = (resolved.api_provider or DEFAULT_PROVIDER).lower().strip()
        if requested not in cls._HANDLERS:
            raise UnknownProviderError(f"Unknown provider '{resolved.api_provider}'")

        key = "mock" if _mocks_enabled() else requested
        module_path, class_name = cls._HANDLERS[key]["module"], cls._HANDLERS[key]["class"]
        klass = cls._load_class(requested, module_path, class_name)
        kwargs: Dict[str, Any] = {"settings": resolved}
        if key == "mock":
            kwargs["provider"] = requested
        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{requested}' handler constructor: {exc}"
            ) from exc

    @staticmethod
    def _load_class(provider: str, module_path: str, class_name: str) -> Type:
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Handler class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the registered provider names in deterministic order."""
        return tuple(cls._HANDLERS.keys())


def build_api_handler(settings: ProviderSettings | Mapping[str, Any]) -> ApiHandler:
    """Module-level entry point delegating to :meth:`HandlerFactory.create`."""
    return HandlerFactory.create(settings)


__all__ = ["HandlerFactory", "UnknownProviderError", "build_api_handler", "USE_MOCKS_ENV"]
