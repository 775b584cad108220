"""prompt_enhancer package

Turns a short user prompt into a richer one by sending it through an LLM
provider in a single request.

Purpose:
    Offer one call, :func:`single_completion_handler` (alias
    :func:`enhance_prompt`), that works for every provider: handlers that can
    answer in one shot are asked directly, the rest are streamed and their
    text chunks concatenated.

Public API (re-exported):
    - Version: ``__version__``
    - Adapter: :func:`single_completion_handler`, :func:`enhance_prompt`
    - Factory: :func:`build_api_handler`, :class:`HandlerFactory`
    - Settings: :class:`ProviderSettings`
    - Exceptions: :class:`InvalidInputError`, :class:`UnknownProviderError`,
      :class:`ProviderError`, :class:`ErrorCode`
    - Templates: :mod:`prompt_enhancer.support_prompt`

Example::

    from prompt_enhancer import enhance_prompt, support_prompt

    prompt = support_prompt.create("ENHANCE", {"userInput": "write a haiku"})
    text = await enhance_prompt({"apiProvider": "anthropic"}, prompt)
"""

from . import support_prompt
from .base.errors import ErrorCode, InvalidInputError, ProviderError
from .base.factory import HandlerFactory, UnknownProviderError, build_api_handler
from .base.models import ProviderSettings
from .base.utils import enhance_prompt, single_completion_handler

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Adapter
    "single_completion_handler",
    "enhance_prompt",
    # Factory
    "HandlerFactory",
    "build_api_handler",
    # Settings
    "ProviderSettings",
    # Exceptions
    "ErrorCode",
    "InvalidInputError",
    "ProviderError",
    "UnknownProviderError",
    # Templates
    "support_prompt",
]
