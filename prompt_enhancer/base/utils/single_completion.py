"""One-shot completion helper used for prompt enhancement.

Sends a single prompt through whatever handler the provider settings resolve
to and returns the answer text. Handlers that implement
:class:`SingleCompletionHandler` are asked directly via ``complete_prompt``;
all others are driven through ``create_message`` and their stream is drained
by :func:`collect_stream_text`.

The text is forwarded exactly as given. Filling an enhancement template with
the user's input is the caller's job (see ``prompt_enhancer.support_prompt``).
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ..errors import InvalidInputError, classify_exception
from ..factory import build_api_handler
from ..interfaces import ApiHandler, SingleCompletionHandler
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import Message, ProviderSettings
from ..streaming import StreamMetrics, collect_stream_text
from ..timeouts import resolve_deadline

NO_PROMPT_TEXT = "No prompt text provided"
NO_VALID_CONFIGURATION = "No valid API configuration provided"


def _validate(settings: ProviderSettings | Mapping[str, Any] | None, prompt_text: Optional[str]) -> ProviderSettings:
    if not prompt_text or not prompt_text.strip():
        raise InvalidInputError(NO_PROMPT_TEXT)
    try:
        resolved = ProviderSettings.coerce(settings)
    except (ValidationError, TypeError) as exc:
        raise InvalidInputError(NO_VALID_CONFIGURATION) from exc
    if resolved is None or not resolved.is_configured():
        raise InvalidInputError(NO_VALID_CONFIGURATION)
    return resolved


async def _dispatch(handler: ApiHandler, prompt_text: str, logger: logging.Logger, ctx: LogContext) -> str:
    if isinstance(handler, SingleCompletionHandler):
        normalized_log_event(logger, "enhance.dispatch", ctx, phase="dispatch", mode="complete_prompt")
        return await handler.complete_prompt(prompt_text)

    normalized_log_event(logger, "enhance.dispatch", ctx, phase="dispatch", mode="create_message")
    metrics = StreamMetrics()
    text = await collect_stream_text(
        handler.create_message("", [Message.user_text(prompt_text)]),
        metrics=metrics,
    )
    normalized_log_event(
        logger,
        "enhance.stream.end",
        ctx,
        phase="finalize",
        emitted=metrics.text_chunks > 0,
        tokens=metrics.token_usage(),
        chunks=metrics.chunks,
        total_cost=metrics.total_cost,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
    )
    return text


async def single_completion_handler(
    settings: ProviderSettings | Mapping[str, Any] | None,
    prompt_text: str,
    *,
    timeout: Optional[float] = None,
) -> str:
    """Return the provider's completion for ``prompt_text``.

    Parameters
    ----------
    settings:
        Provider settings (or an equivalent mapping). Passed unchanged to
        :func:`build_api_handler`, exactly once.
    prompt_text:
        Text sent to the model verbatim.
    timeout:
        Optional deadline in seconds for the provider call. Defaults to
        ``ENHANCER_TIMEOUT_SECONDS`` when set, otherwise no deadline.

    Returns
    -------
    str
        The ``complete_prompt`` result, or the concatenated text chunks of the
        ``create_message`` stream.

    Raises
    ------
    InvalidInputError
        ``"No prompt text provided"`` for empty or whitespace-only text;
        ``"No valid API configuration provided"`` for missing or empty
        settings. Both are raised before any handler is built.
    Exception
        Anything raised by the factory, ``complete_prompt`` or the stream,
        unchanged. A stream failure discards the text received so far.
    """
    resolved = _validate(settings, prompt_text)
    logger = get_logger("enhancer.adapter")
    ctx = LogContext(provider=resolved.api_provider, operation="enhance")
    normalized_log_event(logger, "enhance.start", ctx, phase="start", prompt_chars=len(prompt_text))

    try:
        handler = build_api_handler(settings)
        deadline = resolve_deadline(timeout)
        if deadline is None:
            result = await _dispatch(handler, prompt_text, logger, ctx)
        else:
            result = await asyncio.wait_for(_dispatch(handler, prompt_text, logger, ctx), deadline)
    except BaseException as exc:
        normalized_log_event(
            logger,
            "enhance.error",
            ctx,
            phase="error",
            error_code=classify_exception(exc).value,
            error=str(exc) or type(exc).__name__,
        )
        raise

    normalized_log_event(logger, "enhance.end", ctx, phase="finalize", emitted=bool(result), result_chars=len(result))
    return result


enhance_prompt = single_completion_handler

__all__ = [
    "single_completion_handler",
    "enhance_prompt",
    "NO_PROMPT_TEXT",
    "NO_VALID_CONFIGURATION",
]
