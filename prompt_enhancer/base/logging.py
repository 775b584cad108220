"""Structured logging for the enhancer package.

Every module asks :func:`get_logger` for a child of the shared ``enhancer``
logger. The shared logger owns one stderr handler (JSON by default) and, when
:func:`configure_logger` is given a path, one rotating file handler. Child
loggers carry no handlers of their own and simply propagate.

Events are single-line JSON objects. :func:`normalized_log_event` is the
preferred entry point: it always writes ``phase``, ``emitted`` and ``tokens``
so enhancement logs can be filtered on a fixed key set.

Environment:
    ENHANCER_LOG_LEVEL  DEBUG | INFO | WARNING | ERROR | CRITICAL (default INFO)
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "enhancer"
LOG_LEVEL_ENV = "ENHANCER_LOG_LEVEL"

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LEVEL_NAMES: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
# 10MB x 5 backups
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5


class _StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``.

    Test runners and the CLI may swap ``sys.stderr`` after the handler is
    created; resolving the stream on every write keeps output going to the
    live one.
    """

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


class _ManagedFileHandler(RotatingFileHandler):
    """Rotating file handler owned by :func:`configure_logger`."""


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Map a level name (any case) to its number; ``default`` for unknown names."""
    if not value:
        return default
    return _LEVEL_NAMES.get(value.strip().upper(), default)


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    console = next((h for h in logger.handlers if isinstance(h, _StderrHandler)), None)
    if console is None:
        console = _StderrHandler()
        console.setFormatter(_formatter(json_mode))
        logger.addHandler(console)
        logger.propagate = False
    logger.setLevel(wanted)
    console.setLevel(wanted)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the shared ``enhancer`` logger.

    The level is re-read from ``ENHANCER_LOG_LEVEL`` on each call.
    """
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _close(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(Exception):
        handler.close()


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or level name; ``None`` keeps the current level.
    file_path:
        Attach a rotating file handler writing to this path (reusing the
        current one when the path is unchanged). ``None`` removes the file
        handler. Handlers attached by callers are never touched.
    json_mode:
        JSON formatter when True, plain text otherwise.
    """
    logger = _base_logger(json_mode, logging.INFO)
    if level is not None:
        numeric = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    current: Optional[_ManagedFileHandler] = None
    for handler in [h for h in logger.handlers if isinstance(h, _ManagedFileHandler)]:
        if target is not None and handler.baseFilename == target:
            current = handler
        else:
            _close(logger, handler)
    if target is None:
        return logger

    if current is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        current = _ManagedFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        logger.addHandler(current)
    current.setFormatter(_formatter(json_mode))
    current.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Write ``{"event": event, **ctx, **fields}`` as one JSON line.

    Fields set to ``None`` are left out unless ``keep_none`` is True.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event, **(ctx.to_dict() if ctx else {})}
    for key, value in fields.items():
        if value is not None or keep_none:
            payload[key] = value
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("phase", "error_code", "emitted", "tokens")


def _coerce_tokens(tokens: Any) -> Optional[Dict[str, Any]]:
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit ``event`` with the normalized key set.

    ``phase``, ``emitted`` and ``tokens`` are always written (``null`` when
    unknown); ``error_code`` only when given. Extra fields set to ``None`` are
    dropped and can never replace a normalized key.
    """
    fields: Dict[str, Any] = {k: v for k, v in extra_fields.items() if v is not None}
    fields.update(phase=phase, emitted=emitted, tokens=_coerce_tokens(tokens))
    if error_code is not None:
        fields["error_code"] = error_code
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
