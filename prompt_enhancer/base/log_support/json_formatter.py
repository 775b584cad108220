"""JSON formatter for the shared ``enhancer`` logger."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord has; anything else was passed via ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _parse_object(text: str) -> Dict[str, Any] | None:
    if not text.startswith("{"):
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object.

    Messages written by ``log_event`` are already JSON objects; their keys are
    merged into the top level instead of being nested as an escaped string.
    The raw ``msg`` is kept for everything except ``cli.*`` events, whose
    output is read by people in a terminal.
    """

    def format(self, record: logging.LogRecord) -> str:
        text = record.getMessage()
        out: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
            "msg": text,
        }
        event = _parse_object(text)
        if event is not None:
            out.update(event)
            if str(event.get("event", "")).startswith("cli."):
                del out["msg"]
        for key, value in vars(record).items():
            if key in _STANDARD_ATTRS or key.startswith("_"):
                continue
            out.setdefault(key, value)
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
