"""Focused tests for prompt_enhancer.base.logging.

Covers:
- _parse_level string parsing
- normalized_log_event key set
- JsonFormatter hoisting of structured messages
- configure_logger file handler lifecycle
"""
from __future__ import annotations

import json
import logging

from prompt_enhancer.base.log_support import JsonFormatter, LogContext
from prompt_enhancer.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def _collector(name: str) -> tuple[logging.Logger, _ListHandler]:
    logger = get_logger(name)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_normalized_log_event_emits_required_keys():
    logger, handler = _collector("enhancer.test.normalized")
    normalized_log_event(
        logger,
        "enhance.end",
        LogContext(provider="p", model="m"),
        phase="finalize",
        error_code="timeout",
        emitted=True,
        tokens={"prompt": 10, "completion": 5},
        phase_extra=None,
    )
    payload = json.loads(handler.messages[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101
    assert payload["provider"] == "p"  # nosec B101
    assert payload["tokens"] == {"prompt": 10, "completion": 5}  # nosec B101
    assert "phase_extra" not in payload  # nosec B101


def test_normalized_log_event_omits_unset_error_code_and_protects_keys():
    logger, handler = _collector("enhancer.test.protect")
    normalized_log_event(logger, "enhance.start", None, phase="start", emitted=None)
    normalized_log_event(logger, "x", None, phase="start", tokens=42)
    first, second = (json.loads(m) for m in handler.messages)
    assert "error_code" not in first  # nosec B101
    assert first["emitted"] is None and first["tokens"] is None  # nosec B101
    assert second["tokens"] == {"value": "42"}  # nosec B101


def test_log_event_drops_none_fields():
    logger, handler = _collector("enhancer.test.log_event")
    log_event(logger, "cli.error", LogContext(operation="cli"), error="boom", code=None)
    assert json.loads(handler.messages[-1]) == {"event": "cli.error", "operation": "cli", "error": "boom"}  # nosec B101


def test_json_formatter_hoists_structured_message():
    record = logging.LogRecord("enhancer.x", logging.INFO, __file__, 1, json.dumps({"event": "e", "k": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["k"] == 1  # nosec B101
    assert out["level"] == "INFO" and out["logger"] == "enhancer.x"  # nosec B101


def test_json_formatter_drops_msg_for_cli_events():
    record = logging.LogRecord("enhancer.cli", logging.INFO, __file__, 1, json.dumps({"event": "cli.error"}), None, None)
    assert "msg" not in json.loads(JsonFormatter().format(record))  # nosec B101


def test_configure_logger_file_handler_lifecycle(tmp_path):
    path = tmp_path / "logs" / "enhancer.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1  # nosec B101
        assert logger.level == logging.DEBUG  # nosec B101
        log_event(get_logger("enhancer.test.file"), "file.check")
        file_handlers[0].flush()
        assert "file.check" in path.read_text(encoding="utf-8")  # nosec B101
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not [h for h in logger.handlers if isinstance(h, logging.FileHandler)]  # nosec B101
