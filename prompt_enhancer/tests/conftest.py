"""Pytest configuration for the prompt_enhancer test suite.

Every test starts from a clean environment: no mock routing, no deadline, no
config file, no provider credentials and no ``.env`` file, with the config
cache reset so earlier tests cannot leak state.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from prompt_enhancer.base.logging import get_logger
from prompt_enhancer.config import reset_config_cache

_ISOLATED_ENV = (
    "ENHANCER_USE_MOCKS",
    "ENHANCER_TIMEOUT_SECONDS",
    "ENHANCER_HTTP_TIMEOUT_SECONDS",
    "ENHANCER_CONFIG_FILE",
    "ENHANCER_LOG_LEVEL",
    "ENHANCER_PROVIDER",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "CLAUDE_API_KEY",
    "OPENROUTER_API_KEY",
    "OPENROUTER_MODEL",
    "OLLAMA_MODEL",
    "OLLAMA_BASE_URL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Clear enhancer-related variables and point the .env lookup at nothing."""

    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def enable_mock_providers(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Route every provider to the mock handler for the duration of a test."""

    monkeypatch.setenv("ENHANCER_USE_MOCKS", "1")
    yield
    monkeypatch.delenv("ENHANCER_USE_MOCKS", raising=False)


class ListHandler(logging.Handler):
    """Capture formatted log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@pytest.fixture()
def log_capture() -> Iterator[ListHandler]:
    """Attach a :class:`ListHandler` to the shared ``enhancer`` logger."""

    base = get_logger()
    handler = ListHandler()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
