from __future__ import annotations

import asyncio

import httpx
import pytest

from prompt_enhancer.base.errors import ErrorCode, InvalidInputError, ProviderError, classify_exception


class _StatusError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"status {status_code}")
        self.status_code = status_code


@pytest.mark.parametrize(
    "status, code",
    [
        (401, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
    ],
)
def test_status_code_mapping(status, code):
    assert classify_exception(_StatusError(status)) is code  # nosec B101


def test_httpx_status_error_uses_response_status():
    request = httpx.Request("POST", "http://localhost:11434/api/chat")
    response = httpx.Response(429, request=request)
    exc = httpx.HTTPStatusError("too many", request=request, response=response)
    assert classify_exception(exc) is ErrorCode.RATE_LIMIT  # nosec B101


def test_passthrough_and_builtin_classes():
    assert classify_exception(ProviderError(code=ErrorCode.AUTH, message="x", provider="openai")) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(InvalidInputError("No prompt text provided")) is ErrorCode.VALIDATION  # nosec B101
    assert classify_exception(asyncio.CancelledError()) is ErrorCode.CANCELLED  # nosec B101
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101


def test_message_heuristics_and_fallback():
    assert classify_exception(RuntimeError("Connection refused")) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(RuntimeError("API Error")) is ErrorCode.UNKNOWN  # nosec B101


def test_provider_error_str_is_message():
    err = ProviderError(code=ErrorCode.SERVER_ERROR, message="model not loaded", provider="ollama")
    assert str(err) == "model not loaded"  # nosec B101


def test_invalid_input_error_is_value_error():
    err = InvalidInputError("No valid API configuration provided")
    assert isinstance(err, ValueError)  # nosec B101
    assert err.message == "No valid API configuration provided"  # nosec B101
