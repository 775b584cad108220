from __future__ import annotations

import pytest
from pydantic import ValidationError

from prompt_enhancer.base.models import ProviderSettings


def test_camel_case_aliases_and_snake_case_names():
    a = ProviderSettings.model_validate({"apiProvider": "openai", "apiModelId": "gpt-4o", "baseUrl": "http://x"})
    b = ProviderSettings(api_provider="openai", api_model_id="gpt-4o", base_url="http://x")
    assert a == b  # nosec B101


def test_unknown_keys_are_kept_as_options():
    s = ProviderSettings.coerce({"apiProvider": "ollama", "num_ctx": 4096, "extra": {"temperature": 0.2}})
    assert s.option("num_ctx") == 4096  # nosec B101
    assert s.option("temperature") == 0.2  # nosec B101
    assert s.option("missing", "d") == "d"  # nosec B101


def test_is_configured_ignores_tuning_only_fields():
    assert not ProviderSettings().is_configured()  # nosec B101
    assert not ProviderSettings(enable_reasoning_effort=True, headers={"X": "1"}).is_configured()  # nosec B101
    assert not ProviderSettings.coerce({"enableReasoningEffort": True}).is_configured()  # nosec B101
    assert ProviderSettings(api_key="sk-live").is_configured()  # nosec B101
    assert ProviderSettings.coerce({"awsRegion": "us-east-1"}).is_configured()  # nosec B101


def test_coerce_passthrough_and_none():
    s = ProviderSettings(api_provider="mock")
    assert ProviderSettings.coerce(s) is s  # nosec B101
    assert ProviderSettings.coerce(None) is None  # nosec B101


def test_settings_are_frozen():
    s = ProviderSettings(api_provider="mock")
    with pytest.raises(ValidationError):
        s.api_provider = "openai"


def test_provider_prefixed_keys_fill_canonical_fields():
    s = ProviderSettings.coerce(
        {"apiProvider": "openai", "openAiApiKey": "sk-live-123", "openAiBaseUrl": "https://proxy.internal/v1"}
    )
    assert s.api_key == "sk-live-123"  # nosec B101
    assert s.base_url == "https://proxy.internal/v1"  # nosec B101
    assert s.option("openAiApiKey") == "sk-live-123"  # nosec B101


def test_prefixed_keys_follow_the_selected_provider():
    s = ProviderSettings.coerce(
        {"apiProvider": "openrouter", "openAiApiKey": "sk-openai", "openRouterApiKey": "sk-or-live"}
    )
    assert s.api_key == "sk-or-live"  # nosec B101


def test_canonical_fields_win_over_prefixed_keys():
    s = ProviderSettings.coerce({"apiProvider": "openai", "apiKey": "sk-direct", "openAiApiKey": "sk-prefixed"})
    assert s.api_key == "sk-direct"  # nosec B101


def test_prefixed_keys_without_provider_use_first_match():
    s = ProviderSettings.coerce({"ollamaModelId": "llama3.1"})
    assert s.api_model_id == "llama3.1"  # nosec B101
    assert s.is_configured()  # nosec B101


def test_coerce_rejects_non_mapping():
    with pytest.raises(TypeError):
        ProviderSettings.coerce("openai")
