"""Config merge order: defaults < config file < environment < overrides."""

from __future__ import annotations

import json

from prompt_enhancer.config import get_model, get_provider_config, get_provider_settings, reset_config_cache
from prompt_enhancer.config.env import get_env_var_candidates, is_placeholder, resolve_provider_key


def test_defaults_only():
    cfg = get_provider_config("openrouter")
    assert cfg["model"] == "openrouter/auto"  # nosec B101
    assert cfg["base_url"] == "https://openrouter.ai/api/v1"  # nosec B101
    assert get_provider_config("unknown") == {}  # nosec B101


def test_json_config_file_overrides_defaults(monkeypatch, tmp_path):
    path = tmp_path / "enhancer.json"
    path.write_text(json.dumps({"openai": {"model": "gpt-4.1"}}), encoding="utf-8")
    monkeypatch.setenv("ENHANCER_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_model("openai") == "gpt-4.1"  # nosec B101


def test_yaml_config_file_and_env_precedence(monkeypatch, tmp_path):
    path = tmp_path / "enhancer.yaml"
    path.write_text("ollama:\n  model: qwen2.5\n  num_ctx: 4096\n", encoding="utf-8")
    monkeypatch.setenv("ENHANCER_CONFIG_FILE", str(path))
    monkeypatch.setenv("OLLAMA_MODEL", "llama3.2")
    reset_config_cache()
    cfg = get_provider_config("ollama")
    assert cfg["model"] == "llama3.2"  # nosec B101
    assert cfg["num_ctx"] == 4096  # nosec B101


def test_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    cfg = get_provider_config("openai", {"model": "o3-mini", "base_url": None})
    assert cfg["model"] == "o3-mini"  # nosec B101
    assert "base_url" not in cfg  # nosec B101


def test_placeholder_env_values_are_skipped(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "your_placeholder_key")
    monkeypatch.setenv("OPENAI_MODEL", "changeme")
    cfg = get_provider_config("openai")
    assert "api_key" not in cfg  # nosec B101
    assert cfg["model"] == "gpt-4o-mini"  # nosec B101


def test_anthropic_key_alias(monkeypatch):
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant-live")
    assert list(get_env_var_candidates("anthropic")) == ["ANTHROPIC_API_KEY", "CLAUDE_API_KEY"]  # nosec B101
    assert resolve_provider_key("anthropic") == ("sk-ant-live", "CLAUDE_API_KEY")  # nosec B101
    assert get_provider_config("anthropic")["api_key"] == "sk-ant-live"  # nosec B101


def test_dotenv_file_is_loaded_once(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nOPENROUTER_API_KEY='sk-or-live'\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    reset_config_cache()
    try:
        assert get_provider_config("openrouter")["api_key"] == "sk-or-live"  # nosec B101
    finally:
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)


def test_provider_settings_mapping():
    s = get_provider_settings("ollama", {"num_ctx": 2048, "headers": {"X-Trace": "1"}})
    assert s.api_provider == "ollama"  # nosec B101
    assert s.api_model_id == "llama3.1"  # nosec B101
    assert s.base_url == "http://localhost:11434"  # nosec B101
    assert s.headers == {"X-Trace": "1"}  # nosec B101
    assert s.option("num_ctx") == 2048  # nosec B101
    assert s.is_configured()  # nosec B101


def test_is_placeholder():
    assert is_placeholder("test_key")  # nosec B101
    assert is_placeholder("https://example.com")  # nosec B101
    assert not is_placeholder("sk-live")  # nosec B101
    assert not is_placeholder(None)  # nosec B101
