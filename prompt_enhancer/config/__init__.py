"""Provider configuration for prompt enhancement.

Sources, later ones winning:
    1. Built-in defaults (``DEFAULTS``)
    2. The provider's section of the file named by ENHANCER_CONFIG_FILE
       (JSON, or YAML when it is not valid JSON)
    3. ``<PROVIDER>_MODEL`` / ``<PROVIDER>_API_KEY`` / ``<PROVIDER>_BASE_URL``,
       then the credential variables listed in ``config.env``
    4. Overrides passed by the caller (``None`` values ignored)

Config file example (YAML)::

    openai:
      model: gpt-4o-mini
    ollama:
      model: llama3.1
      num_ctx: 8192

Before the environment is read, a ``.env`` file (``DOTENV_FILE``, default
``./.env``) is applied once per process. It only fills variables that are
unset or hold placeholder values.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

import yaml

from ..base.models import ProviderSettings
from .defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    MOCK_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key

CONFIG_FILE_ENV = "ENHANCER_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "openrouter": {"model": OPENROUTER_DEFAULT_MODEL, "base_url": OPENROUTER_DEFAULT_BASE_URL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "base_url": OLLAMA_DEFAULT_HOST},
    "mock": {"model": MOCK_DEFAULT_MODEL},
}

# config key -> environment suffix
ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
}

# config key -> ProviderSettings field
_SETTINGS_FIELDS = {
    "model": "api_model_id",
    "api_key": "api_key",
    "base_url": "base_url",
    "headers": "headers",
    "enable_reasoning_effort": "enable_reasoning_effort",
}


class _State:
    file_data: Optional[Dict[str, Any]] = None
    dotenv_applied: bool = False


def reset_config_cache() -> None:
    """Forget the parsed config file and allow ``.env`` to be applied again."""
    _State.file_data = None
    _State.dotenv_applied = False


def _dotenv_pairs(path: Path) -> Iterator[Tuple[str, str]]:
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if sep and key.strip():
            yield key.strip(), value.strip().strip("\"'")


def _apply_dotenv() -> None:
    if _State.dotenv_applied:
        return
    _State.dotenv_applied = True
    path = Path(os.getenv(DOTENV_FILE_ENV, ".env"))
    if not path.is_file():
        return
    for key, value in _dotenv_pairs(path):
        current = os.environ.get(key)
        if current is None or is_placeholder(current):
            os.environ[key] = value


def _config_file() -> Dict[str, Any]:
    if _State.file_data is None:
        _State.file_data = {}
        name = os.getenv(CONFIG_FILE_ENV)
        if name and Path(name).is_file():
            text = Path(name).read_text(encoding="utf-8")
            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                data = yaml.safe_load(text)
            if isinstance(data, dict):
                _State.file_data = data
    return _State.file_data


def _from_env(provider: str) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key, suffix in ENV_FIELD_MAP.items():
        raw = os.getenv(f"{provider.upper()}_{suffix}")
        if raw is not None and not is_placeholder(raw):
            values[key] = raw
    if "api_key" not in values:
        api_key, _ = resolve_provider_key(provider)
        if api_key:
            values["api_key"] = api_key
    return values


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration mapping for ``provider``."""
    _apply_dotenv()
    name = (provider or "").strip().lower()
    merged: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    section = _config_file().get(name)
    if isinstance(section, dict):
        merged.update(section)
    merged.update(_from_env(name))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return merged


def get_provider_settings(provider: str, overrides: Optional[Dict[str, Any]] = None) -> ProviderSettings:
    """Build :class:`ProviderSettings` for ``provider`` from the merged config.

    Keys that are not settings fields end up in ``extra`` (an explicit
    ``extra`` mapping in the config is merged in too).
    """
    cfg = get_provider_config(provider, overrides)
    fields: Dict[str, Any] = {"api_provider": (provider or "").strip().lower() or None}
    extra: Dict[str, Any] = dict(cfg.pop("extra", None) or {})
    for key, value in cfg.items():
        if key in _SETTINGS_FIELDS:
            fields[_SETTINGS_FIELDS[key]] = value
        else:
            extra[key] = value
    return ProviderSettings(extra=extra, **fields)


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "get_provider_settings",
    "get_model",
    "reset_config_cache",
]
