"""Typed provider settings passed to the handler factory.

Purpose
-------
Carry the caller's choice of provider, credentials and model. The adapter only
asks one question of it (:meth:`ProviderSettings.is_configured`); handlers read
the fields they understand.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_dump``.

Notes
-----
- Both snake_case names and the camelCase aliases used by settings files
  (``apiProvider``, ``apiKey``, ``apiModelId``, ``baseUrl``) are accepted.
- Per-provider keys (``openAiApiKey``, ``openRouterModelId``, ``ollamaBaseUrl``,
  ...) fill the matching canonical field when it is not set directly.
- Unknown keys are retained in ``model_extra`` so provider-specific settings
  survive the round trip.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Fields that tune a request but do not identify a provider on their own.
_NON_PROVIDER_FIELDS = frozenset({"enable_reasoning_effort", "headers", "extra"})
_NON_PROVIDER_EXTRA_KEYS = frozenset({"enableReasoningEffort"})

# provider -> key prefix used by per-provider settings (``openAiApiKey``, ...)
_PROVIDER_KEY_PREFIXES = {
    "openai": "openAi",
    "openrouter": "openRouter",
    "anthropic": "anthropic",
    "ollama": "ollama",
}
# prefixed key suffix -> canonical field
_PREFIXED_FIELDS = {"ApiKey": "api_key", "BaseUrl": "base_url", "ModelId": "api_model_id"}


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (Mapping, list, tuple, set)):
        return bool(value)
    return True


class ProviderSettings(BaseModel):
    """Provider selection and credentials.

    Attributes
    ----------
    api_provider:
        Canonical provider name (``"openai"``, ``"anthropic"``, ...).
    api_key:
        API key for providers that need one.
    api_model_id:
        Model identifier; handlers fall back to their configured default.
    base_url:
        Endpoint override (proxies, gateways, self-hosted servers).
    enable_reasoning_effort:
        Request reasoning-effort controls where the provider supports them.
    headers:
        Static HTTP headers added to every request.
    extra:
        Free-form provider-specific options.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    api_provider: Optional[str] = Field(default=None, alias="apiProvider")
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    api_model_id: Optional[str] = Field(default=None, alias="apiModelId")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    enable_reasoning_effort: bool = Field(default=False, alias="enableReasoningEffort")
    headers: Dict[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _apply_provider_keys(cls, data: Any) -> Any:
        """Copy ``<prefix>ApiKey``/``BaseUrl``/``ModelId`` onto unset canonical fields.

        The prefix follows ``apiProvider``; without one, every known prefix is
        tried in table order.
        """
        if not isinstance(data, Mapping):
            return data
        provider = data.get("apiProvider", data.get("api_provider"))
        if isinstance(provider, str) and provider.strip().lower() in _PROVIDER_KEY_PREFIXES:
            prefixes = [_PROVIDER_KEY_PREFIXES[provider.strip().lower()]]
        else:
            prefixes = list(_PROVIDER_KEY_PREFIXES.values())
        values = dict(data)
        for suffix, name in _PREFIXED_FIELDS.items():
            alias = cls.model_fields[name].alias
            if _has_value(values.get(name)) or _has_value(values.get(alias)):
                continue
            for prefix in prefixes:
                if _has_value(values.get(prefix + suffix)):
                    values[name] = values[prefix + suffix]
                    break
        return values

    @classmethod
    def coerce(cls, value: "ProviderSettings | Mapping[str, Any] | None") -> Optional["ProviderSettings"]:
        """Return ``value`` as ``ProviderSettings`` (``None`` stays ``None``).

        Raises ``TypeError`` for anything that is not a mapping.
        """
        if value is None or isinstance(value, ProviderSettings):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"provider settings must be a mapping, got {type(value).__name__}")
        return cls.model_validate(dict(value))

    def is_configured(self) -> bool:
        """Return True when at least one provider-identifying field has a value."""
        for name in type(self).model_fields:
            if name in _NON_PROVIDER_FIELDS:
                continue
            if _has_value(getattr(self, name)):
                return True
        for key, value in (self.model_extra or {}).items():
            if key not in _NON_PROVIDER_EXTRA_KEYS and _has_value(value):
                return True
        return False

    def option(self, key: str, default: Any = None) -> Any:
        """Look up a provider-specific option in ``extra`` then in unknown keys."""
        if key in self.extra:
            return self.extra[key]
        return (self.model_extra or {}).get(key, default)


__all__ = ["ProviderSettings"]
