from __future__ import annotations

from prompt_enhancer.base.timeouts import get_timeout_config, resolve_deadline


def test_defaults_without_env():
    cfg = get_timeout_config()
    assert cfg.overall_timeout_seconds is None  # nosec B101
    assert cfg.http_timeout_seconds == 60.0  # nosec B101
    assert resolve_deadline(None) is None  # nosec B101


def test_env_values_refresh_cache(monkeypatch):
    monkeypatch.setenv("ENHANCER_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("ENHANCER_HTTP_TIMEOUT_SECONDS", "5")
    cfg = get_timeout_config()
    assert cfg.overall_timeout_seconds == 12.5  # nosec B101
    assert cfg.http_timeout_seconds == 5.0  # nosec B101
    assert resolve_deadline(None) == 12.5  # nosec B101


def test_invalid_env_values_fall_back(monkeypatch):
    monkeypatch.setenv("ENHANCER_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("ENHANCER_HTTP_TIMEOUT_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.overall_timeout_seconds is None  # nosec B101
    assert cfg.http_timeout_seconds == 60.0  # nosec B101


def test_explicit_deadline_wins(monkeypatch):
    monkeypatch.setenv("ENHANCER_TIMEOUT_SECONDS", "30")
    assert resolve_deadline(2.0) == 2.0  # nosec B101
    assert resolve_deadline(0) is None  # nosec B101
    assert resolve_deadline(-3) is None  # nosec B101
