"""prompt_enhancer.config.defaults
===============================

Small, stable default values used by handlers, configuration and the CLI.
Plain constants only; no imports from other package modules.
"""

from __future__ import annotations

# ---- CLI ----
# Provider used by the CLI when neither --provider nor ENHANCER_PROVIDER is set.
ENHANCER_CLI_DEFAULT_PROVIDER = "openai"

# ---- Provider defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_MAX_TOKENS = 4096
OPENAI_DEFAULT_CONTEXT_WINDOW = 128_000

OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-20250514"
ANTHROPIC_DEFAULT_MAX_TOKENS = 8192
ANTHROPIC_DEFAULT_CONTEXT_WINDOW = 200_000

OLLAMA_DEFAULT_MODEL = "llama3.1"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"
OLLAMA_DEFAULT_CONTEXT_WINDOW = 8192

MOCK_DEFAULT_MODEL = "mock-enhancer"
