"""Support prompt templates filled in by callers before enhancement.

Templates use ``${name}`` placeholders. :func:`create` picks the caller's
custom template for a kind when one is given, the built-in default otherwise,
and substitutes ``params`` into it. Placeholders without a matching parameter
are left as they are.

Example::

    prompt = support_prompt.create("ENHANCE", {"userInput": text}, custom_prompts)
    enhanced = await single_completion_handler(settings, prompt)
"""
from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

_PLACEHOLDER = re.compile(r"\$\{([^}]*)\}")

DEFAULT_TEMPLATES: Dict[str, str] = {
    "ENHANCE": (
        "Generate an enhanced version of this prompt (reply with only the enhanced prompt - "
        "no conversation, explanations, lead-in, bullet points, placeholders, or surrounding quotes):"
        "\n\n${userInput}"
    ),
}


def fill_template(template: str, params: Mapping[str, Any]) -> str:
    """Replace ``${key}`` with ``str(params[key])``; unknown keys stay intact.

    ``None`` values render as the empty string.
    """

    def _sub(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key not in params:
            return match.group(0)
        value = params[key]
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_sub, template)


def get(custom_prompts: Optional[Mapping[str, str]], kind: str) -> str:
    """Return the raw template for ``kind``, preferring a non-empty custom one.

    Raises:
        KeyError: ``kind`` has neither a custom nor a built-in template.
    """
    custom = (custom_prompts or {}).get(kind)
    if custom:
        return custom
    try:
        return DEFAULT_TEMPLATES[kind]
    except KeyError:
        raise KeyError(f"Unknown support prompt kind '{kind}'") from None


def create(kind: str, params: Mapping[str, Any], custom_prompts: Optional[Mapping[str, str]] = None) -> str:
    """Return the template for ``kind`` with ``params`` substituted."""
    return fill_template(get(custom_prompts, kind), params)


__all__ = ["DEFAULT_TEMPLATES", "create", "fill_template", "get"]
