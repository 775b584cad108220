"""Subcommand handlers for the prompt-enhancer CLI.

Each handler takes the parsed ``argparse.Namespace`` and returns a process
exit code: 0 on success, 2 on invalid input, 1 on any provider failure.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, TextIO

from .. import support_prompt
from ..base.errors import InvalidInputError, classify_exception
from ..base.factory import USE_MOCKS_ENV, HandlerFactory
from ..base.logging import LogContext, configure_logger, get_logger, log_event
from ..base.utils.single_completion import single_completion_handler
from ..config import get_provider_settings
from ..config.defaults import ENHANCER_CLI_DEFAULT_PROVIDER

EXIT_OK = 0
EXIT_PROVIDER_ERROR = 1
EXIT_INVALID_INPUT = 2


def _read_text(args: Any, stdin: TextIO) -> str:
    if args.text is not None:
        return args.text
    return "" if stdin.isatty() else stdin.read()


def build_prompt(args: Any, text: str) -> str:
    """Return the text to send: raw, or filled into the (custom) ENHANCE template.

    Empty text is returned untouched so validation reports it as missing.
    """
    if args.raw or not text.strip():
        return text
    custom: Dict[str, str] = {}
    if args.template:
        custom["ENHANCE"] = Path(args.template).read_text(encoding="utf-8")
    return support_prompt.create("ENHANCE", {"userInput": text}, custom)


@contextlib.contextmanager
def _mock_routing(enabled: bool) -> Iterator[None]:
    """Route providers to the mock handler for the duration of one command."""
    if not enabled:
        yield
        return
    previous = os.environ.get(USE_MOCKS_ENV)
    os.environ[USE_MOCKS_ENV] = "1"
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop(USE_MOCKS_ENV, None)
        else:
            os.environ[USE_MOCKS_ENV] = previous


def handle_enhance(args: Any, *, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    """Run one enhancement and print the result."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    if args.log_level:
        configure_logger(level=args.log_level)
    logger = get_logger("enhancer.cli")
    provider = args.provider or os.getenv("ENHANCER_PROVIDER") or ENHANCER_CLI_DEFAULT_PROVIDER
    ctx = LogContext(provider=provider, operation="cli.enhance")

    try:
        with _mock_routing(args.mock):
            settings = get_provider_settings(provider, {"model": args.model, "base_url": args.base_url})
            prompt = build_prompt(args, _read_text(args, stdin))
            result = asyncio.run(single_completion_handler(settings, prompt, timeout=args.timeout))
    except InvalidInputError as exc:
        log_event(logger, "cli.invalid_input", ctx, error=str(exc))
        print(str(exc), file=sys.stderr)
        return EXIT_INVALID_INPUT
    except Exception as exc:  # noqa: BLE001 - presentation boundary maps failures to exit codes
        log_event(logger, "cli.error", ctx, error=str(exc), error_code=classify_exception(exc).value)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_PROVIDER_ERROR

    if args.json:
        stdout.write(json.dumps({"provider": provider, "text": result}, ensure_ascii=False) + "\n")
    else:
        stdout.write(result + "\n")
    return EXIT_OK


def handle_providers(args: Any, *, stdout: Optional[TextIO] = None) -> int:
    """Print supported provider names, one per line."""
    stdout = stdout or sys.stdout
    for name in HandlerFactory.supported():
        stdout.write(name + "\n")
    return EXIT_OK


__all__ = ["handle_enhance", "handle_providers", "build_prompt"]
