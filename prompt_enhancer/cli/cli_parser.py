"""CLI parser construction for prompt-enhancer.

Wires argument shapes only; execution lives in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import ENHANCER_CLI_DEFAULT_PROVIDER

COMMANDS = ("enhance", "providers")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``enhance`` and ``providers`` subcommands."""
    p = argparse.ArgumentParser(prog="prompt-enhancer", description="Enhance a prompt with an LLM provider")
    sub = p.add_subparsers(dest="cmd")

    p_enh = sub.add_parser("enhance", help="Enhance TEXT (or stdin) and print the result (default)")
    p_enh.add_argument("text", nargs="?", default=None, help="Prompt text; read from stdin when omitted")
    p_enh.add_argument("--provider", default=None, help=f"Provider name (default: {ENHANCER_CLI_DEFAULT_PROVIDER})")
    p_enh.add_argument("--model", default=None)
    p_enh.add_argument("--base-url", default=None)
    p_enh.add_argument("--template", default=None, help="File holding a custom ENHANCE template with ${userInput}")
    p_enh.add_argument("--raw", action="store_true", help="Send TEXT as-is without the enhancement template")
    p_enh.add_argument("--timeout", type=float, default=None, help="Deadline in seconds")
    p_enh.add_argument("--mock", action="store_true", help="Route the request to the offline mock handler")
    p_enh.add_argument("--json", action="store_true", help="Print a JSON object instead of plain text")
    p_enh.add_argument("--log-level", default=None)

    sub.add_parser("providers", help="List supported provider names")
    return p


__all__ = ["build_parser", "COMMANDS"]
