"""prompt-enhancer CLI (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``; performs no
provider logic directly.
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_enhance, handle_providers
from .cli_parser import COMMANDS, build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint; ``enhance`` is assumed when no subcommand is given.

    Returns the process exit code.
    """
    p = build_parser()
    argv_list = list(sys.argv[1:] if argv is None else argv)
    if not argv_list or argv_list[0] not in COMMANDS:
        argv_list = ["enhance"] + argv_list
    args = p.parse_args(argv_list)
    if args.cmd == "providers":
        return handle_providers(args)
    return handle_enhance(args)


__all__ = ["main"]
