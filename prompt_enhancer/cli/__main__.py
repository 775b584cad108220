"""Allows ``python -m prompt_enhancer.cli [args]``."""

from __future__ import annotations

from . import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
