"""Mock handler package exposing deterministic fixtures for tests."""

from .client import MockHandler, load_fixture_catalog

__all__ = ["MockHandler", "load_fixture_catalog"]
