"""CLI module."""

from windex.cli.main import cli

__all__ = ["cli"]
