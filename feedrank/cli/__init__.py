"""Command line interface."""

from feedrank.cli.main import cli, main


__all__ = ["cli", "main"]
