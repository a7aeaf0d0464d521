"""Command-line interface for diffbib."""

from diffbib.cli.main import cli

__all__ = ["cli"]
