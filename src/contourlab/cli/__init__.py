"""Command-line interface for contourlab.

This module provides the CLI entry point using Typer for argument
parsing and Rich for beautiful console output.
"""

from contourlab.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
