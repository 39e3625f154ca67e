"""findstr command-line interface."""

from findstr.cli.typer_app import app, main

__all__ = ["app", "main"]
