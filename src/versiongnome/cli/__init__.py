"""Command-line interface for versiongnome.

- app: The Typer application object, used by the console script entrypoint.
- console: Rich Console instance for consistent, styled output.
"""

from versiongnome.cli.commands import app, console, main

__all__ = ["app", "console", "main"]
