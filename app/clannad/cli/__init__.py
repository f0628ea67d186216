"""CLI package for clannad.

This package contains the Typer application and all subcommands.
"""

from clannad.cli.main import app

__all__ = ["app"]
