"""CLI commands for clannad.

This package contains all subcommand implementations.
"""

from clannad.cli.commands import archive, config, scan

__all__ = ["archive", "config", "scan"]
