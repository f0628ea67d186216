"""Configuration commands.

Provides commands to show the effective configuration and to write
a default configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from clannad.core.config import (
    ConfigError,
    get_default_config,
    require_config,
    save_config,
)
from clannad.core.paths import get_config_path
from clannad.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to read."),
    ] = None,
) -> None:
    """Show the effective configuration."""
    path = config_path or get_config_path()
    settings = require_config(path)

    table = Table(title="Configuration", show_lines=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    for key, value in settings.model_dump(mode="json").items():
        table.add_row(key, "-" if value is None else str(value))

    console.print(table)
    if not path.exists():
        print_info(f"No config file at {path}, showing defaults.")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file to write."),
    ] = None,
) -> None:
    """Write a config file with default settings."""
    path = config_path or get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(get_default_config(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
