"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from clannad.models.entry import Entry, EntryKind

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "dim": "#b2bec3",
        "kind.regular": "#ffffff",
        "kind.directory": "bold #0e8ac8",
        "kind.symlink": "#c1ff62",
        "kind.broken": "#d44ebc",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_entry_table(title: str = "Manifest") -> Table:
    """Create a pre-configured table for displaying manifest entries.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for entry display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Kind", width=10)
    table.add_column("Source", style="muted")
    table.add_column("Target", style="info")
    return table


def format_entry_row(entry: Entry) -> tuple[str, str, str, str]:
    """Format an entry as a table row with proper styling.

    The source column is only filled when it differs from the logical path.

    Args:
        entry: The entry to format.

    Returns:
        Tuple of (path, kind, source, target) with Rich markup.
    """
    style = f"kind.{entry.kind.value}"
    kind = f"[{style}]{entry.kind.value}[/]"
    path = f"[{style}]{escape(entry.logical_path)}[/]"
    source = escape(entry.content_source) if entry.is_aliased else "-"
    if entry.kind == EntryKind.SYMLINK and entry.link_target is not None:
        target = escape(entry.link_target)
        if entry.target_kind is not None:
            target += f" [muted]({entry.target_kind.value})[/]"
    else:
        target = "-"
    return (path, kind, source, target)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
