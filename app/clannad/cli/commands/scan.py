"""Scan command implementation.

Prints the manifest of one or more roots under a symlink policy.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from clannad.core.config import require_config
from clannad.models.manifest import ScanManifest
from clannad.models.policy import SymlinkPolicy
from clannad.scanners import ScanError, get_policy, scan_roots
from clannad.utils.formatting import (
    console,
    create_entry_table,
    format_entry_row,
    print_error,
    print_info,
    print_warning,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def scan_manifest(
    roots: Annotated[
        list[str],
        typer.Argument(help="Root paths to scan."),
    ],
    policy: Annotated[
        SymlinkPolicy | None,
        typer.Option(
            "--policy",
            "-p",
            help="Symlink policy: basic, preserve, follow, or follow-strict.",
            case_sensitive=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export manifests to JSON file.",
        ),
    ] = None,
) -> None:
    """Scan directory trees and print their manifests."""
    settings = require_config()
    choice = policy or settings.policy
    scan_policy = get_policy(choice, max_hops=settings.max_symlink_hops)

    try:
        manifests, missing = scan_roots(roots, scan_policy)
    except ScanError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for root in missing:
        print_warning(f"Root not found: {root}")

    if export_path is not None:
        _export_results(manifests, export_path)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([m.to_dict() for m in manifests]))
    else:
        for manifest in manifests:
            _print_table(manifest)

    if missing:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _print_table(manifest: ScanManifest) -> None:
    """Display one manifest as a Rich table with a summary line."""
    meta = manifest.metadata
    table = create_entry_table(title=f"{escape(meta.root)} ({meta.policy.value})")
    for entry in manifest:
        table.add_row(*format_entry_row(entry))
    console.print(table)

    counts = manifest.summary()
    details = ", ".join(f"{counts[k]} {k}" for k in counts if k != "total" and counts[k])
    console.print(f"[dim]{counts['total']} entries ({details or 'empty'})[/dim]")


def _export_results(manifests: list[ScanManifest], export_path: Path) -> None:
    """Export manifests to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    data = [m.to_dict() for m in manifests]
    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(data, indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
