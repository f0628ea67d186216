"""Zip command implementation.

Scans one or more roots and writes their manifests into a zip archive.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from clannad.archive import ArchiveActionResult, ArchiveError, ZipArchiveWriter
from clannad.core.config import require_config
from clannad.models.policy import SymlinkPolicy
from clannad.scanners import ScanError, get_policy, scan_roots
from clannad.utils.formatting import (
    console,
    print_error,
    print_success,
    print_warning,
)


def zip_archive(
    archive_path: Annotated[
        Path,
        typer.Argument(help="Zip file to create."),
    ],
    roots: Annotated[
        list[str],
        typer.Argument(help="Root paths to archive."),
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
) -> None:
    """Scan directory trees and write them into a zip archive."""
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

    results: list[ArchiveActionResult] = []
    try:
        with ZipArchiveWriter(
            archive_path,
            compression=settings.compression,
            compresslevel=settings.compresslevel,
        ) as writer:
            for manifest in manifests:
                results.extend(writer.write_archive(manifest))
    except ArchiveError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    failed = [r for r in results if not r.success]
    skipped = sum(1 for r in results if r.skipped)

    if failed:
        _print_failures(failed)
        print_warning(f"{len(results) - len(failed)} entries written, {len(failed)} failed")
    else:
        written = len(results) - skipped
        print_success(f"Wrote {written} entries to {escape(str(archive_path))}")
    if skipped:
        print_warning(f"Skipped {skipped} broken symlink(s)")

    if failed or missing:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _print_failures(failed: list[ArchiveActionResult]) -> None:
    """Display entries that could not be written."""
    table = Table(title="Failed Entries", show_lines=False)
    table.add_column("Path", style="bold")
    table.add_column("Kind", width=10)
    table.add_column("Error", style="dim")

    for r in failed:
        table.add_row(escape(r.logical_path), r.kind.value, escape(r.error or "Unknown error"))

    console.print(table)
