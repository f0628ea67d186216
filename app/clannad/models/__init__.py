"""Data models for clannad.

This package contains the entry, manifest, and policy models shared
by the scanners, the archive writers, and the CLI.
"""

from clannad.models.entry import Entry, EntryKind
from clannad.models.manifest import ScanManifest, ScanMetadata
from clannad.models.policy import SymlinkPolicy

__all__ = [
    "Entry",
    "EntryKind",
    "ScanManifest",
    "ScanMetadata",
    "SymlinkPolicy",
]
