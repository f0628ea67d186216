"""Scan manifest model.

This module defines the immutable result of one scan: the ordered
entries together with metadata describing how they were produced.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from clannad.models.entry import Entry, EntryKind
from clannad.models.policy import SymlinkPolicy


@dataclass(frozen=True, slots=True)
class ScanMetadata:
    """Metadata for a scan manifest.

    Attributes:
        timestamp: ISO format timestamp when the scan was performed.
        hostname: Name of the machine that was scanned.
        clannad_version: Version of clannad that performed the scan.
        root: Root path the scan started from.
        policy: Symlink policy the scan ran under.
    """

    timestamp: str
    hostname: str
    clannad_version: str
    root: str
    policy: SymlinkPolicy

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "clannad_version": self.clannad_version,
            "root": self.root,
            "policy": self.policy.value,
        }


@dataclass(frozen=True, slots=True)
class ScanManifest:
    """Ordered entries produced by one scan.

    Entries are kept in traversal order. Logical paths are unique
    within a manifest.

    Attributes:
        metadata: Scan metadata including root and policy.
        entries: Entries in breadth-first traversal order.
    """

    metadata: ScanMetadata
    entries: tuple[Entry, ...]

    def __post_init__(self) -> None:
        """Validate that no logical path appears twice."""
        seen: set[str] = set()
        for entry in self.entries:
            if entry.logical_path in seen:
                msg = f"Duplicate logical path in manifest: {entry.logical_path}"
                raise ValueError(msg)
            seen.add(entry.logical_path)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def count(self, kind: EntryKind) -> int:
        """Count entries of the given kind."""
        return sum(1 for entry in self.entries if entry.kind == kind)

    def summary(self) -> dict[str, int]:
        """Count entries per kind, plus the total."""
        result = {kind.value: self.count(kind) for kind in EntryKind}
        result["total"] = len(self.entries)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": self.metadata.to_dict(),
            "entries": [entry.to_dict() for entry in self.entries],
            "summary": self.summary(),
        }

    @classmethod
    def create(
        cls,
        root: str,
        policy: SymlinkPolicy,
        entries: Iterable[Entry],
    ) -> ScanManifest:
        """Create a ScanManifest with auto-generated metadata.

        Args:
            root: Root path that was scanned.
            policy: Symlink policy used for the scan.
            entries: Entries in traversal order.

        Returns:
            ScanManifest with populated metadata.
        """
        import socket

        from clannad import __version__

        metadata = ScanMetadata(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=socket.gethostname(),
            clannad_version=__version__,
            root=root,
            policy=policy,
        )
        return cls(metadata=metadata, entries=tuple(entries))
