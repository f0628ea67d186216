"""Manifest entry models.

This module defines the core data structures for representing the
entries of a scan manifest: what kind of node an entry is, where it
lives in the archive, and where its content is read from on disk.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EntryKind(str, Enum):
    """Kind of a manifest entry.

    Attributes:
        REGULAR: Regular file, its bytes are streamed into the archive.
        DIRECTORY: Directory, written as a directory marker.
        SYMLINK: Symbolic link preserved as a link record.
        BROKEN: Symbolic link whose resolution ends at a missing path.
    """

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    BROKEN = "broken"


@dataclass(frozen=True, slots=True)
class Entry:
    """A single element of a scan manifest.

    Attributes:
        logical_path: Path the entry occupies in the output archive.
        content_source: Path on disk the entry's bytes or structure are
            read from. Only differs from logical_path under the follow
            policy.
        kind: Entry classification.
        link_target: One-hop, unresolved link value. Set iff kind is SYMLINK.
        target_kind: Kind of the one-hop target of a preserved symlink
            (REGULAR, DIRECTORY, or SYMLINK). None for other entries.
    """

    logical_path: str
    content_source: str
    kind: EntryKind
    link_target: str | None = field(default=None)
    target_kind: EntryKind | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate entry invariants after initialization."""
        if not self.logical_path:
            msg = "Logical path cannot be empty"
            raise ValueError(msg)
        if not self.content_source:
            msg = "Content source cannot be empty"
            raise ValueError(msg)
        if (self.link_target is not None) != (self.kind == EntryKind.SYMLINK):
            msg = f"Link target must be set exactly for symlink entries: {self.logical_path}"
            raise ValueError(msg)
        if self.target_kind is not None:
            if self.kind != EntryKind.SYMLINK:
                msg = f"Target kind is only valid on symlink entries: {self.logical_path}"
                raise ValueError(msg)
            if self.target_kind == EntryKind.BROKEN:
                msg = "A symlink with a missing target must be a broken entry"
                raise ValueError(msg)

    @property
    def is_leaf(self) -> bool:
        """Check if the entry never has children in the manifest."""
        return self.kind != EntryKind.DIRECTORY

    @property
    def is_aliased(self) -> bool:
        """Check if the entry is read from a different path than it is stored at."""
        return self.logical_path != self.content_source

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "logical_path": self.logical_path,
            "content_source": self.content_source,
            "kind": self.kind.value,
            "link_target": self.link_target,
            "target_kind": self.target_kind.value if self.target_kind else None,
        }
