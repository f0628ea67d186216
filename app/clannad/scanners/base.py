"""Abstract base class for scan policies.

This module defines the ScanPolicy interface that every symlink policy
implements, and the breadth-first traversal they share.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field

from clannad.filesystem.base import FileSystem
from clannad.filesystem.local import LocalFileSystem
from clannad.models.entry import Entry, EntryKind
from clannad.models.policy import SymlinkPolicy
from clannad.scanners.errors import UnrepresentablePathError, ensure_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PendingPath:
    """A queued node waiting to be classified.

    Attributes:
        logical_path: Path the node will occupy in the archive.
        content_source: Path the node is read from on disk.
        ancestors: Canonical paths of the directories expanded above this
            node, used to stop following symlinks into a cycle.
    """

    logical_path: str
    content_source: str
    ancestors: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True, slots=True)
class Expansion:
    """Result of classifying one queued node.

    Attributes:
        entry: Manifest entry for the node, or None if it is skipped.
        frontier: Children to enqueue next, empty for leaves.
    """

    entry: Entry | None
    frontier: tuple[PendingPath, ...] = ()


class ScanPolicy(ABC):
    """Abstract base class for all symlink policies.

    A policy decides whether a root exists, whether a symlinked root
    short-circuits the scan, and how each node is classified and
    expanded into its children. The traversal itself is shared.

    Args:
        fs: Filesystem to query. Defaults to the local disk.

    Example:
        >>> policy = PreservingPolicy()
        >>> entries = policy.walk("resources/normalfolder")
        >>> if entries is None:
        ...     print("root not found")
    """

    def __init__(self, fs: FileSystem | None = None) -> None:
        self._fs = fs if fs is not None else LocalFileSystem()

    @property
    def fs(self) -> FileSystem:
        """Return the filesystem this policy queries."""
        return self._fs

    @property
    @abstractmethod
    def policy(self) -> SymlinkPolicy:
        """Return the SymlinkPolicy value this class implements."""

    @abstractmethod
    def root_exists(self, root: str) -> bool:
        """Check whether the root counts as present under this policy."""

    @abstractmethod
    def short_circuit_root(self, root: str) -> Entry | None:
        """Return the sole entry for a symlinked root, or None to traverse it."""

    @abstractmethod
    def expand(self, pending: PendingPath) -> Expansion:
        """Classify a queued node into an entry plus its next frontier."""

    def walk(self, root: str) -> list[Entry] | None:
        """Scan the tree under root breadth-first.

        Args:
            root: Root path to scan.

        Returns:
            Entries in traversal order, or None if the root does not exist.
        """
        if not self.root_exists(root):
            logger.debug("Root not found: %s", root)
            return None

        if self._fs.is_symlink(root):
            entry = self.short_circuit_root(root)
            if entry is not None:
                logger.debug("Root %s is a symlink, not traversing", root)
                return [entry]

        entries: list[Entry] = []
        queue: deque[PendingPath] = deque([PendingPath(root, root)])
        while queue:
            pending = queue.popleft()
            try:
                expansion = self.expand(pending)
            except UnrepresentablePathError as e:
                if pending.logical_path == root:
                    raise
                logger.warning("Skipping %s: %s", pending.logical_path, e)
                continue
            if expansion.entry is not None:
                entries.append(expansion.entry)
            queue.extend(expansion.frontier)
        return entries

    def classify_node(self, path: str) -> EntryKind:
        """Classify a path as DIRECTORY or REGULAR by what it resolves to."""
        return EntryKind.DIRECTORY if self._fs.is_dir(path) else EntryKind.REGULAR

    def children(self, pending: PendingPath, directory: str) -> tuple[PendingPath, ...]:
        """List a directory and build the frontier for its children.

        Children keep their logical path under pending.logical_path while
        their content is read from under directory. Listing failures and
        names that are not valid UTF-8 are logged and skipped.

        Args:
            pending: The node being expanded.
            directory: On-disk directory to list.

        Returns:
            Pending children in directory-read order.
        """
        try:
            names = self._fs.list_children(directory)
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", directory, e)
            return ()

        ancestors = pending.ancestors | {self._fs.real_path(directory)}
        frontier: list[PendingPath] = []
        for name in names:
            try:
                ensure_text(name)
            except UnrepresentablePathError as e:
                logger.warning("Skipping child of %s: %s", directory, e)
                continue
            frontier.append(
                PendingPath(
                    logical_path=self._fs.join(pending.logical_path, name),
                    content_source=self._fs.join(directory, name),
                    ancestors=ancestors,
                )
            )
        return tuple(frontier)
