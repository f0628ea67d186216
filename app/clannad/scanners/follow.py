"""Symlink-following scan policy.

Symlinks are eliminated from the manifest: each one is resolved hop by
hop and recorded as the regular file or directory it ends at, keeping
the symlink's own path as the logical path.
"""

import logging

from clannad.filesystem.base import FileSystem
from clannad.models.entry import Entry, EntryKind
from clannad.models.policy import SymlinkPolicy
from clannad.scanners.base import Expansion, PendingPath, ScanPolicy
from clannad.scanners.errors import UnresolvableSymlinkError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SYMLINK_HOPS = 40


class FollowPolicy(ScanPolicy):
    """Scan policy that follows symlinks to their final targets.

    A directory symlink is listed at its resolved location while its
    children keep logical paths under the symlink. Root existence is
    checked by following symlinks, and a symlinked root is traversed
    like any other directory.

    A chain that cannot be resolved, because a hop is missing or the
    chain is longer than max_hops, becomes a BROKEN leaf entry. With
    strict=True it raises UnresolvableSymlinkError instead.

    Args:
        fs: Filesystem to query. Defaults to the local disk.
        strict: If True, abort the scan on an unresolvable chain.
        max_hops: Maximum number of links followed in one chain.
    """

    def __init__(
        self,
        fs: FileSystem | None = None,
        *,
        strict: bool = False,
        max_hops: int = DEFAULT_MAX_SYMLINK_HOPS,
    ) -> None:
        super().__init__(fs)
        if max_hops < 1:
            msg = f"max_hops must be at least 1, got {max_hops}"
            raise ValueError(msg)
        self._strict = strict
        self._max_hops = max_hops

    @property
    def strict(self) -> bool:
        """Check if unresolvable chains abort the scan."""
        return self._strict

    @property
    def policy(self) -> SymlinkPolicy:
        return SymlinkPolicy.FOLLOW_STRICT if self._strict else SymlinkPolicy.FOLLOW

    def root_exists(self, root: str) -> bool:
        return self.fs.exists(root)

    def short_circuit_root(self, root: str) -> Entry | None:
        return None

    def expand(self, pending: PendingPath) -> Expansion:
        logical = pending.logical_path
        source = pending.content_source

        if not self.fs.is_symlink(source):
            kind = self.classify_node(source)
            entry = Entry(logical, source, kind)
            if kind == EntryKind.DIRECTORY:
                return Expansion(entry=entry, frontier=self.children(pending, source))
            return Expansion(entry=entry)

        resolved = self.resolve(source)
        if resolved is None:
            if self._strict:
                raise UnresolvableSymlinkError(logical)
            logger.warning("Cannot resolve symlink, recording as broken: %s", logical)
            return Expansion(entry=Entry(logical, source, EntryKind.BROKEN))

        if not self.fs.is_dir(resolved):
            return Expansion(entry=Entry(logical, resolved, EntryKind.REGULAR))

        entry = Entry(logical, resolved, EntryKind.DIRECTORY)
        if self.fs.real_path(resolved) in pending.ancestors:
            logger.warning("Not descending into %s: links back to %s", logical, resolved)
            return Expansion(entry=entry)
        return Expansion(entry=entry, frontier=self.children(pending, resolved))

    def resolve(self, path: str) -> str | None:
        """Follow a symlink chain one hop at a time.

        Args:
            path: Path of the first link in the chain.

        Returns:
            The first non-symlink path of the chain, or None if a hop is
            missing, unreadable, or the chain exceeds max_hops.
        """
        current = path
        for _ in range(self._max_hops):
            if not self.fs.is_symlink(current):
                return current if self.fs.lexists(current) else None
            try:
                target = self.fs.read_link(current)
            except OSError as e:
                logger.debug("Cannot read symlink %s: %s", current, e)
                return None
            current = self.fs.resolve_hop(current, target)
        if not self.fs.is_symlink(current) and self.fs.lexists(current):
            return current
        return None
