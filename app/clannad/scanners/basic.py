"""Symlink-blind scan policy.

Every node is reported as a regular file or a directory. Symlinks are
materialized as whatever they point to, under their own path, and are
never traversed into.
"""

import logging

from clannad.models.entry import Entry, EntryKind
from clannad.models.policy import SymlinkPolicy
from clannad.scanners.base import Expansion, PendingPath, ScanPolicy

logger = logging.getLogger(__name__)


class BasicPolicy(ScanPolicy):
    """Scan policy that treats every node as a regular file or directory.

    Root existence is checked without following symlinks. A symlinked
    root yields a single regular entry for the root path.
    """

    @property
    def policy(self) -> SymlinkPolicy:
        return SymlinkPolicy.BASIC

    def root_exists(self, root: str) -> bool:
        return self.fs.lexists(root)

    def short_circuit_root(self, root: str) -> Entry | None:
        return Entry(root, root, EntryKind.REGULAR)

    def expand(self, pending: PendingPath) -> Expansion:
        path = pending.content_source

        if self.fs.is_symlink(path):
            if not self.fs.exists(path):
                # No target kind to materialize as
                logger.warning("Skipping broken symlink: %s", path)
                return Expansion(entry=None)
            return Expansion(entry=Entry(path, path, self.classify_node(path)))

        kind = self.classify_node(path)
        entry = Entry(path, path, kind)
        if kind == EntryKind.DIRECTORY:
            return Expansion(entry=entry, frontier=self.children(pending, path))
        return Expansion(entry=entry)
