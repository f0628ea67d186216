"""Symlink-preserving scan policy.

Symlinks are kept as link entries carrying their one-hop target and
are never followed, even when they point to a directory.
"""

import logging

from clannad.models.entry import Entry, EntryKind
from clannad.models.policy import SymlinkPolicy
from clannad.scanners.base import Expansion, PendingPath, ScanPolicy
from clannad.scanners.errors import ensure_text

logger = logging.getLogger(__name__)


class PreservingPolicy(ScanPolicy):
    """Scan policy that records symlinks as symlink or broken entries.

    A symlinked root yields a single classified entry and is not
    traversed.
    """

    @property
    def policy(self) -> SymlinkPolicy:
        return SymlinkPolicy.PRESERVE

    def root_exists(self, root: str) -> bool:
        return self.fs.lexists(root)

    def short_circuit_root(self, root: str) -> Entry | None:
        return self.classify(root)

    def expand(self, pending: PendingPath) -> Expansion:
        path = pending.content_source
        entry = self.classify(path)
        if entry.kind == EntryKind.DIRECTORY:
            return Expansion(entry=entry, frontier=self.children(pending, path))
        return Expansion(entry=entry)

    def classify(self, path: str) -> Entry:
        """Classify a single node.

        Non-symlinks are regular files or directories. A symlink whose
        target is missing is BROKEN; otherwise it is a SYMLINK entry whose
        target_kind records what the one-hop target is.

        Args:
            path: Path of the node.

        Returns:
            Entry for the node, with its own path as logical path and
            content source.
        """
        if not self.fs.is_symlink(path):
            return Entry(path, path, self.classify_node(path))

        try:
            target = ensure_text(self.fs.read_link(path))
        except OSError as e:
            logger.warning("Cannot read symlink %s: %s", path, e)
            return Entry(path, path, EntryKind.BROKEN)

        resolved = self.fs.resolve_hop(path, target)
        if not self.fs.exists(resolved):
            logger.debug("Broken symlink %s -> %s", path, target)
            return Entry(path, path, EntryKind.BROKEN)

        if self.fs.is_symlink(resolved):
            target_kind = EntryKind.SYMLINK
        else:
            target_kind = self.classify_node(resolved)
        return Entry(path, path, EntryKind.SYMLINK, link_target=target, target_kind=target_kind)
