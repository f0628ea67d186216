"""Scanner bound to a root path.

A Scanner pairs a root with a scan policy and holds the manifest of its
most recent scan. Rebinding it to another root discards that manifest.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator

from clannad.models.entry import Entry
from clannad.models.manifest import ScanManifest
from clannad.scanners.base import ScanPolicy
from clannad.scanners.errors import ensure_text
from clannad.scanners.preserving import PreservingPolicy

logger = logging.getLogger(__name__)


def _as_root(root: str | os.PathLike[str]) -> str:
    return ensure_text(os.fspath(root))


class Scanner:
    """Scans one root under one policy.

    The manifest is None both before the first scan and after a scan
    that found no root, so callers can tell "root not found" apart from
    an empty tree.

    Args:
        root: Root path to scan.
        policy: Scan policy. Defaults to PreservingPolicy on the local disk.

    Raises:
        UnrepresentablePathError: If root is not valid UTF-8.

    Example:
        >>> scanner = Scanner("resources/normalfolder", FollowPolicy())
        >>> manifest = scanner.scan()
        >>> if manifest is not None:
        ...     print(len(manifest))
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        policy: ScanPolicy | None = None,
    ) -> None:
        self._root = _as_root(root)
        self._policy = policy if policy is not None else PreservingPolicy()
        self._manifest: ScanManifest | None = None

    @property
    def root(self) -> str:
        """Return the root path this scanner is bound to."""
        return self._root

    @property
    def policy(self) -> ScanPolicy:
        """Return the scan policy."""
        return self._policy

    @property
    def manifest(self) -> ScanManifest | None:
        """Return the manifest of the last scan, or None."""
        return self._manifest

    @property
    def entries(self) -> tuple[Entry, ...] | None:
        """Return the entries of the last scan, or None if there is no manifest."""
        if self._manifest is None:
            return None
        return self._manifest.entries

    def scan(self) -> ScanManifest | None:
        """Scan the root and store the resulting manifest.

        Returns:
            The new manifest, or None if the root does not exist.

        Raises:
            UnresolvableSymlinkError: Under a strict follow policy, if a
                symlink chain cannot be resolved.
        """
        entries = self._policy.walk(self._root)
        if entries is None:
            logger.info("Root not found: %s", self._root)
            self._manifest = None
        else:
            self._manifest = ScanManifest.create(self._root, self._policy.policy, entries)
            logger.debug("Scanned %s: %d entries", self._root, len(entries))
        return self._manifest

    def rebind(self, root: str | os.PathLike[str]) -> Scanner:
        """Bind the scanner to a new root and discard the previous manifest.

        Args:
            root: New root path.

        Returns:
            This scanner, for chaining.
        """
        self._root = _as_root(root)
        self._manifest = None
        return self

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries or ())


def scan_roots(
    roots: Iterable[str | os.PathLike[str]],
    policy: ScanPolicy,
) -> tuple[list[ScanManifest], list[str]]:
    """Scan several roots with one policy, in order.

    Args:
        roots: Root paths to scan.
        policy: Scan policy shared by all scans.

    Returns:
        Tuple of (manifests for roots that exist, roots that were not found).
    """
    manifests: list[ScanManifest] = []
    missing: list[str] = []
    scanner: Scanner | None = None

    for root in roots:
        scanner = Scanner(root, policy) if scanner is None else scanner.rebind(root)
        manifest = scanner.scan()
        if manifest is None:
            missing.append(scanner.root)
        else:
            manifests.append(manifest)

    return manifests, missing
