"""Abstract base class for filesystem queries.

This module defines the FileSystem interface the scan policies use for
every question they ask about the tree being scanned, so traversal can
run against the real disk or an in-memory tree alike.
"""

import os
from abc import ABC, abstractmethod


class FileSystem(ABC):
    """Abstract base class for filesystem query backends.

    All methods take plain string paths. Existence and kind checks never
    raise; read_link and list_children raise OSError on failure.

    Example:
        >>> fs = LocalFileSystem()
        >>> if fs.is_symlink("docs/latest"):
        ...     print(fs.read_link("docs/latest"))
    """

    @abstractmethod
    def lexists(self, path: str) -> bool:
        """Check if the node itself exists, without following a final symlink."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if the path exists after following symlinks."""

    @abstractmethod
    def is_symlink(self, path: str) -> bool:
        """Check if the path is a symbolic link."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check if the path is a directory after following symlinks."""

    @abstractmethod
    def read_link(self, path: str) -> str:
        """Return the one-hop target stored in a symlink.

        Raises:
            OSError: If the path is not a symlink or cannot be read.
        """

    @abstractmethod
    def list_children(self, path: str) -> list[str]:
        """Return the names of a directory's children in read order.

        Raises:
            OSError: If the directory cannot be listed.
        """

    @abstractmethod
    def real_path(self, path: str) -> str:
        """Return the canonical path with every symlink resolved."""

    def join(self, parent: str, name: str) -> str:
        """Join a child name onto a parent path."""
        return os.path.join(parent, name)

    def resolve_hop(self, link: str, target: str) -> str:
        """Locate a link target, interpreting relative targets against the link's parent.

        Args:
            link: Path of the symlink.
            target: One-hop value read from the symlink.

        The result is not normalized: ".." after a symlinked directory
        must be resolved physically by the OS, not collapsed lexically.

        Args:
            link: Path of the symlink.
            target: One-hop value read from the symlink.

        Returns:
            Path the target refers to.
        """
        if os.path.isabs(target):
            return target
        return os.path.join(os.path.dirname(link), target)
