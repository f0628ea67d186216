"""In-memory filesystem for exercising scan policies without disk I/O.

Trees are built with add_dir, add_file, and add_symlink. All paths are
POSIX paths; relative paths are taken relative to "/". Path components
that are symlinks are resolved the way the kernel would, except that
".." is collapsed lexically before resolution.
"""

import errno
import os
import posixpath
from dataclasses import dataclass, field

from clannad.filesystem.base import FileSystem

# Mirrors the Linux SYMLOOP limit used when resolving lookups
_MAX_LOOKUP_HOPS = 40


@dataclass(slots=True)
class _Dir:
    children: list[str] = field(default_factory=list)


@dataclass(slots=True)
class _File:
    content: bytes = b""


@dataclass(slots=True)
class _Link:
    target: str


class MemoryFileSystem(FileSystem):
    """FileSystem holding a tree of directories, files, and symlinks in memory.

    Example:
        >>> fs = MemoryFileSystem()
        >>> fs.add_file("/data/a.txt", b"hello")
        >>> fs.add_symlink("/data/latest", "a.txt")
        >>> fs.read_link("/data/latest")
        'a.txt'
    """

    def __init__(self) -> None:
        self._nodes: dict[str, _Dir | _File | _Link] = {"/": _Dir()}
        self._unreadable: set[str] = set()

    # -- tree construction -------------------------------------------------

    def add_dir(self, path: str) -> None:
        """Create a directory, including missing parents."""
        key = self._normalize(path)
        if key == "/":
            return
        existing = self._nodes.get(key)
        if isinstance(existing, _Dir):
            return
        if existing is not None:
            msg = f"Path already exists: {key}"
            raise FileExistsError(msg)
        self._add(key, _Dir())

    def add_file(self, path: str, content: bytes = b"") -> None:
        """Create a regular file, including missing parent directories."""
        self._add(self._normalize(path), _File(content))

    def add_symlink(self, path: str, target: str) -> None:
        """Create a symlink storing the given one-hop target verbatim."""
        self._add(self._normalize(path), _Link(target))

    def make_unreadable(self, path: str) -> None:
        """Make listing the given directory fail with PermissionError."""
        self._unreadable.add(self._normalize(path))

    def read_bytes(self, path: str) -> bytes:
        """Return the content of a regular file, following symlinks."""
        key = self._lookup(path)
        node = self._nodes.get(key) if key else None
        if not isinstance(node, _File):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        return node.content

    # -- FileSystem interface ----------------------------------------------

    def lexists(self, path: str) -> bool:
        return self._lookup(path, follow_last=False) is not None

    def exists(self, path: str) -> bool:
        return self._lookup(path) is not None

    def is_symlink(self, path: str) -> bool:
        key = self._lookup(path, follow_last=False)
        return key is not None and isinstance(self._nodes[key], _Link)

    def is_dir(self, path: str) -> bool:
        key = self._lookup(path)
        return key is not None and isinstance(self._nodes[key], _Dir)

    def read_link(self, path: str) -> str:
        key = self._lookup(path, follow_last=False)
        if key is None:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        node = self._nodes[key]
        if not isinstance(node, _Link):
            raise OSError(errno.EINVAL, os.strerror(errno.EINVAL), path)
        return node.target

    def list_children(self, path: str) -> list[str]:
        key = self._lookup(path)
        if key is None:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        node = self._nodes[key]
        if not isinstance(node, _Dir):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        if key in self._unreadable:
            raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), path)
        return list(node.children)

    def real_path(self, path: str) -> str:
        return self._lookup(path) or self._normalize(path)

    def join(self, parent: str, name: str) -> str:
        return posixpath.join(parent, name)

    def resolve_hop(self, link: str, target: str) -> str:
        if posixpath.isabs(target):
            return posixpath.normpath(target)
        return posixpath.normpath(posixpath.join(posixpath.dirname(link), target))

    # -- internals -----------------------------------------------------------

    @staticmethod
    def _normalize(path: str) -> str:
        return posixpath.normpath(posixpath.join("/", path))

    @staticmethod
    def _parts(path: str) -> list[str]:
        return [part for part in MemoryFileSystem._normalize(path).split("/") if part]

    def _add(self, key: str, node: _Dir | _File | _Link) -> None:
        if key in self._nodes:
            msg = f"Path already exists: {key}"
            raise FileExistsError(msg)
        parent, name = posixpath.split(key)
        self.add_dir(parent)
        parent_node = self._nodes[parent]
        if not isinstance(parent_node, _Dir):
            msg = f"Parent is not a directory: {parent}"
            raise NotADirectoryError(msg)
        parent_node.children.append(name)
        self._nodes[key] = node

    def _lookup(self, path: str, follow_last: bool = True) -> str | None:
        """Resolve a path to the key of the node it names.

        Returns:
            Canonical node key, or None if the path does not exist or
            resolution exceeds the hop limit.
        """
        pending = self._parts(path)
        current = "/"
        hops = 0
        while pending:
            name = pending.pop(0)
            candidate = posixpath.join(current, name)
            node = self._nodes.get(candidate)
            if node is None:
                return None
            if isinstance(node, _Link) and (pending or follow_last):
                hops += 1
                if hops > _MAX_LOOKUP_HOPS:
                    return None
                pending = self._parts(posixpath.join(current, node.target)) + pending
                current = "/"
                continue
            current = candidate
        return current
