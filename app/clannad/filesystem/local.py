"""Filesystem queries against the local disk."""

import os

from clannad.filesystem.base import FileSystem


class LocalFileSystem(FileSystem):
    """FileSystem backed by the operating system.

    Children are returned in directory-read order, unsorted.
    """

    def lexists(self, path: str) -> bool:
        return os.path.lexists(path)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def read_link(self, path: str) -> str:
        return os.readlink(path)

    def list_children(self, path: str) -> list[str]:
        with os.scandir(path) as entries:
            return [entry.name for entry in entries]

    def real_path(self, path: str) -> str:
        return os.path.realpath(path)
