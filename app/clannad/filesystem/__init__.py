"""Filesystem query backends.

This module provides the FileSystem interface used by the scan
policies, with a local-disk implementation and an in-memory one.
"""

from clannad.filesystem.base import FileSystem
from clannad.filesystem.local import LocalFileSystem
from clannad.filesystem.memory import MemoryFileSystem

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
]
