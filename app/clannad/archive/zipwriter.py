"""Zip archive writer.

Writes manifest entries into a zip file using the standard library
zipfile module. Member names are relative POSIX paths; symlinks are
stored as Unix link records with the target as member data.
"""

import logging
import os
import posixpath
import stat
import time
import zipfile
from pathlib import Path
from typing import Literal

from clannad.archive.base import ArchiveError, ArchiveWriteError, ArchiveWriter

logger = logging.getLogger(__name__)

CompressionName = Literal["stored", "deflated", "bzip2", "lzma"]

COMPRESSION_METHODS: dict[CompressionName, int] = {
    "stored": zipfile.ZIP_STORED,
    "deflated": zipfile.ZIP_DEFLATED,
    "bzip2": zipfile.ZIP_BZIP2,
    "lzma": zipfile.ZIP_LZMA,
}

# Unix "made by" host for external attributes
_UNIX_SYSTEM = 3


def member_name(path: str, *, directory: bool = False) -> str:
    """Convert a filesystem path into a zip member name.

    Separators become "/", leading "/" and drive letters are dropped, and
    the result is normalized. Directory names end with "/". The current
    directory maps to the empty name.

    Args:
        path: Filesystem path.
        directory: Whether the member is a directory.

    Returns:
        Member name.

    Raises:
        ArchiveWriteError: If the path climbs out of the archive with "..".
    """
    _, tail = os.path.splitdrive(path)
    name = posixpath.normpath(tail.replace(os.sep, "/")).lstrip("/")
    if name == ".":
        return ""
    if ".." in name.split("/"):
        msg = f"{path} is an illegal path"
        raise ArchiveWriteError(msg)
    return f"{name}/" if directory else name


class ZipArchiveWriter(ArchiveWriter):
    """Writes manifest entries into a zip file.

    Args:
        path: Zip file to create. An existing file is overwritten.
        compression: Compression method for regular files.
        compresslevel: Compression level, or None for the method default.

    Raises:
        ArchiveError: If the zip file cannot be created.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        compression: CompressionName = "deflated",
        compresslevel: int | None = None,
    ) -> None:
        self._path = Path(path)
        self._names: set[str] = set()
        try:
            self._zip = zipfile.ZipFile(
                self._path,
                "w",
                compression=COMPRESSION_METHODS[compression],
                compresslevel=compresslevel,
            )
        except OSError as e:
            msg = f"Cannot create archive {self._path}: {e}"
            raise ArchiveError(msg) from e
        self._closed = False

    @property
    def path(self) -> Path:
        """Return the zip file path."""
        return self._path

    def write_dir(self, logical_path: str) -> None:
        name = member_name(logical_path, directory=True)
        if not name:
            logger.debug("No directory marker for archive root: %s", logical_path)
            return
        self._claim(name)
        self._zip.mkdir(name)

    def write_file(self, logical_path: str, content_source: str) -> None:
        name = member_name(logical_path)
        if not name:
            msg = f"{logical_path} is an illegal path"
            raise ArchiveWriteError(msg)
        if name in self._names:
            msg = f"{logical_path} is already in the archive"
            raise ArchiveWriteError(msg)
        # FIFOs, sockets and devices are reported, never read
        if os.path.lexists(content_source) and not os.path.isfile(content_source):
            msg = f"{content_source} is not a regular file"
            raise ArchiveWriteError(msg)
        self._zip.write(content_source, arcname=name)
        self._names.add(name)

    def write_symlink(self, logical_path: str, link_target: str) -> None:
        name = member_name(logical_path)
        if not name:
            msg = f"{logical_path} is an illegal symlink"
            raise ArchiveWriteError(msg)
        self._claim(name)
        info = zipfile.ZipInfo(name, date_time=time.localtime()[:6])
        info.create_system = _UNIX_SYSTEM
        info.external_attr = (stat.S_IFLNK | 0o777) << 16
        self._zip.writestr(info, link_target)

    def copy_dir(self, content_source: str, logical_path: str) -> None:
        try:
            source = self._zip.getinfo(member_name(content_source, directory=True))
        except (KeyError, ArchiveWriteError):
            logger.debug("%s not in archive yet, writing a new marker", content_source)
            self.write_dir(logical_path)
            return

        name = member_name(logical_path, directory=True)
        if not name:
            return
        self._claim(name)
        info = zipfile.ZipInfo(name, date_time=source.date_time)
        info.create_system = source.create_system
        info.external_attr = source.external_attr
        self._zip.writestr(info, b"")

    def finish(self) -> None:
        if self._closed:
            return
        try:
            self._zip.close()
        except OSError as e:
            msg = f"Cannot finalize archive {self._path}: {e}"
            raise ArchiveError(msg) from e
        finally:
            self._closed = True

    def _claim(self, name: str) -> None:
        if name in self._names:
            msg = f"{name} is already in the archive"
            raise ArchiveWriteError(msg)
        self._names.add(name)
