"""Abstract base class for archive writers.

This module defines the ArchiveWriter interface that consumes a scan
manifest, and the per-entry dispatch shared by all writers.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from types import TracebackType

from clannad.models.entry import Entry, EntryKind

logger = logging.getLogger(__name__)


class ArchiveError(Exception):
    """Base exception for archive errors."""


class ArchiveWriteError(ArchiveError):
    """Raised when a single entry cannot be written to the archive."""


@dataclass(frozen=True, slots=True)
class ArchiveActionResult:
    """Result of writing a single manifest entry.

    Attributes:
        logical_path: Logical path of the entry.
        kind: Kind of the entry.
        success: Whether the entry was written.
        error: Error message if writing failed, None otherwise.
        skipped: Whether the entry had nothing to write (broken symlinks).
    """

    logical_path: str
    kind: EntryKind
    success: bool
    error: str | None = None
    skipped: bool = False


class ArchiveWriter(ABC):
    """Abstract base class for all archive writers.

    Writers turn manifest entries into container records. A failure on
    one entry is logged and reported in its result; it never aborts the
    rest of the archive.

    Example:
        >>> with ZipArchiveWriter("out.zip") as writer:
        ...     results = writer.write_archive(manifest)
        ...     failed = [r for r in results if not r.success]
    """

    @abstractmethod
    def write_dir(self, logical_path: str) -> None:
        """Write a directory marker at logical_path.

        Raises:
            ArchiveWriteError: If the path is illegal in the container.
        """

    @abstractmethod
    def write_file(self, logical_path: str, content_source: str) -> None:
        """Stream the bytes at content_source into a file at logical_path.

        Raises:
            ArchiveWriteError: If the path is illegal in the container.
            OSError: If the content cannot be read.
        """

    @abstractmethod
    def write_symlink(self, logical_path: str, link_target: str) -> None:
        """Write a symlink record at logical_path pointing to link_target.

        Raises:
            ArchiveWriteError: If the path is illegal in the container.
        """

    @abstractmethod
    def copy_dir(self, content_source: str, logical_path: str) -> None:
        """Alias the directory stored for content_source at logical_path.

        Raises:
            ArchiveWriteError: If the path is illegal in the container.
        """

    @abstractmethod
    def finish(self) -> None:
        """Finalize and close the container.

        Raises:
            ArchiveError: If the container cannot be finalized.
        """

    def write_entry(self, entry: Entry) -> ArchiveActionResult:
        """Write one manifest entry.

        Args:
            entry: Entry to write.

        Returns:
            ArchiveActionResult describing the outcome.
        """
        logger.debug("%s <- %s", entry.logical_path, entry.content_source)
        try:
            if entry.link_target is not None:
                self.write_symlink(entry.logical_path, entry.link_target)
            elif entry.kind == EntryKind.DIRECTORY:
                if entry.is_aliased:
                    self.copy_dir(entry.content_source, entry.logical_path)
                else:
                    self.write_dir(entry.logical_path)
            elif entry.kind == EntryKind.REGULAR:
                self.write_file(entry.logical_path, entry.content_source)
            else:
                logger.warning("Skipping broken symlink: %s", entry.logical_path)
                return ArchiveActionResult(
                    logical_path=entry.logical_path,
                    kind=entry.kind,
                    success=True,
                    skipped=True,
                )
        except (ArchiveWriteError, OSError) as e:
            logger.warning("Cannot write %s: %s", entry.logical_path, e)
            return ArchiveActionResult(
                logical_path=entry.logical_path,
                kind=entry.kind,
                success=False,
                error=str(e),
            )
        return ArchiveActionResult(logical_path=entry.logical_path, kind=entry.kind, success=True)

    def write_archive(self, entries: Iterable[Entry]) -> list[ArchiveActionResult]:
        """Write manifest entries in order.

        Args:
            entries: Entries to write, typically a ScanManifest.

        Returns:
            List of ArchiveActionResult, one per entry.
        """
        return [self.write_entry(entry) for entry in entries]

    def __enter__(self) -> ArchiveWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.finish()
