"""Archive writers.

This module provides the ArchiveWriter interface that consumes scan
manifests, and the zip implementation.
"""

from clannad.archive.base import (
    ArchiveActionResult,
    ArchiveError,
    ArchiveWriteError,
    ArchiveWriter,
)
from clannad.archive.zipwriter import COMPRESSION_METHODS, ZipArchiveWriter, member_name

__all__ = [
    "COMPRESSION_METHODS",
    "ArchiveActionResult",
    "ArchiveError",
    "ArchiveWriteError",
    "ArchiveWriter",
    "ZipArchiveWriter",
    "member_name",
]
