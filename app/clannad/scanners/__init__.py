"""Scan policies and the scanner front end.

This module exposes the scan policies, the Scanner bound to a root,
and helpers for building a policy from a SymlinkPolicy choice.
"""

from clannad.filesystem.base import FileSystem
from clannad.models.policy import SymlinkPolicy
from clannad.scanners.base import Expansion, PendingPath, ScanPolicy
from clannad.scanners.basic import BasicPolicy
from clannad.scanners.errors import (
    ScanError,
    UnrepresentablePathError,
    UnresolvableSymlinkError,
)
from clannad.scanners.follow import DEFAULT_MAX_SYMLINK_HOPS, FollowPolicy
from clannad.scanners.preserving import PreservingPolicy
from clannad.scanners.scanner import Scanner, scan_roots


def get_policy(
    choice: SymlinkPolicy,
    fs: FileSystem | None = None,
    *,
    max_hops: int = DEFAULT_MAX_SYMLINK_HOPS,
) -> ScanPolicy:
    """Get a scan policy instance for a policy choice.

    Args:
        choice: The symlink policy to use.
        fs: Filesystem to query. Defaults to the local disk.
        max_hops: Maximum chain length followed by the follow policies.

    Returns:
        ScanPolicy implementing the choice.
    """
    if choice == SymlinkPolicy.BASIC:
        return BasicPolicy(fs)
    if choice == SymlinkPolicy.PRESERVE:
        return PreservingPolicy(fs)
    strict = choice == SymlinkPolicy.FOLLOW_STRICT
    return FollowPolicy(fs, strict=strict, max_hops=max_hops)


__all__ = [
    "DEFAULT_MAX_SYMLINK_HOPS",
    "BasicPolicy",
    "Expansion",
    "FollowPolicy",
    "PendingPath",
    "PreservingPolicy",
    "ScanError",
    "ScanPolicy",
    "Scanner",
    "SymlinkPolicy",
    "UnrepresentablePathError",
    "UnresolvableSymlinkError",
    "get_policy",
    "scan_roots",
]
