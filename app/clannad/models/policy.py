"""Symlink policy selection."""

from enum import Enum


class SymlinkPolicy(str, Enum):
    """Symlink resolution policies selectable at scan time.

    Attributes:
        BASIC: Symlinks are materialized as their target's kind, never followed.
        PRESERVE: Symlinks are kept as link entries and never followed.
        FOLLOW: Symlinks are resolved and replaced by their targets;
            unresolvable chains become broken entries.
        FOLLOW_STRICT: Like FOLLOW, but an unresolvable chain aborts the scan.
    """

    BASIC = "basic"
    PRESERVE = "preserve"
    FOLLOW = "follow"
    FOLLOW_STRICT = "follow-strict"
