"""Exceptions raised by the scanners."""


class ScanError(Exception):
    """Base exception for scan errors."""


class UnrepresentablePathError(ScanError):
    """Raised when a path cannot be represented as UTF-8 text."""

    def __init__(self, path: str) -> None:
        self.path = path
        printable = path.encode("utf-8", errors="backslashreplace").decode("utf-8")
        super().__init__(f"Path is not valid UTF-8: {printable}")


class UnresolvableSymlinkError(ScanError):
    """Raised when a symlink chain does not end at an existing path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Cannot resolve symlink: {path}")


def ensure_text(path: str) -> str:
    """Check that a path round-trips through UTF-8.

    Paths read from the OS carry undecodable bytes as surrogate escapes;
    those cannot be stored in an archive member name.

    Args:
        path: Path to check.

    Returns:
        The path unchanged.

    Raises:
        UnrepresentablePathError: If the path is not valid UTF-8.
    """
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        raise UnrepresentablePathError(path) from None
    return path
