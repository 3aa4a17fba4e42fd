"""Copy errors."""

from __future__ import annotations


class CopyError(Exception):
    """Base class for errors raised by copy()."""

    pass


class UnaddressableError(CopyError):
    """Raised when the destination cannot be written.

    Raised before any mutation of that destination.
    """

    pass


class CopyDepthError(CopyError):
    """Raised when structural copies nest deeper than the configured limit.

    Usually means the source value refers to itself.
    """

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Copy nested deeper than {max_depth} levels (self-referential value?)")
        self.max_depth = max_depth
