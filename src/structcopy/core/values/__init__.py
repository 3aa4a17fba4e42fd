"""Value functionality: handles over addressable and read-only values."""

from structcopy.core.values.models import INVALID, ValueHandle

__all__ = [
    "ValueHandle",
    "INVALID",
]
