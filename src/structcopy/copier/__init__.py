"""Copier: the recursive copy operation and its method bridge.

Architecture Note:
    copier/ composes the stateless primitives of core/ into the copy
    operation and owns its configuration. A Copier reads its settings but
    never changes them, so one copier can serve concurrent copies.
"""

from structcopy.copier.bridge import Getter, find_getter, find_setter
from structcopy.copier.copier import Copier, configure, copy, get_copier
from structcopy.copier.errors import CopyDepthError, CopyError, UnaddressableError

__all__ = [
    "Copier",
    "copy",
    "configure",
    "get_copier",
    "CopyError",
    "UnaddressableError",
    "CopyDepthError",
    "Getter",
    "find_setter",
    "find_getter",
]
