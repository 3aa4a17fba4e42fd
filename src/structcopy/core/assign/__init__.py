"""Assignment functionality: the leaf copy primitive."""

from structcopy.core.assign.core import assign
from structcopy.core.assign.models import AssignOutcome

__all__ = [
    "AssignOutcome",
    "assign",
]
