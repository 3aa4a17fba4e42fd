"""Assignment models."""

from enum import Enum, auto


class AssignOutcome(Enum):
    """Result of a leaf copy.

    Failures are not an outcome: exceptions raised by destination setters
    propagate to the caller.
    """

    ASSIGNED = auto()  # Destination holds the copied value (or was left as is on purpose)
    DECLINED = auto()  # Shapes differ at the leaf level, try a structural copy
