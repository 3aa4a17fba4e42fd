"""structcopy: deep copy between values of related types.

Usage:
    from dataclasses import dataclass
    from structcopy import Ref, copy, embedded

    @dataclass
    class Person:
        name: str = ""

    @dataclass
    class User:
        person: Person | None = embedded(default=None)
        role: str = ""

    @dataclass
    class Employee:
        name: str = ""
        title: str = ""

        def set_role(self, role: str) -> None:
            self.title = role

    employee = Employee()
    copy(employee, User(person=Person("ann"), role="admin"))
    # Employee(name="ann", title="admin")

    names = Ref(list[str])
    copy(names, ["a", "b"])
"""

__version__ = "0.1.0"

# Configuration
from structcopy.config import CopierSettings

# Copy operation
from structcopy.copier import (
    Copier,
    CopyDepthError,
    CopyError,
    UnaddressableError,
    configure,
    copy,
    get_copier,
)

# Core primitives
from structcopy.core import (
    ALL_NIL_FIELDS,
    Embedded,
    Ref,
    Scannable,
    embedded,
)

__all__ = [
    # Version
    "__version__",
    # Copy
    "copy",
    "Copier",
    "configure",
    "get_copier",
    "CopierSettings",
    # Errors
    "CopyError",
    "UnaddressableError",
    "CopyDepthError",
    # Declarations
    "Ref",
    "Embedded",
    "embedded",
    "Scannable",
    "ALL_NIL_FIELDS",
]
