"""Type models: descriptors, markers, and protocols.

Descriptors are the runtime metadata the copier walks. They are derived from
annotations (see ``core.types.core.describe``) and never hold values.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

EMBEDDED_KEY = "structcopy.embedded"


class TypeKind(Enum):
    """Shape of a type as seen by the copier."""

    SCALAR = auto()  # Any class that is not a record
    RECORD = auto()  # Dataclass or Pydantic model
    POINTER = auto()  # X | None, None is the null pointer
    SEQUENCE = auto()  # list[X] and friends
    INTERFACE = auto()  # Any, object, unions


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Shape of an annotation.

    Attributes:
        kind: Structural kind.
        type: Class for SCALAR/RECORD kinds, tuple of arms for unions, ``object`` otherwise.
        elem: Element descriptor for POINTER and SEQUENCE kinds.
        annotation: Annotation the descriptor was built from.
    """

    kind: TypeKind
    type: Any
    elem: TypeDescriptor | None = None
    annotation: Any = dataclasses.field(default=None, compare=False)

    @property
    def name(self) -> str:
        """Readable type name for messages."""
        if self.kind is TypeKind.POINTER and self.elem is not None:
            return f"{self.elem.name} | None"
        if self.kind is TypeKind.SEQUENCE and self.elem is not None:
            return f"list[{self.elem.name}]"
        if isinstance(self.type, type):
            return self.type.__qualname__
        return repr(self.annotation)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A declared field of a record type."""

    name: str
    annotation: Any
    type: TypeDescriptor
    embedded: bool = False
    settable: bool = True


class Embedded:
    """Marks a field as embedded: its own fields are promoted to the owner.

    Usage:
        class Employee(BaseModel):
            person: Annotated[Person | None, Embedded()] = None
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "Embedded()"


def embedded(**kwargs: Any) -> Any:
    """Dataclass field marked as embedded.

    Accepts the same keyword arguments as ``dataclasses.field``.

    Usage:
        @dataclass
        class Employee:
            person: Person | None = embedded(default=None)
            salary: int = 0
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


@runtime_checkable
class Scannable(Protocol):
    """Destination hook that absorbs a value it cannot be assigned from.

    Raise ``TypeError`` or ``ValueError`` to refuse the value; the copier then
    falls back to a structural copy.
    """

    def __scan__(self, value: Any) -> None: ...


class Ref[T]:
    """Mutable cell with a declared type.

    Python names cannot be rebound from inside a call, so scalar and list
    destinations are passed as a Ref:

        total = Ref(float)
        copy(total, 3)          # no-op, int is not assignable to float
        users = Ref(list[User])
        copy(users, employees)
        users.value             # [User(...), ...]

    Args:
        type_: Declared type of the cell.
        value: Initial value; defaults to the zero value of ``type_``.
    """

    __slots__ = ("type", "value")

    def __init__(self, type_: Any, value: T | None = None) -> None:
        self.type = type_
        if value is None:
            # Late import to avoid circular dependency
            from structcopy.core.types.core import describe, zero_value

            value = zero_value(describe(type_))
        self.value: T | None = value

    def __repr__(self) -> str:
        return f"Ref({self.type!r}, {self.value!r})"
