"""Value handles: runtime values paired with their declared descriptors.

A handle is the copier's stand-in for an addressable location. Field handles
read and write an attribute of their owner, cells own their value, and
constant handles can only be read.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from structcopy.core.types import (
    FieldDescriptor,
    Ref,
    TypeDescriptor,
    TypeKind,
    describe,
    describe_value,
    is_frozen,
    is_record,
)

Getter = Callable[[], Any]
Setter = Callable[[Any], None]


class ValueHandle:
    """Runtime value with its descriptor and an optional setter.

    Args:
        desc: Declared descriptor of the location.
        getter: Reads the current value.
        setter: Writes a new value, or None for read-only handles.
        valid: False for the absent value.
    """

    __slots__ = ("desc", "_get", "_set", "valid")

    def __init__(
        self,
        desc: TypeDescriptor,
        getter: Getter,
        setter: Setter | None = None,
        valid: bool = True,
    ) -> None:
        self.desc = desc
        self._get = getter
        self._set = setter
        self.valid = valid

    # --- Constructors ---

    @classmethod
    def of(cls, value: Any, desc: TypeDescriptor | None = None) -> ValueHandle:
        """Read-only handle over a value (runtime descriptor when desc is None)."""
        return cls(desc or describe_value(value), lambda: value)

    @classmethod
    def cell(cls, desc: TypeDescriptor, value: Any) -> ValueHandle:
        """Handle that owns its value, like a local variable."""
        box = [value]

        def setter(new: Any) -> None:
            box[0] = new

        return cls(desc, lambda: box[0], setter)

    @classmethod
    def field(cls, owner: Any, field: FieldDescriptor) -> ValueHandle:
        """Handle over one attribute of a record instance."""
        name = field.name
        setter: Setter | None = None
        if field.settable:
            setter = functools.partial(setattr, owner, name)
        return cls(field.type, lambda: getattr(owner, name), setter)

    @classmethod
    def root(cls, obj: Any) -> ValueHandle:
        """Handle for a top-level destination or source argument.

        Refs expose their declared type and are settable. Lists are settable
        in place. Records and everything else are read-only handles: records
        are mutated through their fields, other values cannot be written.
        """
        if isinstance(obj, Ref):
            ref = obj

            def set_ref(new: Any) -> None:
                ref.value = new

            return cls(describe(ref.type), lambda: ref.value, set_ref)
        if isinstance(obj, list):
            items = obj

            def set_items(new: Any) -> None:
                items[:] = new

            return cls(describe_value(items), lambda: items, set_items)
        return cls.of(obj)

    # --- Access ---

    @property
    def value(self) -> Any:
        """Current value."""
        return self._get()

    @property
    def settable(self) -> bool:
        """True if the location itself can be rebound."""
        return self._set is not None

    @property
    def mutable(self) -> bool:
        """True if the current value is a record that accepts field writes."""
        current = self._get()
        cls = type(current)
        return is_record(cls) and not is_frozen(cls)

    def set(self, value: Any) -> None:
        """Write a new value.

        Raises:
            AttributeError: If the handle is read-only.
        """
        if self._set is None:
            raise AttributeError(f"{self.desc.name} location is read-only")
        self._set(value)

    # --- Navigation ---

    def indirect(self) -> ValueHandle:
        """Dereference a pointer handle. A null pointer becomes INVALID."""
        if not self.valid:
            return self
        if self._get() is None:
            return INVALID
        if self.desc.kind is TypeKind.POINTER and self.desc.elem is not None:
            return ValueHandle(self.desc.elem, self._get, self._set)
        return self

    def pointee(self) -> ValueHandle:
        """View of a pointer location typed as its element, sharing storage."""
        if self.desc.kind is TypeKind.POINTER and self.desc.elem is not None:
            return ValueHandle(self.desc.elem, self._get, self._set, self.valid)
        return self

    def dynamic(self) -> ValueHandle:
        """Replace an INTERFACE descriptor with the runtime value's descriptor."""
        if self.desc.kind is not TypeKind.INTERFACE:
            return self
        current = self._get()
        if current is None:
            return self
        return ValueHandle(describe_value(current), self._get, self._set, self.valid)

    def item(self, index: int) -> ValueHandle:
        """Read-only handle over one element of a sequence handle.

        Elements are described by their runtime type, except nested
        sequences, which keep the declared element type.
        """
        value = self._get()[index]
        elem = self.desc.elem
        if elem is not None and elem.kind is TypeKind.POINTER:
            elem = elem.elem
        if value is None or elem is None or elem.kind is not TypeKind.SEQUENCE:
            return ValueHandle.of(value)
        return ValueHandle.of(value, elem)

    def __repr__(self) -> str:
        if not self.valid:
            return "ValueHandle(<invalid>)"
        return f"ValueHandle({self.desc.name}, {self._get()!r})"


def _absent() -> Any:
    return None


INVALID = ValueHandle(describe(Any), _absent, valid=False)
"""The absent value. Copying from it is always a successful no-op."""
