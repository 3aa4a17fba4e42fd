"""Recursive copy between values of related types.

Usage:
    @dataclass
    class User:
        name: str = ""
        age: int = 0

    @dataclass
    class Employee:
        name: str = ""
        age: float = 0.0

    employee = Employee()
    copy(employee, User(name="ann", age=41))    # Employee(name="ann", age=41.0)

    employees = Ref(list[Employee])
    copy(employees, [User(name="bob"), User(name="eve")])
    copy(employees, User(name="zoe"))           # appends one more

    # Explicit configuration instead of the process-wide default
    Copier(CopierSettings(init_all_embedded=True)).copy(employee, user)
"""

from __future__ import annotations

import logging
from typing import Any

from structcopy.config import CopierSettings
from structcopy.copier.bridge import field_to_setter, getter_to_field
from structcopy.copier.errors import CopyDepthError, UnaddressableError
from structcopy.core import (
    ALL_NIL_FIELDS,
    AssignOutcome,
    TypeDescriptor,
    TypeKind,
    ValueHandle,
    assign,
    describe_value,
    discover_fields,
    ensure_reachable,
    find_field,
    indirect_type,
    is_assignable,
    is_convertible,
    is_record,
    zero_value,
)
from structcopy.core.types import detach

logger = logging.getLogger(__name__)


def _accepts(elem: TypeDescriptor | None, value: Any) -> bool:
    """Check if a list declared with elem can hold value (directly or as pointer)."""
    if elem is None or (elem.kind is TypeKind.INTERFACE and elem.type is object):
        return True
    if value is None:
        return elem.kind in (TypeKind.POINTER, TypeKind.INTERFACE)
    runtime = describe_value(value)
    if is_assignable(runtime, elem):
        return True
    return (
        elem.kind is TypeKind.POINTER
        and elem.elem is not None
        and is_assignable(runtime, elem.elem)
    )


class Copier:
    """Copies data between values of different but related types.

    Settings are fixed at construction; concurrent copies into distinct
    destinations are safe.

    Args:
        settings: Configuration. Defaults to CopierSettings() from the environment.
    """

    def __init__(self, settings: CopierSettings | None = None) -> None:
        self._settings = settings or CopierSettings()

    @property
    def settings(self) -> CopierSettings:
        """Configuration this copier was built with."""
        return self._settings

    def copy(self, to: Any, from_: Any) -> None:
        """Copy from_ into to.

        Args:
            to: Destination: a Ref, a list, or a mutable record instance.
            from_: Source: any value. None copies nothing.

        Raises:
            UnaddressableError: If the destination cannot be written. Nothing
                has been mutated when raised for the top-level destination.
            CopyDepthError: If copies nest deeper than ``max_depth``.

        Note:
            Not atomic: when a nested copy raises, fields copied before it keep
            their new values.
        """
        self._copy(ValueHandle.root(to), ValueHandle.root(from_), depth=0)

    def _copy(self, to: ValueHandle, from_: ValueHandle, depth: int) -> None:
        if depth > self._settings.max_depth:
            raise CopyDepthError(self._settings.max_depth)
        if not (to.settable or to.mutable):
            raise UnaddressableError(
                f"Cannot copy into {type(to.value).__name__}: "
                f"pass a Ref, a list, or a mutable record"
            )

        source = from_.indirect().dynamic()
        if not source.valid:
            return

        target = to.pointee()
        from_type = indirect_type(source.desc)
        to_type = indirect_type(target.desc)

        # Plain values go across as is; records are always copied field by field
        if (
            from_type.kind is not TypeKind.RECORD
            and target.settable
            and is_assignable(source.desc, target.desc)
        ):
            target.set(detach(source.value))
            return

        collection = target.desc.kind is TypeKind.SEQUENCE
        from_sequence = source.desc.kind is TypeKind.SEQUENCE
        amount = len(source.value) if collection and from_sequence else 1

        both_records = from_type.kind is TypeKind.RECORD and to_type.kind is TypeKind.RECORD
        elements_convertible = collection and (
            from_type.kind is TypeKind.INTERFACE or is_convertible(from_type, to_type)
        )
        if not (both_records or elements_convertible):
            logger.debug("Nothing to copy from %s into %s", source.desc.name, target.desc.name)
            return

        if collection and amount == 0:
            target.set([])
            return

        for i in range(amount):
            if collection:
                element = source.item(i).indirect().dynamic() if from_sequence else source
                dest = ValueHandle.cell(to_type, zero_value(to_type))
            else:
                element = source
                dest = target
                if dest.value is None and to_type.kind is TypeKind.RECORD:
                    dest.set(zero_value(to_type))

            if element.valid:
                if from_type.kind is not TypeKind.RECORD and to_type.kind is not TypeKind.RECORD:
                    assign(dest, element)
                else:
                    self._copy_record(dest, element, depth)

            if collection:
                self._append(target, dest.value)

    def _append(self, target: ValueHandle, value: Any) -> None:
        if not _accepts(target.desc.elem, value):
            logger.debug("Dropping %r: not a valid %s element", value, target.desc.name)
            return
        items = target.value
        if items is None:
            target.set([value])
        else:
            items.append(value)

    def _copy_record(self, dest: ValueHandle, source: ValueHandle, depth: int) -> None:
        """Copy one record into another: fields, then setters, then getters."""
        from_value = source.value
        to_value = dest.value

        if not dest.mutable:
            # Frozen or not a record: only a whole-value replacement can work
            if dest.settable and assign(dest, source) is AssignOutcome.ASSIGNED:
                return
            if is_record(type(to_value)):
                raise UnaddressableError(f"Cannot copy into frozen {type(to_value).__name__}")
            return
        if not is_record(type(from_value)):
            return

        need_init: set[str] = set()
        source_names = dict.fromkeys(f.name for f in discover_fields(from_value, "", need_init))
        ensure_reachable(
            to_value,
            "",
            ALL_NIL_FIELDS if self._settings.init_all_embedded else need_init,
        )

        for name in source_names:
            from_field = find_field(from_value, name)
            if from_field is None:
                continue
            to_field = find_field(to_value, name)
            if to_field is None:
                field_to_setter(to_value, name, from_field)
                continue
            if not to_field.settable:
                continue
            if assign(to_field, from_field) is AssignOutcome.DECLINED:
                self._copy(to_field, from_field, depth + 1)

        for name in dict.fromkeys(f.name for f in discover_fields(to_value)):
            getter_to_field(from_value, to_value, name)


_copier: Copier | None = None


def configure(settings: CopierSettings) -> Copier:
    """Install the process-wide copier used by copy().

    Call once at startup, before any copy runs.

    Args:
        settings: Configuration for the default copier.

    Returns:
        The new default Copier.
    """
    global _copier
    _copier = Copier(settings)
    return _copier


def get_copier() -> Copier:
    """Access the process-wide copier, building it from the environment on first use."""
    global _copier
    if _copier is None:
        _copier = Copier()
    return _copier


def copy(to: Any, from_: Any) -> None:
    """Copy from_ into to with the process-wide copier.

    See Copier.copy.
    """
    get_copier().copy(to, from_)
