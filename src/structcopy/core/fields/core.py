"""Field flattening, promoted-field lookup, and embedded pointer initialization.

Embedded fields expose their own fields as if declared on the owner:

    @dataclass
    class Person:
        name: str = ""

    @dataclass
    class Employee:
        person: Person | None = embedded(default=None)
        salary: int = 0

    [f.name for f in discover_fields(Employee(Person("ann")))]  # ["name", "salary"]

Paths of embedded fields are dotted names from the root record, e.g.
``"person"`` or ``"person.address"``.
"""

from __future__ import annotations

from typing import Any

from structcopy.core.types import (
    FieldDescriptor,
    TypeKind,
    is_record,
    record_fields,
    zero_value,
)
from structcopy.core.values import ValueHandle

type FieldPath = str
type NeedInitSet = set[FieldPath] | frozenset[FieldPath]


class _AllNilFields(frozenset[FieldPath]):
    def __repr__(self) -> str:
        return "ALL_NIL_FIELDS"


ALL_NIL_FIELDS: frozenset[FieldPath] = _AllNilFields()
"""Sentinel need-init set: materialize every null embedded pointer.

Compared by identity, never by content.
"""


def discover_fields(
    value: Any,
    prefix: FieldPath = "",
    need_init: set[FieldPath] | None = None,
) -> list[FieldDescriptor]:
    """Flatten the fields of a record value.

    Walks declared fields depth-first in declaration order. Embedded fields
    holding None are skipped along with everything under them. Embedded
    pointer fields holding a value are recorded in ``need_init`` so the
    destination can make the same paths reachable.

    Args:
        value: Record instance (anything else yields no fields).
        prefix: Path of ``value`` from the root, with a trailing dot.
        need_init: Set collecting non-null embedded pointer paths, or None.

    Returns:
        Non-embedded fields in order. Names may repeat when embedded records
        declare the same field; lookups resolve them with ``find_field``.
    """
    if value is None or not is_record(type(value)):
        return []

    fields: list[FieldDescriptor] = []
    for field in record_fields(type(value)):
        if not field.embedded:
            fields.append(field)
            continue

        inner = getattr(value, field.name)
        if inner is None:
            continue
        path = prefix + field.name
        if field.type.kind is TypeKind.POINTER and need_init is not None:
            need_init.add(path)
        fields.extend(discover_fields(inner, path + ".", need_init))
    return fields


def ensure_reachable(
    value: Any,
    prefix: FieldPath = "",
    need_init: NeedInitSet | None = None,
) -> None:
    """Allocate null embedded pointers along the paths in ``need_init``.

    Only embedded pointer fields are touched; everything else is left as is.
    With ``ALL_NIL_FIELDS`` every null, settable embedded pointer is allocated.

    Args:
        value: Record instance to prepare (anything else is ignored).
        prefix: Path of ``value`` from the root, with a trailing dot.
        need_init: Paths to materialize, ``ALL_NIL_FIELDS``, or None for no-op.
    """
    if need_init is None or value is None or not is_record(type(value)):
        return

    init_all = need_init is ALL_NIL_FIELDS
    for field in record_fields(type(value)):
        if not field.embedded:
            continue

        path = prefix + field.name
        inner = getattr(value, field.name)
        if inner is None:
            if field.type.kind is not TypeKind.POINTER or field.type.elem is None:
                continue
            if not field.settable:
                continue
            if not init_all and path not in need_init:
                continue
            inner = zero_value(field.type.elem)
            setattr(value, field.name, inner)
        ensure_reachable(inner, path + ".", need_init)


def find_field(value: Any, name: str) -> ValueHandle | None:
    """Find a field by name, including fields promoted from embedded records.

    The shallowest embedding depth wins. Within one depth the last declared
    match wins. Embedded fields holding None are not traversed.

    Args:
        value: Record instance to search.
        name: Field name.

    Returns:
        Handle over the owning record's attribute, or None if not found.
    """
    if value is None or not is_record(type(value)):
        return None

    seen: set[int] = set()
    level = [value]
    while level:
        found: ValueHandle | None = None
        next_level: list[Any] = []
        for owner in level:
            seen.add(id(owner))
            for field in record_fields(type(owner)):
                if field.name == name:
                    found = ValueHandle.field(owner, field)
                elif field.embedded:
                    inner = getattr(owner, field.name)
                    if inner is not None and is_record(type(inner)) and id(inner) not in seen:
                        next_level.append(inner)
        if found is not None:
            return found
        level = next_level
    return None
