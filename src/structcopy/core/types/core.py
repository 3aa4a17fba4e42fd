"""Type introspection: descriptors, record fields, zero values, and conversions.

Usage:
    describe(list[int | None])     # SEQUENCE of POINTER to SCALAR int
    record_fields(Employee)        # declared fields, in order
    zero_value(describe(User))     # User with zero-valued required fields

    if is_convertible(describe(int), describe(float)):
        convert(3, describe(int), describe(float))  # 3.0
"""

from __future__ import annotations

import collections.abc
import dataclasses
import functools
import inspect
import sys
import types
import typing
from collections.abc import Iterable
from copy import copy as shallow_copy
from enum import Enum
from typing import Annotated, Any, ForwardRef, Literal, TypeAliasType, TypeVar, Union

from structcopy.core.types.models import (
    EMBEDDED_KEY,
    Embedded,
    FieldDescriptor,
    TypeDescriptor,
    TypeKind,
)

_NONE_TYPE = type(None)
_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)

INTERFACE = TypeDescriptor(kind=TypeKind.INTERFACE, type=object, annotation=Any)


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def is_record(cls: Any) -> bool:
    """Check if a class is a record type (dataclass or Pydantic model).

    Args:
        cls: Class to check. Instances are not records.

    Returns:
        True for dataclass classes and Pydantic model classes.
    """
    if not isinstance(cls, type):
        return False
    return dataclasses.is_dataclass(cls) or _is_pydantic(cls)


def is_frozen(cls: type) -> bool:
    """Check if instances of a record type reject attribute assignment."""
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    if _is_pydantic(cls):
        return bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    return False


def _has_embedded_marker(annotation: Any) -> bool:
    if typing.get_origin(annotation) is not Annotated:
        return False
    return any(isinstance(meta, Embedded) for meta in annotation.__metadata__)


def _union_arms(args: tuple[Any, ...]) -> tuple[type, ...]:
    arms: list[type] = []
    for arg in args:
        origin = typing.get_origin(arg) or arg
        if isinstance(origin, type):
            arms.append(origin)
    return tuple(arms)


@functools.cache
def describe(annotation: Any) -> TypeDescriptor:
    """Build the descriptor for an annotation.

    Args:
        annotation: Any annotation: class, generic alias, union, Annotated, alias.

    Returns:
        Descriptor of the annotation's shape. Unresolvable annotations
        (strings, type variables) are INTERFACE.
    """
    if isinstance(annotation, TypeAliasType):
        return describe(annotation.__value__)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is Annotated:
        return describe(args[0])

    if annotation is Any or annotation is object or annotation is None or annotation is _NONE_TYPE:
        return INTERFACE
    if isinstance(annotation, (str, ForwardRef, TypeVar)) or origin is Literal:
        return INTERFACE

    if origin is Union or origin is types.UnionType:
        present = [arg for arg in args if arg is not _NONE_TYPE]
        if len(present) == 1 and len(present) < len(args):
            return TypeDescriptor(
                kind=TypeKind.POINTER,
                type=object,
                elem=describe(present[0]),
                annotation=annotation,
            )
        return TypeDescriptor(
            kind=TypeKind.INTERFACE, type=_union_arms(tuple(present)), annotation=annotation
        )

    if annotation is list or origin in _SEQUENCE_ORIGINS:
        elem = describe(args[0]) if args else INTERFACE
        return TypeDescriptor(kind=TypeKind.SEQUENCE, type=list, elem=elem, annotation=annotation)

    if origin is not None:
        # dict[str, int], tuple[int, ...], set[str], ...
        cls = origin if isinstance(origin, type) else object
        return TypeDescriptor(kind=TypeKind.SCALAR, type=cls, annotation=annotation)

    if isinstance(annotation, type):
        kind = TypeKind.RECORD if is_record(annotation) else TypeKind.SCALAR
        return TypeDescriptor(kind=kind, type=annotation, annotation=annotation)

    return INTERFACE


def describe_value(value: Any) -> TypeDescriptor:
    """Build the descriptor of a runtime value.

    A list carries no element annotation, so its element descriptor comes from
    the first non-None element (INTERFACE for empty or all-None lists). A list
    nested in itself has INTERFACE elements at the point it repeats.
    """
    return _describe_value(value, ())


def _describe_value(value: Any, enclosing: tuple[int, ...]) -> TypeDescriptor:
    if value is None:
        return INTERFACE
    if isinstance(value, list):
        if id(value) in enclosing:
            return TypeDescriptor(
                kind=TypeKind.SEQUENCE, type=list, elem=INTERFACE, annotation=list
            )
        first = next((item for item in value if item is not None), None)
        elem = _describe_value(first, (*enclosing, id(value))) if first is not None else INTERFACE
        return TypeDescriptor(kind=TypeKind.SEQUENCE, type=list, elem=elem, annotation=list)
    return describe(type(value))


def _resolve(owner: type, name: str, annotation: Any) -> Any:
    """Evaluate one string annotation against its class's module.

    Raises:
        TypeError: If the annotation names something the module cannot see.
    """
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(owner.__module__)
    namespace = dict(getattr(module, "__dict__", {}))
    try:
        return eval(annotation, namespace, {owner.__name__: owner})
    except (NameError, AttributeError, SyntaxError) as e:
        raise TypeError(
            f"Cannot resolve annotation {annotation!r} of {owner.__qualname__}.{name}: {e}. "
            f"Types referenced by string annotations must be importable from "
            f"{owner.__module__}"
        ) from e


def _type_hints(cls: type, names: Iterable[str]) -> dict[str, Any]:
    """Resolved annotations of the named fields, one field at a time on failure."""
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        pass

    wanted = set(names)
    hints: dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        if base is object:
            continue
        for name, annotation in inspect.get_annotations(base).items():
            if name in wanted:
                hints[name] = _resolve(base, name, annotation)
    return hints


@functools.cache
def record_fields(cls: type) -> tuple[FieldDescriptor, ...]:
    """Declared fields of a record type, in declaration order.

    Args:
        cls: Record class.

    Returns:
        Field descriptors; empty for non-record classes. A field is settable
        when the record is not frozen, the field is not frozen, and its name
        is public.

    Raises:
        TypeError: If a dataclass field annotation cannot be resolved.
    """
    if not is_record(cls):
        return ()

    frozen = is_frozen(cls)
    result: list[FieldDescriptor] = []

    if dataclasses.is_dataclass(cls):
        hints = _type_hints(cls, (f.name for f in dataclasses.fields(cls)))
        for f in dataclasses.fields(cls):
            annotation = hints.get(f.name, f.type)
            result.append(
                FieldDescriptor(
                    name=f.name,
                    annotation=annotation,
                    type=describe(annotation),
                    embedded=bool(f.metadata.get(EMBEDDED_KEY)) or _has_embedded_marker(annotation),
                    settable=not frozen and not f.name.startswith("_"),
                )
            )
        return tuple(result)

    for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
        result.append(
            FieldDescriptor(
                name=name,
                annotation=info.annotation,
                type=describe(info.annotation),
                embedded=any(isinstance(meta, Embedded) for meta in info.metadata),
                settable=not frozen and not info.frozen and not name.startswith("_"),
            )
        )
    return tuple(result)


def indirect_type(desc: TypeDescriptor) -> TypeDescriptor:
    """Follow pointer and sequence descriptors down to their base descriptor."""
    while desc.kind in (TypeKind.POINTER, TypeKind.SEQUENCE) and desc.elem is not None:
        desc = desc.elem
    return desc


def zero_value(desc: TypeDescriptor) -> Any:
    """Fresh zero value for a descriptor.

    POINTER and INTERFACE zero to None, SEQUENCE to an empty list, records to an
    instance whose required fields hold their own zero values, enums to their
    first member, other classes to their no-argument construction (None when
    the class needs arguments).
    """
    if desc.kind in (TypeKind.POINTER, TypeKind.INTERFACE):
        return None
    if desc.kind is TypeKind.SEQUENCE:
        return []

    cls = desc.type
    if desc.kind is TypeKind.RECORD:
        return _zero_record(cls)
    if issubclass(cls, Enum):
        return next(iter(cls), None)
    try:
        return cls()
    except TypeError:
        return None


def _zero_record(cls: type) -> Any:
    by_name = {f.name: f for f in record_fields(cls)}
    if dataclasses.is_dataclass(cls):
        kwargs = {
            f.name: zero_value(by_name[f.name].type)
            for f in dataclasses.fields(cls)
            if f.init
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        }
        return cls(**kwargs)

    kwargs = {
        name: zero_value(by_name[name].type)
        for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
        if info.is_required()
    }
    return cls.model_construct(**kwargs)  # type: ignore[attr-defined]


def is_assignable(src: TypeDescriptor, dst: TypeDescriptor) -> bool:
    """Check if a value described by src can be stored as-is where dst is declared.

    Anything is assignable to Any/object, class members to unions containing
    their class, subclasses to base classes. Pointer and sequence
    descriptors require identical element descriptors.
    """
    if dst.kind is TypeKind.INTERFACE:
        if dst.type is object:
            return True
        target = src.elem if src.kind is TypeKind.POINTER and src.elem is not None else src
        return (
            target.kind in (TypeKind.SCALAR, TypeKind.RECORD)
            and isinstance(target.type, type)
            and issubclass(target.type, dst.type)
        )
    if src == dst:
        return True
    if src.kind is not dst.kind:
        return False
    if src.kind in (TypeKind.SCALAR, TypeKind.RECORD):
        return (
            isinstance(src.type, type)
            and isinstance(dst.type, type)
            and issubclass(src.type, dst.type)
        )
    return src.elem == dst.elem


def _is_number(cls: Any) -> bool:
    return (
        isinstance(cls, type)
        and issubclass(cls, (int, float))
        and not issubclass(cls, (bool, Enum))
    )


def _is_text(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, str) and not issubclass(cls, Enum)


def _is_binary(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, (bytes, bytearray))


def _layout(cls: type) -> tuple[tuple[str, TypeDescriptor], ...]:
    return tuple((f.name, f.type) for f in record_fields(cls))


def _init_complete(cls: type) -> bool:
    if dataclasses.is_dataclass(cls):
        return all(f.init for f in dataclasses.fields(cls))
    return True


def is_convertible(src: TypeDescriptor, dst: TypeDescriptor) -> bool:
    """Check if a value described by src can be converted to dst.

    Convertible pairs: assignable pairs, numbers (int and float, bool never),
    text and bytes (UTF-8), and record types with identical field layouts.
    """
    if is_assignable(src, dst):
        return True
    if src.kind is TypeKind.SCALAR and dst.kind is TypeKind.SCALAR:
        if _is_number(src.type) and _is_number(dst.type):
            return True
        return (_is_text(src.type) and _is_binary(dst.type)) or (
            _is_binary(src.type) and _is_text(dst.type)
        )
    if src.kind is TypeKind.RECORD and dst.kind is TypeKind.RECORD:
        return _layout(src.type) == _layout(dst.type) and _init_complete(dst.type)
    return False


def detach(value: Any) -> Any:
    """Copy containers and records so the destination never aliases the source.

    One level only: elements of a copied list are shared.
    """
    if isinstance(value, (list, dict, set, bytearray)):
        return shallow_copy(value)
    if is_record(type(value)):
        return shallow_copy(value)
    return value


def convert(value: Any, src: TypeDescriptor, dst: TypeDescriptor) -> Any:
    """Convert a value between convertible descriptors.

    Args:
        value: Value described by src.
        src: Source descriptor.
        dst: Destination descriptor; ``is_convertible(src, dst)`` must hold.

    Returns:
        Value suitable for storage where dst is declared.
    """
    if dst.kind is TypeKind.INTERFACE or is_assignable(src, dst):
        return detach(value)

    if dst.kind is TypeKind.RECORD:
        kwargs = {name: getattr(value, name) for name, _ in _layout(dst.type)}
        if dataclasses.is_dataclass(dst.type):
            return dst.type(**kwargs)
        return dst.type.model_construct(**kwargs)

    cls = dst.type
    if _is_number(cls):
        return cls(value)
    if _is_binary(cls):
        return cls(value.encode("utf-8", errors="surrogateescape"))
    return cls(bytes(value).decode("utf-8", errors="surrogateescape"))
