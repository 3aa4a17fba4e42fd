"""Method bridge: copy between fields and same-named accessors.

When the destination has no field for a source field, a setter receives the
value instead. After the fields are copied, a source getter named after a
destination field supplies that field:

    @dataclass
    class User:
        role: str = ""

    @dataclass
    class Employee:
        title: str = ""

        def set_role(self, role: str) -> None:
            self.title = role.upper()

    copy(employee, User(role="admin"))  # employee.title == "ADMIN"

Accessors are looked up as ``name``/``set_name``/``get_name`` methods or as a
property ``name``. Getter methods must declare a return type other than
None, so plain methods that only act on the source are never called.
Members inherited from ``object`` or Pydantic's BaseModel never match, so a
``json`` field does not pick up ``BaseModel.json()``.
"""

from __future__ import annotations

import functools
import inspect
import logging
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from structcopy.core import (
    TypeDescriptor,
    ValueHandle,
    assign,
    describe,
    find_field,
    is_assignable,
)
from structcopy.core.types import detach

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)


@dataclass(frozen=True, slots=True)
class Getter:
    """Zero-argument accessor and its declared return descriptor (None if unannotated)."""

    call: Callable[[], Any]
    returns: TypeDescriptor | None


def _user_attribute(cls: type, name: str) -> Any:
    """Class attribute defined by user code, skipping object and Pydantic bases."""
    for base in cls.__mro__:
        if base is object or base.__module__.startswith("pydantic"):
            continue
        if name in base.__dict__:
            return base.__dict__[name]
    return None


def _hints(function: Callable[..., Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(function)
    except (NameError, TypeError):
        return {}


def find_setter(owner: Any, name: str, value: TypeDescriptor) -> Callable[[Any], Any] | None:
    """Find a one-argument accessor on owner that accepts a value.

    Args:
        owner: Destination record instance.
        name: Source field name.
        value: Descriptor of the value to pass.

    Returns:
        Callable taking the value, or None if owner has no compatible setter.
    """
    cls = type(owner)
    for candidate in (name, f"set_{name}"):
        attr = _user_attribute(cls, candidate)
        if isinstance(attr, property):
            if candidate == name and attr.fset is not None:
                return functools.partial(setattr, owner, name)
            continue
        if not inspect.isfunction(attr):
            continue

        method = getattr(owner, candidate)
        params = list(inspect.signature(method).parameters.values())
        if len(params) != 1 or params[0].kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            continue
        annotation = _hints(attr).get(params[0].name)
        if annotation is None or is_assignable(value, describe(annotation)):
            return method
    return None


def find_getter(owner: Any, name: str) -> Getter | None:
    """Find a zero-argument accessor on owner returning one value.

    Methods must declare a return type other than None: unannotated methods
    and methods annotated ``-> None`` are not getters. Properties always are.

    Args:
        owner: Source record instance.
        name: Destination field name.

    Returns:
        Getter, or None if owner has no getter for name.
    """
    cls = type(owner)
    for candidate in (name, f"get_{name}"):
        attr = _user_attribute(cls, candidate)
        if isinstance(attr, property):
            if candidate == name and attr.fget is not None:
                returns = _hints(attr.fget).get("return")
                return Getter(
                    call=functools.partial(getattr, owner, name),
                    returns=describe(returns) if returns is not None else None,
                )
            continue
        if not inspect.isfunction(attr):
            continue

        method = getattr(owner, candidate)
        if inspect.signature(method).parameters:
            continue
        returns = _hints(attr).get("return")
        if returns is None or returns is _NONE_TYPE:
            continue
        return Getter(call=method, returns=describe(returns))
    return None


def field_to_setter(dest: Any, name: str, from_field: ValueHandle) -> bool:
    """Pass a source field to the destination's setter for it.

    The setter receives a detached copy of lists and records. Its return
    value is ignored; exceptions it raises propagate.

    Returns:
        True if a setter was called.
    """
    source = from_field.dynamic()
    setter = find_setter(dest, name, source.desc)
    if setter is None:
        return False
    logger.debug("Bridging field %r into %s setter", name, type(dest).__name__)
    setter(detach(source.value))
    return True


def getter_to_field(source: Any, dest: Any, name: str) -> bool:
    """Fill a destination field from the source's getter for it.

    Runs after the field pass, so a getter overrides a same-named field
    copied from the source.

    Returns:
        True if a getter was called and its result assigned.
    """
    getter = find_getter(source, name)
    if getter is None:
        return False
    to_field = find_field(dest, name)
    if to_field is None or not to_field.settable:
        return False

    logger.debug("Bridging %s getter into field %r", type(source).__name__, name)
    assign(to_field, ValueHandle.of(getter.call(), getter.returns))
    return True
