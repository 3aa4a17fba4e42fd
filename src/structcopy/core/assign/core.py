"""Leaf copy between two value handles.

Usage:
    outcome = assign(ValueHandle.field(dest, field), ValueHandle.of(3))
    if outcome is AssignOutcome.DECLINED:
        ...  # fall back to a structural copy
"""

from __future__ import annotations

import logging
from typing import Any

from structcopy.core.assign.models import AssignOutcome
from structcopy.core.types import (
    Scannable,
    TypeKind,
    convert,
    is_convertible,
    zero_value,
)
from structcopy.core.values import ValueHandle

logger = logging.getLogger(__name__)


def _is_scannable(value: Any) -> bool:
    return isinstance(value, Scannable) and not isinstance(value, type)


def _scan(target: Scannable, value: Any) -> AssignOutcome:
    """Offer a value to a destination's __scan__ hook."""
    try:
        target.__scan__(value)
    except (TypeError, ValueError) as e:
        logger.debug("%s refused %r: %s", type(target).__name__, value, e)
        return AssignOutcome.DECLINED
    return AssignOutcome.ASSIGNED


def assign(to: ValueHandle, from_: ValueHandle) -> AssignOutcome:
    """Copy one value into a settable handle.

    Tries in order:
    1. Absent source: nothing to copy, destination kept.
    2. Pointer destination: null source nulls it; otherwise a null destination
       is allocated and the copy continues into its element.
    3. Null source: offered to a Scannable destination, otherwise kept.
    4. Convertible types: converted and stored.
    5. Scannable destination: ``__scan__`` absorbs the value.
    6. Pointer source: retried with the dereferenced source.

    Args:
        to: Settable destination handle.
        from_: Source handle.

    Returns:
        ASSIGNED on success, DECLINED when the caller should try a structural copy.
    """
    if not from_.valid:
        return AssignOutcome.ASSIGNED

    source = from_.dynamic()
    value = source.value

    if to.desc.kind is TypeKind.POINTER and to.desc.elem is not None:
        if value is None:
            to.set(None)
            return AssignOutcome.ASSIGNED
        if to.value is None:
            to.set(zero_value(to.desc.elem))
        to = to.pointee()

    if value is None:
        if to.desc.kind is TypeKind.INTERFACE:
            to.set(None)
            return AssignOutcome.ASSIGNED
        current = to.value
        if _is_scannable(current):
            return _scan(current, None)
        return AssignOutcome.ASSIGNED

    if is_convertible(source.desc, to.desc):
        to.set(convert(value, source.desc, to.desc))
        return AssignOutcome.ASSIGNED

    current = to.value
    if _is_scannable(current):
        return _scan(current, value)

    if source.desc.kind is TypeKind.POINTER:
        return assign(to, source.indirect())

    logger.debug("Leaf copy declined: %s into %s", source.desc.name, to.desc.name)
    return AssignOutcome.DECLINED
