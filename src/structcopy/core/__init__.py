"""Core functionalities: stateless introspection and copy primitives.

Architecture Note:
    core/ contains pure, stateless functionalities: type descriptors, value
    handles, field flattening, and the leaf copy. They hold no configuration.
    The recursive copy operation that composes them lives in copier/.
"""

from structcopy.core.assign import AssignOutcome, assign
from structcopy.core.fields import (
    ALL_NIL_FIELDS,
    FieldPath,
    NeedInitSet,
    discover_fields,
    ensure_reachable,
    find_field,
)
from structcopy.core.types import (
    Embedded,
    FieldDescriptor,
    Ref,
    Scannable,
    TypeDescriptor,
    TypeKind,
    describe,
    describe_value,
    embedded,
    indirect_type,
    is_assignable,
    is_convertible,
    is_record,
    record_fields,
    zero_value,
)
from structcopy.core.values import INVALID, ValueHandle

__all__ = [
    # Types
    "TypeKind",
    "TypeDescriptor",
    "FieldDescriptor",
    "Embedded",
    "embedded",
    "Scannable",
    "Ref",
    "describe",
    "describe_value",
    "record_fields",
    "is_record",
    "indirect_type",
    "zero_value",
    "is_assignable",
    "is_convertible",
    # Values
    "ValueHandle",
    "INVALID",
    # Fields
    "ALL_NIL_FIELDS",
    "FieldPath",
    "NeedInitSet",
    "discover_fields",
    "ensure_reachable",
    "find_field",
    # Assign
    "AssignOutcome",
    "assign",
]
