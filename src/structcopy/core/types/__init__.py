"""Type functionality: descriptors, record introspection, and conversions."""

from structcopy.core.types.core import (
    INTERFACE,
    convert,
    describe,
    describe_value,
    detach,
    indirect_type,
    is_assignable,
    is_convertible,
    is_frozen,
    is_record,
    record_fields,
    zero_value,
)
from structcopy.core.types.models import (
    Embedded,
    FieldDescriptor,
    Ref,
    Scannable,
    TypeDescriptor,
    TypeKind,
    embedded,
)

__all__ = [
    # Models
    "TypeKind",
    "TypeDescriptor",
    "FieldDescriptor",
    "Embedded",
    "embedded",
    "Scannable",
    "Ref",
    # Core
    "INTERFACE",
    "describe",
    "describe_value",
    "record_fields",
    "is_record",
    "is_frozen",
    "indirect_type",
    "zero_value",
    "is_assignable",
    "is_convertible",
    "convert",
    "detach",
]
