"""Field functionality: flattening, lookup, and embedded pointer initialization."""

from structcopy.core.fields.core import (
    ALL_NIL_FIELDS,
    FieldPath,
    NeedInitSet,
    discover_fields,
    ensure_reachable,
    find_field,
)

__all__ = [
    "ALL_NIL_FIELDS",
    "FieldPath",
    "NeedInitSet",
    "discover_fields",
    "ensure_reachable",
    "find_field",
]
