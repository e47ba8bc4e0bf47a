"""Map search-index field types onto column type descriptors.

The mapper is total: unknown type names fall back to strings, ``dense_vector``
without a usable ``dims`` becomes a zero-length vector, and struct-typed fields
without ``properties`` become empty structs.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from mapping_spec.field_types import (
    BOOLEAN,
    FLOAT32,
    FLOAT64,
    INT32,
    INT64,
    STRING,
    TIMESTAMP_NS,
    FixedVectorType,
    StructType,
    TypeDescriptor,
)

DEFAULT_FIELD_TYPE = "object"
STRUCT_TYPE_NAMES = frozenset({"nested", "object"})
VECTOR_TYPE_NAME = "dense_vector"
UNSPECIFIED_DIMS = 0
MAX_DIMS = 2**31 - 1

_SCALAR_TYPES: dict[str, TypeDescriptor] = {
    "text": STRING,
    "keyword": STRING,
    "integer": INT32,
    "long": INT64,
    "float": FLOAT32,
    "double": FLOAT64,
    "boolean": BOOLEAN,
    "date": TIMESTAMP_NS,
}


def field_type_name(node: Mapping[str, object]) -> str:
    """Return the declared ``type`` of a mapping node, defaulting to ``object``."""
    declared = node.get("type")
    return declared if isinstance(declared, str) else DEFAULT_FIELD_TYPE


def vector_dims(node: Mapping[str, object]) -> int:
    """Return the ``dims`` of a dense vector node, or zero when unusable."""
    dims = node.get("dims")
    if isinstance(dims, bool) or not isinstance(dims, (int, float)):
        return UNSPECIFIED_DIMS
    if not math.isfinite(dims) or dims > MAX_DIMS:
        return UNSPECIFIED_DIMS
    return max(int(dims), UNSPECIFIED_DIMS)


def child_properties(node: Mapping[str, object]) -> Mapping[str, object] | None:
    """Return the ``properties`` map of a node when it is a mapping."""
    properties = node.get("properties")
    return properties if isinstance(properties, Mapping) else None


def map_field_type(type_name: str, node: Mapping[str, object]) -> TypeDescriptor:
    """Return the column type for an index field type.

    Parameters
    ----------
    type_name
        Declared index type name, for example ``keyword`` or ``nested``.
    node
        The field's mapping node, consulted for ``dims`` and ``properties``.

    Returns
    -------
    TypeDescriptor
        Column type descriptor; never raises for unknown names.
    """
    scalar = _SCALAR_TYPES.get(type_name)
    if scalar is not None:
        return scalar
    if type_name == VECTOR_TYPE_NAME:
        return FixedVectorType(size=vector_dims(node), element=FLOAT32)
    if type_name in STRUCT_TYPE_NAMES:
        properties = child_properties(node)
        if properties is None:
            return StructType()
        from mapping_spec.builder import build_fields

        return StructType(fields=build_fields(properties))
    return STRING


__all__ = [
    "DEFAULT_FIELD_TYPE",
    "MAX_DIMS",
    "STRUCT_TYPE_NAMES",
    "UNSPECIFIED_DIMS",
    "VECTOR_TYPE_NAME",
    "child_properties",
    "field_type_name",
    "map_field_type",
    "vector_dims",
]
