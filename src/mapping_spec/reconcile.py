"""Widen baseline schemas using the shape of sample documents.

For every top-level field the first document that carries the field's key
decides its final shape; later documents are not consulted. Struct fields are
reconciled child by child against that same single document. A union across
all documents would be more precise but changes results, so it is not done.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from mapping_spec.field_types import (
    FieldDescriptor,
    ListType,
    SchemaSpec,
    StructType,
    is_list_like,
)
from utils.value_kinds import ValueKind, classify_value

logger = logging.getLogger(__name__)


def reconcile_field(field: FieldDescriptor, value: object) -> FieldDescriptor:
    """Return ``field`` adjusted for a single observed value.

    Parameters
    ----------
    field
        Current field descriptor.
    value
        Value observed for the field; ``None`` leaves the field unchanged.

    Returns
    -------
    FieldDescriptor
        A new descriptor when the value widens the field, else ``field``.
    """
    kind = classify_value(value)
    if kind is ValueKind.LIST:
        if is_list_like(field.dtype):
            return field
        logger.debug("Widening field %r to a list of %s.", field.name, field.dtype)
        return field.with_type(ListType(element=field.dtype), nullable=True)
    if kind is ValueKind.MAPPING and isinstance(field.dtype, StructType):
        return field.with_type(reconcile_struct(field.dtype, value), nullable=True)
    return field


def reconcile_struct(dtype: StructType, value: Mapping[str, object]) -> StructType:
    """Return a struct type whose children are reconciled against one mapping.

    Returns
    -------
    StructType
        New struct type; children missing from ``value`` are kept as-is.
    """
    return StructType(
        fields=tuple(reconcile_field(child, value.get(child.name)) for child in dtype.fields)
    )


def first_present_value(name: str, documents: Iterable[Mapping[str, object]]) -> tuple[bool, object]:
    """Return ``(True, value)`` for the first document that has key ``name``.

    Returns
    -------
    tuple[bool, object]
        Presence flag and the value (``(False, None)`` when no document has it).
    """
    for document in documents:
        if name in document:
            return True, document[name]
    return False, None


def reconcile_schema(
    schema: SchemaSpec,
    documents: Iterable[Mapping[str, object]],
) -> SchemaSpec:
    """Return a new schema widened to the shapes found in ``documents``.

    Parameters
    ----------
    schema
        Baseline schema, left untouched.
    documents
        Sample documents; iterated once per top-level field.

    Returns
    -------
    SchemaSpec
        Adjusted schema in the same field order.
    """
    sample = documents if isinstance(documents, (list, tuple)) else list(documents)
    adjusted: list[FieldDescriptor] = []
    for field in schema.fields:
        present, value = first_present_value(field.name, sample)
        adjusted.append(reconcile_field(field, value) if present else field)
    return SchemaSpec(fields=tuple(adjusted))


__all__ = [
    "first_present_value",
    "reconcile_field",
    "reconcile_schema",
    "reconcile_struct",
]
