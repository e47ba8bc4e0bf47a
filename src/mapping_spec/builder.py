"""Build schema specs from index mapping ``properties`` trees."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from mapping_spec.field_types import FieldDescriptor, SchemaSpec
from mapping_spec.type_mapper import field_type_name, map_field_type

logger = logging.getLogger(__name__)

_EMPTY_NODE: Mapping[str, object] = {}


def build_field(name: str, node: object) -> FieldDescriptor:
    """Return the descriptor for a single mapping field.

    Nodes that are not mappings are treated as property-less objects.

    Returns
    -------
    FieldDescriptor
        Non-nullable field descriptor.
    """
    if not isinstance(node, Mapping):
        logger.warning("Mapping node for field %r is not an object; treating as empty.", name)
        node = _EMPTY_NODE
    return FieldDescriptor(name=name, dtype=map_field_type(field_type_name(node), node))


def build_fields(properties: Mapping[str, object]) -> tuple[FieldDescriptor, ...]:
    """Build field descriptors for a ``properties`` map in key order.

    Returns
    -------
    tuple[FieldDescriptor, ...]
        One non-nullable descriptor per property.
    """
    return tuple(build_field(name, node) for name, node in properties.items())


def build_schema(properties: Mapping[str, object]) -> SchemaSpec:
    """Build the baseline schema for a mapping's root ``properties``.

    Field order follows the key order of ``properties``; the JSON decoders used
    by :mod:`mapping_spec.loader` preserve document order.

    Parameters
    ----------
    properties
        Root ``properties`` map of an index mapping.

    Returns
    -------
    SchemaSpec
        Baseline schema with all fields non-nullable.
    """
    schema = SchemaSpec(fields=build_fields(properties))
    logger.debug("Built baseline schema with %d fields.", len(schema.fields))
    return schema


__all__ = ["build_field", "build_fields", "build_schema"]
