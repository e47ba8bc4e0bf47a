"""Index mapping to column schema translation."""

from mapping_spec.builder import build_field, build_fields, build_schema
from mapping_spec.field_types import (
    BOOLEAN,
    FLOAT32,
    FLOAT64,
    INT32,
    INT64,
    STRING,
    TIMESTAMP_NS,
    FieldDescriptor,
    FixedVectorType,
    ListType,
    PrimitiveType,
    SchemaSpec,
    StructType,
    TimestampType,
    TypeDescriptor,
    descriptor_from_arrow,
    descriptor_to_arrow,
)
from mapping_spec.loader import MappingError, decode_mapping, load_mapping, mapping_properties
from mapping_spec.reconcile import reconcile_field, reconcile_schema
from mapping_spec.type_mapper import map_field_type

__all__ = [
    "BOOLEAN",
    "FLOAT32",
    "FLOAT64",
    "INT32",
    "INT64",
    "STRING",
    "TIMESTAMP_NS",
    "FieldDescriptor",
    "FixedVectorType",
    "ListType",
    "MappingError",
    "PrimitiveType",
    "SchemaSpec",
    "StructType",
    "TimestampType",
    "TypeDescriptor",
    "build_field",
    "build_fields",
    "build_schema",
    "decode_mapping",
    "descriptor_from_arrow",
    "descriptor_to_arrow",
    "load_mapping",
    "map_field_type",
    "mapping_properties",
    "reconcile_field",
    "reconcile_schema",
]
