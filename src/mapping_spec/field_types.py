"""Serializable column type descriptors and their Arrow lowering."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Literal, TypeAlias

import pyarrow as pa

from serde_msgspec import StructBaseStrict, dumps_json, loads_json

TIMESTAMP_UNIT: Literal["ns"] = "ns"
TIMESTAMP_TZ = "UTC"


class TypeDescriptorBase(StructBaseStrict, frozen=True, tag=True, tag_field="kind"):
    """Base tagged column type descriptor."""


PrimitiveName = Literal["string", "int32", "int64", "float32", "float64", "bool"]


class PrimitiveType(TypeDescriptorBase, tag="primitive", frozen=True):
    """Scalar column type."""

    name: PrimitiveName


class TimestampType(TypeDescriptorBase, tag="timestamp", frozen=True):
    """Timestamp column type with a fixed unit and timezone."""

    unit: Literal["ns"] = TIMESTAMP_UNIT
    timezone: str = TIMESTAMP_TZ


class FixedVectorType(TypeDescriptorBase, tag="fixed_vector", frozen=True):
    """Fixed-length vector of ``size`` elements.

    A size of zero stands for an unspecified dimensionality.
    """

    size: int
    element: TypeDescriptor


class ListType(TypeDescriptorBase, tag="list", frozen=True):
    """Variable-length list column type."""

    element: TypeDescriptor


class FieldDescriptor(StructBaseStrict, frozen=True):
    """Named column with a type descriptor and nullability."""

    name: str
    dtype: TypeDescriptor
    nullable: bool = False

    def with_type(self, dtype: TypeDescriptor, *, nullable: bool | None = None) -> FieldDescriptor:
        """Return a copy of this field with a new type.

        Returns
        -------
        FieldDescriptor
            New field descriptor; nullability is kept unless overridden.
        """
        resolved = self.nullable if nullable is None else nullable
        return FieldDescriptor(name=self.name, dtype=dtype, nullable=resolved)

    def to_pyarrow(self) -> pa.Field:
        """Return a pyarrow.Field for the descriptor.

        Returns
        -------
        pyarrow.Field
            PyArrow field definition.
        """
        return pa.field(self.name, descriptor_to_arrow(self.dtype), nullable=self.nullable)

    @classmethod
    def from_pyarrow(cls, field: pa.Field) -> FieldDescriptor:
        """Return a FieldDescriptor from a pyarrow.Field.

        Returns
        -------
        FieldDescriptor
            Descriptor for the field.
        """
        return cls(
            name=field.name,
            dtype=descriptor_from_arrow(field.type),
            nullable=field.nullable,
        )


class StructType(TypeDescriptorBase, tag="struct", frozen=True):
    """Struct column type with ordered, uniquely named children."""

    fields: tuple[FieldDescriptor, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for child in self.fields:
            if child.name in seen:
                msg = f"Duplicate struct field name {child.name!r}."
                raise ValueError(msg)
            seen.add(child.name)

    def field(self, name: str) -> FieldDescriptor | None:
        """Return the child field named ``name`` if present.

        Returns
        -------
        FieldDescriptor | None
            Matching child field.
        """
        for child in self.fields:
            if child.name == name:
                return child
        return None


TypeDescriptor: TypeAlias = PrimitiveType | TimestampType | FixedVectorType | ListType | StructType


STRING = PrimitiveType(name="string")
INT32 = PrimitiveType(name="int32")
INT64 = PrimitiveType(name="int64")
FLOAT32 = PrimitiveType(name="float32")
FLOAT64 = PrimitiveType(name="float64")
BOOLEAN = PrimitiveType(name="bool")
TIMESTAMP_NS = TimestampType()

_PRIMITIVE_ARROW: dict[PrimitiveName, pa.DataType] = {
    "string": pa.string(),
    "int32": pa.int32(),
    "int64": pa.int64(),
    "float32": pa.float32(),
    "float64": pa.float64(),
    "bool": pa.bool_(),
}


class SchemaSpec(StructBaseStrict, frozen=True):
    """Ordered, immutable collection of top-level field descriptors."""

    fields: tuple[FieldDescriptor, ...] = ()

    def __post_init__(self) -> None:
        StructType(fields=self.fields)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def names(self) -> list[str]:
        """Return field names in schema order."""
        return [field.name for field in self.fields]

    def field(self, name: str) -> FieldDescriptor:
        """Return the top-level field named ``name``.

        Returns
        -------
        FieldDescriptor
            Matching field.

        Raises
        ------
        KeyError
            Raised when no field has that name.
        """
        for field in self.fields:
            if field.name == name:
                return field
        raise KeyError(name)

    def to_pyarrow(self) -> pa.Schema:
        """Return the pyarrow.Schema for this spec.

        Returns
        -------
        pyarrow.Schema
            PyArrow schema.
        """
        return pa.schema([field.to_pyarrow() for field in self.fields])

    @classmethod
    def from_pyarrow(cls, schema: pa.Schema) -> SchemaSpec:
        """Return a SchemaSpec from a pyarrow.Schema.

        Returns
        -------
        SchemaSpec
            Schema spec for the Arrow schema.
        """
        return cls(fields=tuple(FieldDescriptor.from_pyarrow(field) for field in schema))

    def describe(self) -> str:
        """Render one ``name: type`` line per top-level field."""
        return "\n".join(
            f"  {field.name}: {descriptor_to_arrow(field.dtype)}" for field in self.fields
        )


def is_list_like(dtype: TypeDescriptor) -> bool:
    """Return True for List and FixedVector descriptors."""
    return isinstance(dtype, (ListType, FixedVectorType))


def descriptor_to_arrow(dtype: TypeDescriptor) -> pa.DataType:
    """Return the pyarrow dtype for a descriptor.

    Returns
    -------
    pyarrow.DataType
        PyArrow data type for the descriptor.

    Raises
    ------
    TypeError
        Raised when the descriptor is not a known type.
    """
    if isinstance(dtype, PrimitiveType):
        return _PRIMITIVE_ARROW[dtype.name]
    if isinstance(dtype, TimestampType):
        return pa.timestamp(dtype.unit, tz=dtype.timezone)
    if isinstance(dtype, FixedVectorType):
        return pa.list_(descriptor_to_arrow(dtype.element), dtype.size)
    if isinstance(dtype, ListType):
        return pa.list_(descriptor_to_arrow(dtype.element))
    if isinstance(dtype, StructType):
        return pa.struct([child.to_pyarrow() for child in dtype.fields])
    msg = f"Unsupported type descriptor: {dtype!r}."
    raise TypeError(msg)


def descriptor_from_arrow(dtype: pa.DataType) -> TypeDescriptor:
    """Return the descriptor for a supported pyarrow dtype.

    Returns
    -------
    TypeDescriptor
        Descriptor equivalent to the Arrow type.

    Raises
    ------
    TypeError
        Raised when the Arrow type has no descriptor equivalent.
    """
    for name, arrow_type in _PRIMITIVE_ARROW.items():
        if dtype == arrow_type:
            return PrimitiveType(name=name)
    if pa.types.is_timestamp(dtype) and dtype.unit == TIMESTAMP_UNIT:
        return TimestampType(timezone=dtype.tz or TIMESTAMP_TZ)
    if pa.types.is_fixed_size_list(dtype):
        return FixedVectorType(size=dtype.list_size, element=descriptor_from_arrow(dtype.value_type))
    if pa.types.is_list(dtype):
        return ListType(element=descriptor_from_arrow(dtype.value_type))
    if pa.types.is_struct(dtype):
        return StructType(fields=tuple(FieldDescriptor.from_pyarrow(child) for child in dtype))
    msg = f"Unsupported Arrow type for descriptors: {dtype}."
    raise TypeError(msg)


def schema_to_json(schema: SchemaSpec, *, pretty: bool = False) -> bytes:
    """Encode a schema spec as JSON bytes."""
    return dumps_json(schema, pretty=pretty)


def schema_from_json(payload: bytes | str) -> SchemaSpec:
    """Decode a schema spec from JSON bytes."""
    return loads_json(payload, target_type=SchemaSpec)


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
    "PrimitiveName",
    "PrimitiveType",
    "SchemaSpec",
    "StructType",
    "TimestampType",
    "TypeDescriptor",
    "TypeDescriptorBase",
    "descriptor_from_arrow",
    "descriptor_to_arrow",
    "is_list_like",
    "schema_from_json",
    "schema_to_json",
]
