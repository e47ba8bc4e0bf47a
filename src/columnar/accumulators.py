"""Append-only column accumulators keyed by field descriptors.

Accumulators never raise for a value's shape: anything a column cannot hold is
recorded as a null cell so every column keeps one row per document.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import TypeAlias

import pyarrow as pa

from mapping_spec.field_types import (
    FieldDescriptor,
    FixedVectorType,
    ListType,
    PrimitiveName,
    PrimitiveType,
    StructType,
    TimestampType,
    descriptor_to_arrow,
)
from utils.value_coercion import (
    coerce_bool,
    coerce_float32,
    coerce_float64,
    coerce_int32,
    coerce_int64,
    coerce_str,
    coerce_timestamp_ns,
)
from utils.value_kinds import ValueKind, classify_value

Coercer: TypeAlias = Callable[[object], object | None]

LIST_ITEM_NAME = "item"

_PRIMITIVE_COERCERS: dict[PrimitiveName, Coercer] = {
    "string": coerce_str,
    "int32": coerce_int32,
    "int64": coerce_int64,
    "float32": coerce_float32,
    "float64": coerce_float64,
    "bool": coerce_bool,
}


class AccumulatorFinishedError(RuntimeError):
    """Raised when an accumulator is used after it was finished."""


class ColumnAccumulator(ABC):
    """Base class for per-field column accumulators."""

    def __init__(self, field: FieldDescriptor) -> None:
        self.field = field
        self.substituted = 0
        self._finished = False

    @property
    def name(self) -> str:
        """Return the field name this accumulator is bound to."""
        return self.field.name

    @property
    def finished(self) -> bool:
        """Return True once :meth:`finish` has been called."""
        return self._finished

    def append(self, value: object) -> None:
        """Append one document value as the next row."""
        self._ensure_open()
        kind = classify_value(value)
        if kind is ValueKind.NULL:
            self._append_null()
            return
        self._append(value, kind)

    def append_null(self) -> None:
        """Append a null row."""
        self._ensure_open()
        self._append_null()

    def finish(self) -> pa.Array:
        """Finalize the column into an Arrow array.

        Returns
        -------
        pyarrow.Array
            Finished column values.
        """
        self._ensure_open()
        array = self._build()
        self._finished = True
        return array

    def finish_field(self) -> tuple[pa.Field, pa.Array]:
        """Finalize the column and return its output field with the array.

        The output field is nullable when the descriptor is nullable or the
        column holds nulls.

        Returns
        -------
        tuple[pyarrow.Field, pyarrow.Array]
            Output field and finished column.
        """
        array = self.finish()
        nullable = self.field.nullable or array.null_count > 0
        return pa.field(self.name, array.type, nullable=nullable), array

    def total_substituted(self) -> int:
        """Return null substitutions in this column and its nested columns."""
        return self.substituted

    def _substitute_null(self) -> None:
        self.substituted += 1
        self._append_null()

    def _ensure_open(self) -> None:
        if self._finished:
            msg = f"Accumulator for field {self.name!r} was already finished."
            raise AccumulatorFinishedError(msg)

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of rows appended so far."""

    @abstractmethod
    def _append(self, value: object, kind: ValueKind) -> None: ...

    @abstractmethod
    def _append_null(self) -> None: ...

    @abstractmethod
    def _build(self) -> pa.Array: ...


class ScalarAccumulator(ColumnAccumulator):
    """Accumulator for primitive and timestamp columns."""

    def __init__(self, field: FieldDescriptor, *, arrow_type: pa.DataType, coerce: Coercer) -> None:
        super().__init__(field)
        self.arrow_type = arrow_type
        self._coerce = coerce
        self._values: list[object | None] = []

    def __len__(self) -> int:
        return len(self._values)

    def _append(self, value: object, _kind: ValueKind) -> None:
        coerced = self._coerce(value)
        if coerced is None:
            self._substitute_null()
            return
        self._values.append(coerced)

    def _append_null(self) -> None:
        self._values.append(None)

    def _build(self) -> pa.Array:
        return pa.array(self._values, type=self.arrow_type)


class StructAccumulator(ColumnAccumulator):
    """Accumulator for struct columns with one child accumulator per field."""

    def __init__(self, field: FieldDescriptor, dtype: StructType) -> None:
        super().__init__(field)
        self.children = [accumulator_for(child) for child in dtype.fields]
        self._validity: list[bool] = []

    def __len__(self) -> int:
        return len(self._validity)

    def total_substituted(self) -> int:
        return self.substituted + sum(child.total_substituted() for child in self.children)

    def _append(self, value: object, kind: ValueKind) -> None:
        if kind is not ValueKind.MAPPING or not isinstance(value, Mapping):
            self._substitute_null()
            return
        self._validity.append(True)
        for child in self.children:
            child.append(value.get(child.name))

    def _append_null(self) -> None:
        self._validity.append(False)
        for child in self.children:
            child.append_null()

    def _build(self) -> pa.Array:
        if not self.children:
            rows = [{} if valid else None for valid in self._validity]
            return pa.array(rows, type=pa.struct([]))
        fields: list[pa.Field] = []
        arrays: list[pa.Array] = []
        for child in self.children:
            child_field, child_array = child.finish_field()
            fields.append(child_field)
            arrays.append(child_array)
        return pa.StructArray.from_arrays(arrays, fields=fields, mask=_null_mask(self._validity))


class ListAccumulator(ColumnAccumulator):
    """Accumulator for variable-length list columns.

    Non-list values are stored as single-element lists.
    """

    def __init__(self, field: FieldDescriptor, dtype: ListType) -> None:
        super().__init__(field)
        item = FieldDescriptor(name=LIST_ITEM_NAME, dtype=dtype.element, nullable=True)
        self.element = accumulator_for(item)
        self._offsets: list[int] = [0]
        self._validity: list[bool] = []

    def __len__(self) -> int:
        return len(self._validity)

    def total_substituted(self) -> int:
        return self.substituted + self.element.total_substituted()

    def _append(self, value: object, kind: ValueKind) -> None:
        self._validity.append(True)
        if kind is ValueKind.LIST and isinstance(value, Sequence):
            for item in value:
                self.element.append(item)
        else:
            self.element.append(value)
        self._offsets.append(len(self.element))

    def _append_null(self) -> None:
        self._validity.append(False)
        self._offsets.append(self._offsets[-1])

    def _build(self) -> pa.Array:
        item_field, values = self.element.finish_field()
        offsets = pa.array(self._offsets, type=pa.int32())
        return pa.ListArray.from_arrays(
            offsets,
            values,
            type=pa.list_(item_field),
            mask=_null_mask(self._validity),
        )


class FixedVectorAccumulator(ColumnAccumulator):
    """Accumulator for fixed-size vector columns.

    Only lists of exactly ``size`` numeric elements are kept; any other value
    becomes a null vector.
    """

    def __init__(self, field: FieldDescriptor, dtype: FixedVectorType) -> None:
        super().__init__(field)
        self.size = dtype.size
        self.arrow_type = descriptor_to_arrow(dtype)
        self._coerce = _element_coercer(dtype)
        self._rows: list[list[object] | None] = []

    def __len__(self) -> int:
        return len(self._rows)

    def _append(self, value: object, kind: ValueKind) -> None:
        if kind is not ValueKind.LIST or not isinstance(value, Sequence) or len(value) != self.size:
            self._substitute_null()
            return
        row = [self._coerce(item) for item in value]
        if any(item is None for item in row):
            self._substitute_null()
            return
        self._rows.append(row)

    def _append_null(self) -> None:
        self._rows.append(None)

    def _build(self) -> pa.Array:
        return pa.array(self._rows, type=self.arrow_type)


def _null_mask(validity: Sequence[bool]) -> pa.Array | None:
    if all(validity):
        return None
    return pa.array([not valid for valid in validity], type=pa.bool_())


def _reject(_value: object) -> None:
    return None


def _element_coercer(dtype: FixedVectorType) -> Coercer:
    element = dtype.element
    if isinstance(element, PrimitiveType) and element.name not in {"string", "bool"}:
        return _PRIMITIVE_COERCERS[element.name]
    return _reject


def accumulator_for(field: FieldDescriptor) -> ColumnAccumulator:
    """Return a fresh accumulator matching the field's type descriptor.

    Returns
    -------
    ColumnAccumulator
        Empty accumulator bound to ``field``.

    Raises
    ------
    TypeError
        Raised when the descriptor kind is unknown.
    """
    match field.dtype:
        case PrimitiveType(name=name):
            return ScalarAccumulator(
                field,
                arrow_type=descriptor_to_arrow(field.dtype),
                coerce=_PRIMITIVE_COERCERS[name],
            )
        case TimestampType():
            return ScalarAccumulator(
                field,
                arrow_type=descriptor_to_arrow(field.dtype),
                coerce=coerce_timestamp_ns,
            )
        case StructType() as dtype:
            return StructAccumulator(field, dtype)
        case ListType() as dtype:
            return ListAccumulator(field, dtype)
        case FixedVectorType() as dtype:
            return FixedVectorAccumulator(field, dtype)
        case _:
            msg = f"No accumulator for type descriptor {field.dtype!r}."
            raise TypeError(msg)


__all__ = [
    "LIST_ITEM_NAME",
    "AccumulatorFinishedError",
    "ColumnAccumulator",
    "FixedVectorAccumulator",
    "ListAccumulator",
    "ScalarAccumulator",
    "StructAccumulator",
    "accumulator_for",
]
