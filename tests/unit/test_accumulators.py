"""Tests for per-field column accumulators."""

from __future__ import annotations

import datetime as dt
import math

import pyarrow as pa
import pytest

from columnar.accumulators import (
    AccumulatorFinishedError,
    FixedVectorAccumulator,
    ListAccumulator,
    ScalarAccumulator,
    StructAccumulator,
    accumulator_for,
)
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
    StructType,
)

_ADDRESS = StructType(
    fields=(
        FieldDescriptor(name="city", dtype=STRING),
        FieldDescriptor(name="zipcode", dtype=INT32),
    )
)


def _field(dtype: object, *, nullable: bool = False, name: str = "value") -> FieldDescriptor:
    return FieldDescriptor(name=name, dtype=dtype, nullable=nullable)


@pytest.mark.parametrize(
    ("dtype", "accumulator_type"),
    [
        (STRING, ScalarAccumulator),
        (TIMESTAMP_NS, ScalarAccumulator),
        (_ADDRESS, StructAccumulator),
        (ListType(element=STRING), ListAccumulator),
        (FixedVectorType(size=2, element=FLOAT32), FixedVectorAccumulator),
    ],
)
def test_accumulator_for_matches_descriptor(dtype: object, accumulator_type: type) -> None:
    """Dispatch each descriptor kind to its accumulator."""
    assert isinstance(accumulator_for(_field(dtype)), accumulator_type)


@pytest.mark.parametrize(
    ("dtype", "values", "expected", "arrow_type"),
    [
        (STRING, ["a", 1, None], ["a", None, None], pa.string()),
        (INT32, [1, 2**31, 2.7, "3"], [1, -(2**31), 2, None], pa.int32()),
        (INT64, [1, True], [1, None], pa.int64()),
        (FLOAT64, [1, 2.5, "x"], [1.0, 2.5, None], pa.float64()),
        (FLOAT32, [0.5, 2], [0.5, 2.0], pa.float32()),
        (BOOLEAN, [True, 1], [True, None], pa.bool_()),
    ],
)
def test_scalar_columns_null_out_mismatches(
    dtype: object,
    values: list[object],
    expected: list[object],
    arrow_type: pa.DataType,
) -> None:
    """Coerce scalars and record mismatched values as nulls."""
    accumulator = accumulator_for(_field(dtype))
    for value in values:
        accumulator.append(value)
    array = accumulator.finish()
    assert array.type == arrow_type
    assert array.to_pylist() == expected


def test_timestamp_column_accepts_datetimes_and_rfc3339() -> None:
    """Store datetimes and RFC 3339 text as UTC nanoseconds."""
    accumulator = accumulator_for(_field(TIMESTAMP_NS))
    accumulator.append(dt.datetime(2024, 5, 17, 12, 30, tzinfo=dt.UTC))
    accumulator.append("2024-05-17T12:30:00.000000001Z")
    accumulator.append(17)
    array = accumulator.finish()
    assert array.type == pa.timestamp("ns", tz="UTC")
    raw = array.cast(pa.int64()).to_pylist()
    assert raw[1] == raw[0] + 1
    assert raw[2] is None
    assert accumulator.substituted == 1


def test_finish_field_marks_columns_with_nulls_nullable() -> None:
    """Widen nullability when the column holds nulls."""
    accumulator = accumulator_for(_field(STRING))
    accumulator.append("a")
    accumulator.append(5)
    output_field, array = accumulator.finish_field()
    assert output_field.nullable
    assert array.null_count == 1


def test_finish_field_keeps_non_nullable_when_dense() -> None:
    """Keep declared non-nullability when every row has a value."""
    accumulator = accumulator_for(_field(STRING))
    accumulator.append("a")
    output_field, _ = accumulator.finish_field()
    assert not output_field.nullable


def test_struct_non_mapping_becomes_null_row() -> None:
    """Record a null struct row and keep children aligned."""
    accumulator = accumulator_for(_field(_ADDRESS))
    accumulator.append({"city": "NY", "zipcode": 10001})
    accumulator.append("not a struct")
    accumulator.append({"city": "LA"})
    array = accumulator.finish()
    assert array.to_pylist() == [
        {"city": "NY", "zipcode": 10001},
        None,
        {"city": "LA", "zipcode": None},
    ]
    assert len(array.field("city")) == 3
    assert accumulator.total_substituted() == 1


def test_struct_child_substitutions_are_counted() -> None:
    """Count mismatches inside nested children."""
    accumulator = accumulator_for(_field(_ADDRESS))
    accumulator.append({"city": 1, "zipcode": "x"})
    accumulator.finish()
    assert accumulator.total_substituted() == 2


def test_empty_struct_keeps_row_count() -> None:
    """Build empty structs with one row per appended value."""
    accumulator = accumulator_for(_field(StructType()))
    accumulator.append({"anything": 1})
    accumulator.append(None)
    array = accumulator.finish()
    assert len(array) == 2
    assert array.null_count == 1


def test_list_wraps_single_values() -> None:
    """Store bare values as single-element lists."""
    accumulator = accumulator_for(_field(ListType(element=STRING), nullable=True))
    accumulator.append(["developer", "golang"])
    accumulator.append("manager")
    accumulator.append(None)
    accumulator.append([])
    array = accumulator.finish()
    assert array.type == pa.list_(pa.string())
    assert array.to_pylist() == [["developer", "golang"], ["manager"], None, []]


def test_list_elements_null_out_mismatches() -> None:
    """Record mismatched list elements as null items."""
    accumulator = accumulator_for(_field(ListType(element=FLOAT32)))
    accumulator.append([1.5, "x", 2])
    array = accumulator.finish()
    assert array.to_pylist() == [[1.5, None, 2.0]]
    assert accumulator.total_substituted() == 1


def test_list_of_structs() -> None:
    """Accumulate lists of struct values."""
    accumulator = accumulator_for(_field(ListType(element=_ADDRESS)))
    accumulator.append([{"city": "NY", "zipcode": 1}, {"city": "LA", "zipcode": 2}])
    accumulator.append({"city": "SF", "zipcode": 3})
    array = accumulator.finish()
    assert array.to_pylist() == [
        [{"city": "NY", "zipcode": 1}, {"city": "LA", "zipcode": 2}],
        [{"city": "SF", "zipcode": 3}],
    ]


def test_fixed_vector_requires_exact_size() -> None:
    """Keep only numeric lists of exactly the declared size."""
    accumulator = accumulator_for(_field(FixedVectorType(size=3, element=FLOAT32)))
    accumulator.append([1.0, 2.0, 3.0])
    accumulator.append([1.0, 2.0])
    accumulator.append([1.0, "x", 3.0])
    accumulator.append(1.0)
    array = accumulator.finish()
    assert array.type == pa.list_(pa.float32(), 3)
    assert array.to_pylist() == [[1.0, 2.0, 3.0], None, None, None]
    assert accumulator.substituted == 3


def test_zero_size_vector_accepts_empty_lists() -> None:
    """Treat an unspecified dimensionality as zero-length vectors."""
    accumulator = accumulator_for(_field(FixedVectorType(size=0, element=FLOAT32)))
    accumulator.append([])
    accumulator.append([1.0])
    array = accumulator.finish()
    assert array.to_pylist() == [[], None]


def test_finished_accumulator_rejects_appends() -> None:
    """Refuse further use once finished."""
    accumulator = accumulator_for(_field(STRING))
    accumulator.finish()
    assert accumulator.finished
    with pytest.raises(AccumulatorFinishedError):
        accumulator.append("late")
    with pytest.raises(AccumulatorFinishedError):
        accumulator.finish()


def test_timestamps_beyond_int64_nanos_become_nulls() -> None:
    """Null out far-past and far-future instants without failing the column."""
    accumulator = accumulator_for(_field(TIMESTAMP_NS))
    accumulator.append("2300-01-01T00:00:00Z")
    accumulator.append(dt.datetime(9999, 1, 1, tzinfo=dt.UTC))
    accumulator.append("1600-01-01T00:00:00Z")
    accumulator.append("2024-05-17T12:30:00Z")
    output_field, array = accumulator.finish_field()
    assert len(array) == 4
    assert array.null_count == 3
    assert array.cast(pa.int64()).to_pylist()[3] == 1_715_949_000 * 1_000_000_000
    assert output_field.nullable
    assert accumulator.substituted == 3


def test_huge_numbers_fit_column_widths() -> None:
    """Wrap huge integers and null out doubles that cannot be represented."""
    int64 = accumulator_for(_field(INT64))
    int64.append(2**64 + 5)
    int64.append(10**30)
    assert int64.finish().to_pylist() == [5, (10**30 + 2**63) % 2**64 - 2**63]

    float64 = accumulator_for(_field(FLOAT64))
    float64.append(10**400)
    assert float64.finish().to_pylist() == [None]


def test_fixed_vector_with_out_of_range_elements() -> None:
    """Keep float32 overflow as infinity and reject unrepresentable elements."""
    accumulator = accumulator_for(_field(FixedVectorType(size=2, element=FLOAT32)))
    accumulator.append([1e300, -1e300])
    accumulator.append([1.0, 10**400])
    array = accumulator.finish()
    assert array.to_pylist() == [[math.inf, -math.inf], None]
    assert accumulator.substituted == 1

    int_vector = accumulator_for(_field(FixedVectorType(size=1, element=INT64)))
    int_vector.append([2**63])
    assert int_vector.finish().to_pylist() == [[-(2**63)]]
