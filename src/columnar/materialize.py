"""Materialize document batches into Arrow record batches."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

import pyarrow as pa

from columnar.accumulators import ColumnAccumulator, accumulator_for
from mapping_spec.field_types import SchemaSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaterializedBatch:
    """Finished record batch with the schema it was finalized under.

    Attributes
    ----------
    schema : SchemaSpec
        Finalized schema; fields holding nulls are marked nullable.
    batch : pyarrow.RecordBatch
        Columns in schema order, one row per input document.
    substitutions : Mapping[str, int]
        Per-field count of values replaced by nulls because of shape mismatches.
    """

    schema: SchemaSpec
    batch: pa.RecordBatch
    substitutions: Mapping[str, int] = field(default_factory=dict)

    @property
    def num_rows(self) -> int:
        """Return the number of rows in the batch."""
        return self.batch.num_rows


def new_accumulators(schema: SchemaSpec) -> list[ColumnAccumulator]:
    """Return one fresh accumulator per top-level field, in schema order.

    Returns
    -------
    list[ColumnAccumulator]
        Empty accumulators.
    """
    return [accumulator_for(descriptor) for descriptor in schema.fields]


def append_document(accumulators: Iterable[ColumnAccumulator], document: object) -> None:
    """Append one document's values to every accumulator.

    Missing fields, and documents that are not mappings, append nulls.
    """
    values = document if isinstance(document, Mapping) else {}
    trace = logger.isEnabledFor(logging.DEBUG)
    for accumulator in accumulators:
        value = values.get(accumulator.name)
        if trace:
            logger.debug(
                "Field: %s, Value: %r, Type: %s",
                accumulator.name,
                value,
                type(value).__name__,
            )
        accumulator.append(value)


def finish_batch(accumulators: Iterable[ColumnAccumulator]) -> MaterializedBatch:
    """Finalize accumulators into a :class:`MaterializedBatch`.

    Returns
    -------
    MaterializedBatch
        Record batch and finalized schema.
    """
    fields: list[pa.Field] = []
    arrays: list[pa.Array] = []
    substitutions: dict[str, int] = {}
    for accumulator in accumulators:
        output_field, array = accumulator.finish_field()
        fields.append(output_field)
        arrays.append(array)
        substituted = accumulator.total_substituted()
        if substituted:
            substitutions[accumulator.name] = substituted
            logger.debug(
                "Field %r: %d value(s) replaced by nulls.", accumulator.name, substituted
            )
    arrow_schema = pa.schema(fields)
    batch = pa.RecordBatch.from_arrays(arrays, schema=arrow_schema)
    return MaterializedBatch(
        schema=SchemaSpec.from_pyarrow(arrow_schema),
        batch=batch,
        substitutions=substitutions,
    )


def materialize(
    schema: SchemaSpec,
    documents: Iterable[Mapping[str, object]],
) -> MaterializedBatch:
    """Build a record batch from documents under a finalized schema.

    Parameters
    ----------
    schema
        Schema whose fields become the batch columns.
    documents
        Documents appended in iteration order, one row each.

    Returns
    -------
    MaterializedBatch
        Record batch with one row per document.
    """
    accumulators = new_accumulators(schema)
    count = 0
    for document in documents:
        append_document(accumulators, document)
        count += 1
    result = finish_batch(accumulators)
    logger.info("Materialized %d document(s) into %d column(s).", count, len(accumulators))
    return result


__all__ = [
    "MaterializedBatch",
    "append_document",
    "finish_batch",
    "materialize",
    "new_accumulators",
]
