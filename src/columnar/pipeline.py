"""End-to-end mapping to record batch pipeline."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import pyarrow as pa

from columnar.materialize import MaterializedBatch, materialize
from mapping_spec.builder import build_schema
from mapping_spec.field_types import SchemaSpec
from mapping_spec.reconcile import reconcile_schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Schemas and batch produced by :func:`run_pipeline`."""

    baseline: SchemaSpec
    adjusted: SchemaSpec
    materialized: MaterializedBatch

    @property
    def batch(self) -> pa.RecordBatch:
        """Return the materialized record batch."""
        return self.materialized.batch

    @property
    def schema(self) -> SchemaSpec:
        """Return the finalized schema of the batch."""
        return self.materialized.schema


def run_pipeline(
    properties: Mapping[str, object],
    documents: Sequence[Mapping[str, object]],
    *,
    sample_size: int | None = None,
) -> PipelineResult:
    """Build, reconcile and materialize one document batch.

    Parameters
    ----------
    properties
        Root ``properties`` map of the index mapping.
    documents
        Documents to materialize.
    sample_size
        Number of leading documents used for reconciliation; all when None.

    Returns
    -------
    PipelineResult
        Baseline and adjusted schemas plus the materialized batch.

    Raises
    ------
    ValueError
        Raised when ``sample_size`` is negative.
    """
    if sample_size is not None and sample_size < 0:
        msg = f"sample_size must be non-negative, got {sample_size}."
        raise ValueError(msg)
    baseline = build_schema(properties)
    sample = documents if sample_size is None else documents[:sample_size]
    adjusted = reconcile_schema(baseline, sample)
    logger.debug("Reconciled schema against %d sample document(s).", len(sample))
    materialized = materialize(adjusted, documents)
    return PipelineResult(baseline=baseline, adjusted=adjusted, materialized=materialized)


__all__ = ["PipelineResult", "run_pipeline"]
