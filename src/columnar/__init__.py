"""Column accumulation and record batch materialization."""

from columnar.accumulators import AccumulatorFinishedError, ColumnAccumulator, accumulator_for
from columnar.documents import DocumentDecodeError, decode_documents, read_documents
from columnar.materialize import MaterializedBatch, materialize
from columnar.pipeline import PipelineResult, run_pipeline

__all__ = [
    "AccumulatorFinishedError",
    "ColumnAccumulator",
    "DocumentDecodeError",
    "MaterializedBatch",
    "PipelineResult",
    "accumulator_for",
    "decode_documents",
    "materialize",
    "read_documents",
    "run_pipeline",
]
