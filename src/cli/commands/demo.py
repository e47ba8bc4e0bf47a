"""Demo command: run the built-in sample mapping end to end."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import pyarrow as pa
from cyclopts import Parameter

from cli.groups import output_group
from columnar.pipeline import run_pipeline
from config import config_from_env
from mapping_spec.loader import mapping_properties
from storage.parquet import write_batch_parquet
from test_support.sample_data import SAMPLE_MAPPING, sample_documents


def demo_command(
    *,
    output: Annotated[
        Path,
        Parameter(
            name=["--output", "-o"],
            help="Destination Parquet file.",
            group=output_group,
        ),
    ] = Path("output.parquet"),
) -> int:
    """Convert the sample user documents and write them to Parquet.

    Returns
    -------
    int
        Exit status code.
    """
    config = config_from_env()
    result = run_pipeline(mapping_properties(SAMPLE_MAPPING), sample_documents())
    sys.stdout.write("Original Schema:\n" + result.baseline.describe() + "\n")
    sys.stdout.write("\nAdjusted Schema:\n" + result.adjusted.describe() + "\n")
    table = pa.Table.from_batches([result.batch])
    sys.stdout.write("\nArrow Record:\n" + table.to_string(preview_cols=table.num_columns) + "\n")
    written = write_batch_parquet(
        result.batch, output, options=config.resolved_write_options()
    )
    sys.stdout.write(f"Parquet file created successfully: {written}\n")
    return 0


__all__ = ["demo_command"]
