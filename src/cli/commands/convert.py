"""Convert command: mapping + documents to a Parquet file."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators

from cli.groups import input_group, output_group
from columnar.documents import read_documents
from columnar.pipeline import run_pipeline
from config import config_from_env
from mapping_spec.loader import load_mapping, mapping_properties
from storage.parquet import write_batch_parquet

logger = logging.getLogger(__name__)


def convert_command(
    mapping: Annotated[
        Path,
        Parameter(
            help="Index mapping JSON file.",
            validator=validators.Path(exists=True, dir_okay=False),
            group=input_group,
        ),
    ],
    documents: Annotated[
        Path,
        Parameter(
            help="Documents as a JSON array (.json) or JSON Lines (.jsonl, .ndjson).",
            validator=validators.Path(exists=True, dir_okay=False),
            group=input_group,
        ),
    ],
    *,
    output: Annotated[
        Path,
        Parameter(
            name=["--output", "-o"],
            help="Destination Parquet file.",
            group=output_group,
        ),
    ] = Path("output.parquet"),
    sample_size: Annotated[
        int | None,
        Parameter(
            name="--sample-size",
            help="Leading documents used to reconcile list fields (default: all).",
            validator=validators.Number(gte=0),
            group=input_group,
        ),
    ] = None,
    profile: Annotated[
        str | None,
        Parameter(
            name="--profile",
            help="Parquet write profile: DEFAULT, COMPACT or NONE.",
            group=output_group,
        ),
    ] = None,
) -> int:
    """Convert documents into a Parquet file using the mapping's schema.

    Returns
    -------
    int
        Exit status code.
    """
    config = config_from_env()
    if sample_size is not None:
        config = replace(config, sample_size=sample_size)
    if profile is not None:
        config = replace(config, write_profile=profile)
    write_options = config.resolved_write_options()

    properties = mapping_properties(load_mapping(mapping))
    docs = read_documents(documents)
    result = run_pipeline(properties, docs, sample_size=config.sample_size)
    if result.materialized.substitutions:
        logger.warning(
            "Null substitutions by field: %s",
            dict(result.materialized.substitutions),
        )
    written = write_batch_parquet(result.batch, output, options=write_options)
    sys.stdout.write(f"Parquet file created successfully: {written}\n")
    return 0


__all__ = ["convert_command"]
