"""Generate command: synthetic documents for a mapping."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators

from cli.groups import generation_group, input_group, output_group
from config import config_from_env
from mapping_spec.loader import load_mapping, mapping_properties
from serde_msgspec import encode_json_lines
from test_support.document_generator import generate_documents

logger = logging.getLogger(__name__)


def generate_command(
    mapping: Annotated[
        Path,
        Parameter(
            help="Index mapping JSON file.",
            validator=validators.Path(exists=True, dir_okay=False),
            group=input_group,
        ),
    ],
    *,
    count: Annotated[
        int,
        Parameter(
            name=["--count", "-n"],
            help="Number of documents to generate.",
            validator=validators.Number(gte=0),
            group=generation_group,
        ),
    ] = 10,
    seed: Annotated[
        int | None,
        Parameter(name="--seed", help="Random seed for reproducible output.", group=generation_group),
    ] = None,
    list_probability: Annotated[
        float | None,
        Parameter(
            name="--list-probability",
            help="Chance of wrapping each value in a one-element list.",
            validator=validators.Number(gte=0, lte=1),
            group=generation_group,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        Parameter(
            name=["--output", "-o"],
            help="JSON Lines destination (default: stdout).",
            group=output_group,
        ),
    ] = None,
) -> int:
    """Write synthetic documents for a mapping as JSON Lines.

    Returns
    -------
    int
        Exit status code.
    """
    config = config_from_env()
    properties = mapping_properties(load_mapping(mapping))
    documents = generate_documents(
        properties,
        count,
        seed=seed if seed is not None else config.seed,
        list_probability=(
            list_probability if list_probability is not None else config.list_probability
        ),
    )
    payload = encode_json_lines(list(documents))
    if output is None:
        sys.stdout.write(payload.decode("utf-8"))
        return 0
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(payload)
    logger.info("Wrote %d document(s) to %s.", len(documents), output)
    return 0


__all__ = ["generate_command"]
