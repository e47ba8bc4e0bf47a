"""Schema command: show baseline and reconciled schemas."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators

from cli.groups import input_group, output_group
from columnar.documents import read_documents
from mapping_spec.builder import build_schema
from mapping_spec.loader import load_mapping, mapping_properties
from mapping_spec.reconcile import reconcile_schema
from serde_msgspec import dumps_json, to_builtins


def schema_command(
    mapping: Annotated[
        Path,
        Parameter(
            help="Index mapping JSON file.",
            validator=validators.Path(exists=True, dir_okay=False),
            group=input_group,
        ),
    ],
    *,
    documents: Annotated[
        Path | None,
        Parameter(
            name=["--documents", "-d"],
            help="Sample documents used to reconcile the schema.",
            validator=validators.Path(exists=True, dir_okay=False),
            group=input_group,
        ),
    ] = None,
    as_json: Annotated[
        bool,
        Parameter(
            name="--json",
            help="Emit schemas as JSON descriptors.",
            group=output_group,
        ),
    ] = False,
) -> int:
    """Print the schema derived from a mapping.

    Returns
    -------
    int
        Exit status code.
    """
    baseline = build_schema(mapping_properties(load_mapping(mapping)))
    adjusted = None
    if documents is not None:
        adjusted = reconcile_schema(baseline, read_documents(documents))

    if as_json:
        payload: dict[str, object] = {"baseline": to_builtins(baseline)}
        if adjusted is not None:
            payload["adjusted"] = to_builtins(adjusted)
        sys.stdout.write(dumps_json(payload, pretty=True).decode("utf-8") + "\n")
        return 0

    sys.stdout.write("Original Schema:\n" + baseline.describe() + "\n")
    if adjusted is not None:
        sys.stdout.write("\nAdjusted Schema:\n" + adjusted.describe() + "\n")
    return 0


__all__ = ["schema_command"]
