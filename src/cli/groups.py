"""Shared help-panel groups for the esarrow CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Session and logging options.",
    sort_key=0,
)

input_group = Group(
    "Input",
    help="Mapping and document sources.",
    sort_key=1,
)

output_group = Group(
    "Output",
    help="Configure output files and formats.",
    sort_key=2,
)

generation_group = Group(
    "Generation",
    help="Synthetic document generation.",
    sort_key=3,
)

__all__ = ["generation_group", "input_group", "output_group", "session_group"]
