"""Shared utilities for esarrow."""

from utils.value_coercion import coerce_timestamp_ns, datetime_to_ns, wrap_int

__all__ = [
    "coerce_timestamp_ns",
    "datetime_to_ns",
    "wrap_int",
]
