"""Closed classification of dynamically typed document values."""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping, Sequence
from enum import StrEnum


class ValueKind(StrEnum):
    """Shape of a document value as seen by schema and column code."""

    NULL = "null"
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    MAPPING = "mapping"
    LIST = "list"
    OTHER = "other"


NUMERIC_KINDS = frozenset({ValueKind.INT, ValueKind.FLOAT})


def classify_value(value: object) -> ValueKind:
    """Return the :class:`ValueKind` of a document value.

    Booleans are classified before integers, and strings or bytes never count
    as lists.

    Returns
    -------
    ValueKind
        Kind of the value.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dt.datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.LIST
    return ValueKind.OTHER


__all__ = ["NUMERIC_KINDS", "ValueKind", "classify_value"]
