"""msgspec codecs for mappings, documents and schema descriptors."""

from __future__ import annotations

from typing import Any, TypeVar

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Immutable descriptor base; unknown keys in schema JSON are errors."""


# Deterministic key order keeps schema dumps and generated JSON Lines diffable.
JSON_ENCODER = msgspec.json.Encoder(order="deterministic")

_GENERIC_DECODER = msgspec.json.Decoder()


def dumps_json(obj: object, *, pretty: bool = False) -> bytes:
    """Encode a descriptor or builtin tree as JSON.

    Returns
    -------
    bytes
        JSON payload, indented by two spaces when ``pretty``.
    """
    raw = JSON_ENCODER.encode(obj)
    return msgspec.json.format(raw, indent=2) if pretty else raw


T = TypeVar("T")


def loads_json(buf: bytes | str, *, target_type: type[T]) -> T:
    """Decode JSON into ``target_type``.

    ``object`` decodes into insertion-ordered dicts and lists, which is what
    mapping and document payloads use.

    Returns
    -------
    T
        Decoded payload.

    Raises
    ------
    msgspec.DecodeError
        Raised for malformed JSON or a payload that does not fit the type.
    """
    if target_type is object:
        return _GENERIC_DECODER.decode(buf)
    return msgspec.json.decode(buf, type=target_type)


def decode_json_lines(buf: bytes) -> list[Any]:
    """Decode a JSON Lines payload into one builtin value per line."""
    return _GENERIC_DECODER.decode_lines(buf)


def encode_json_lines(items: list[object]) -> bytes:
    """Encode documents as JSON Lines; datetimes become RFC 3339 strings."""
    return JSON_ENCODER.encode_lines(items)


def to_builtins(obj: object) -> Any:
    """Lower descriptor structs into dicts keyed by field name.

    Returns
    -------
    Any
        Builtin representation including the ``kind`` tags.
    """
    return msgspec.to_builtins(obj)


__all__ = [
    "JSON_ENCODER",
    "StructBaseStrict",
    "decode_json_lines",
    "dumps_json",
    "encode_json_lines",
    "loads_json",
    "to_builtins",
]
