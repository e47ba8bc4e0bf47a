"""Decode index mappings and locate their root ``properties``."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import msgspec

from mapping_spec.type_mapper import STRUCT_TYPE_NAMES, field_type_name
from serde_msgspec import loads_json

logger = logging.getLogger(__name__)

PROPERTIES_KEY = "properties"
MAPPINGS_KEY = "mappings"


class MappingError(ValueError):
    """Raised when an index mapping cannot be decoded or is malformed."""


def decode_mapping(payload: bytes | str) -> dict[str, object]:
    """Decode mapping JSON into an insertion-ordered tree.

    Returns
    -------
    dict[str, object]
        Decoded mapping object.

    Raises
    ------
    MappingError
        Raised when the payload is not a JSON object.
    """
    try:
        decoded = loads_json(payload, target_type=object)
    except msgspec.DecodeError as exc:
        msg = f"Invalid mapping JSON: {exc}"
        raise MappingError(msg) from exc
    if not isinstance(decoded, dict):
        msg = f"Mapping must be a JSON object, got {type(decoded).__name__}."
        raise MappingError(msg)
    return decoded


def load_mapping(path: str | Path) -> dict[str, object]:
    """Read and decode a mapping file.

    Returns
    -------
    dict[str, object]
        Decoded mapping object.
    """
    resolved = Path(path)
    logger.debug("Loading mapping from %s.", resolved)
    return decode_mapping(resolved.read_bytes())


def mapping_properties(mapping: Mapping[str, object]) -> Mapping[str, object]:
    """Return the validated root ``properties`` map of a mapping.

    Accepts a bare ``{"properties": ...}`` mapping, a ``{"mappings": ...}``
    envelope, and a single-index ``{"<index>": {"mappings": ...}}`` response.

    Returns
    -------
    Mapping[str, object]
        Root properties map.

    Raises
    ------
    MappingError
        Raised when no properties map can be located.
    """
    root = _unwrap(mapping)
    properties = root.get(PROPERTIES_KEY)
    if not isinstance(properties, Mapping):
        msg = "Mapping has no object-valued 'properties' at its root."
        raise MappingError(msg)
    validate_properties(properties, path=())
    return properties


def _unwrap(mapping: Mapping[str, object]) -> Mapping[str, object]:
    if PROPERTIES_KEY in mapping:
        return mapping
    envelope = mapping.get(MAPPINGS_KEY)
    if isinstance(envelope, Mapping):
        return envelope
    if len(mapping) == 1:
        [(index_name, index_body)] = mapping.items()
        if isinstance(index_body, Mapping):
            nested = index_body.get(MAPPINGS_KEY)
            if isinstance(nested, Mapping):
                logger.debug("Using mappings of index %r.", index_name)
                return nested
    return mapping


def validate_properties(properties: Mapping[str, object], *, path: tuple[str, ...]) -> None:
    """Check that every field node under ``properties`` is an object.

    Struct-typed nodes without ``properties`` are accepted and map to empty
    structs.

    Raises
    ------
    MappingError
        Raised for non-object nodes or non-object nested ``properties``.
    """
    for name, node in properties.items():
        field_path = (*path, name)
        dotted = ".".join(field_path)
        if not isinstance(node, Mapping):
            msg = f"Mapping field {dotted!r} must be an object, got {type(node).__name__}."
            raise MappingError(msg)
        if field_type_name(node) not in STRUCT_TYPE_NAMES or PROPERTIES_KEY not in node:
            continue
        children = node[PROPERTIES_KEY]
        if not isinstance(children, Mapping):
            msg = f"Mapping field {dotted!r} has non-object 'properties'."
            raise MappingError(msg)
        validate_properties(children, path=field_path)


__all__ = [
    "MappingError",
    "decode_mapping",
    "load_mapping",
    "mapping_properties",
    "validate_properties",
]
