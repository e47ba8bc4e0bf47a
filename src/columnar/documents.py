"""Decode document batches from JSON and JSON Lines sources."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Literal, TypeAlias

import msgspec

from serde_msgspec import decode_json_lines, loads_json

logger = logging.getLogger(__name__)

DocumentFormat: TypeAlias = Literal["json", "jsonl"]

JSON_LINES_SUFFIXES = frozenset({".jsonl", ".ndjson"})


class DocumentDecodeError(ValueError):
    """Raised when a document source cannot be decoded into objects."""


def document_format(path: Path) -> DocumentFormat:
    """Return the document format implied by a file suffix."""
    return "jsonl" if path.suffix.lower() in JSON_LINES_SUFFIXES else "json"


def decode_documents(payload: bytes, *, fmt: DocumentFormat = "json") -> list[dict[str, object]]:
    """Decode documents from a JSON array/object or JSON Lines payload.

    Parameters
    ----------
    payload
        Raw JSON or JSON Lines bytes.
    fmt
        ``json`` for an array of objects (or a single object), ``jsonl`` for
        one object per line.

    Returns
    -------
    list[dict[str, object]]
        Decoded documents in source order.

    Raises
    ------
    DocumentDecodeError
        Raised when decoding fails or an entry is not an object.
    """
    try:
        if fmt == "jsonl":
            entries = decode_json_lines(payload)
            location = "line"
        else:
            decoded = loads_json(payload, target_type=object)
            entries = decoded if isinstance(decoded, list) else [decoded]
            location = "index"
    except msgspec.DecodeError as exc:
        msg = f"Invalid document JSON: {exc}"
        raise DocumentDecodeError(msg) from exc
    documents: list[dict[str, object]] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            label = position + 1 if location == "line" else position
            msg = f"Document at {location} {label} is {type(entry).__name__}, not an object."
            raise DocumentDecodeError(msg)
        documents.append(dict(entry))
    return documents


def read_documents(path: str | Path) -> list[dict[str, object]]:
    """Read documents from a ``.json``, ``.jsonl`` or ``.ndjson`` file.

    Returns
    -------
    list[dict[str, object]]
        Decoded documents.
    """
    resolved = Path(path)
    documents = decode_documents(resolved.read_bytes(), fmt=document_format(resolved))
    logger.debug("Read %d document(s) from %s.", len(documents), resolved)
    return documents


__all__ = [
    "DocumentDecodeError",
    "DocumentFormat",
    "decode_documents",
    "document_format",
    "read_documents",
]
