"""Synthetic documents shaped after an index mapping."""

from __future__ import annotations

import datetime as dt
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from mapping_spec.type_mapper import (
    STRUCT_TYPE_NAMES,
    VECTOR_TYPE_NAME,
    child_properties,
    field_type_name,
    vector_dims,
)
from utils.value_coercion import coerce_float32

DEFAULT_LIST_PROBABILITY = 0.2
_DUMMY_RANGE = 1000
_LONG_BITS = 63


def utc_now() -> dt.datetime:
    """Return the current time in UTC."""
    return dt.datetime.now(dt.UTC)


@dataclass
class DocumentGenerator:
    """Generate documents that follow a mapping's field layout.

    With probability ``list_probability`` each generated value is wrapped in a
    single-element list so list widening paths get exercised.
    """

    rng: random.Random = field(default_factory=random.Random)
    list_probability: float = DEFAULT_LIST_PROBABILITY
    clock: Callable[[], dt.datetime] = utc_now

    def __post_init__(self) -> None:
        if not 0.0 <= self.list_probability <= 1.0:
            msg = f"list_probability must be within [0, 1], got {self.list_probability}."
            raise ValueError(msg)

    def generate(self, properties: Mapping[str, object]) -> dict[str, object]:
        """Return one document for a ``properties`` map.

        Returns
        -------
        dict[str, object]
            Document with a value for every mapped field.
        """
        document: dict[str, object] = {}
        for name, node in properties.items():
            props = node if isinstance(node, Mapping) else {}
            value = self.value_for(field_type_name(props), props)
            if self.rng.random() < self.list_probability:
                value = [value]
            document[name] = value
        return document

    def generate_many(self, properties: Mapping[str, object], count: int) -> list[dict[str, object]]:
        """Return ``count`` documents for a ``properties`` map.

        Returns
        -------
        list[dict[str, object]]
            Generated documents.
        """
        return [self.generate(properties) for _ in range(count)]

    def value_for(self, type_name: str, node: Mapping[str, object]) -> object:
        """Return a random value for one mapped field."""
        match type_name:
            case "integer":
                return self.rng.randrange(_DUMMY_RANGE)
            case "long":
                return self.rng.getrandbits(_LONG_BITS)
            case "float":
                return coerce_float32(self.rng.random())
            case "double":
                return self.rng.random()
            case "boolean":
                return self.rng.randrange(2) == 1
            case "date":
                return self.clock()
            case _ if type_name == VECTOR_TYPE_NAME:
                return [coerce_float32(self.rng.random()) for _ in range(vector_dims(node))]
            case _ if type_name in STRUCT_TYPE_NAMES:
                nested = child_properties(node)
                return self.generate(nested) if nested is not None else {}
            case _:
                return f"dummy_{self.rng.randrange(_DUMMY_RANGE)}"


def generate_documents(
    properties: Mapping[str, object],
    count: int,
    *,
    seed: int | None = None,
    list_probability: float = DEFAULT_LIST_PROBABILITY,
) -> list[dict[str, object]]:
    """Return ``count`` synthetic documents for a ``properties`` map.

    Returns
    -------
    list[dict[str, object]]
        Generated documents.
    """
    generator = DocumentGenerator(rng=random.Random(seed), list_probability=list_probability)
    return generator.generate_many(properties, count)


__all__ = [
    "DEFAULT_LIST_PROBABILITY",
    "DocumentGenerator",
    "generate_documents",
    "utc_now",
]
