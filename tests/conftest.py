"""Shared pytest fixtures for mapping and document tests."""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping

import pytest

from mapping_spec.loader import mapping_properties
from test_support.sample_data import SAMPLE_MAPPING, sample_documents

FIXED_NOW = dt.datetime(2024, 5, 17, 12, 30, 0, tzinfo=dt.UTC)


@pytest.fixture
def sample_properties() -> Mapping[str, object]:
    """Return the root properties of the sample user mapping."""
    return mapping_properties(SAMPLE_MAPPING)


@pytest.fixture
def sample_docs() -> list[dict[str, object]]:
    """Return the sample user documents with a fixed clock."""
    return sample_documents(FIXED_NOW)
