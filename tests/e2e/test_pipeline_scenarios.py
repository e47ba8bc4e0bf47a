"""End-to-end scenarios from mapping JSON to Parquet files."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from columnar.documents import decode_documents
from columnar.pipeline import run_pipeline
from mapping_spec.field_types import (
    FLOAT32,
    STRING,
    FieldDescriptor,
    FixedVectorType,
    ListType,
)
from mapping_spec.loader import decode_mapping, mapping_properties
from storage.parquet import write_batch_parquet
from test_support.document_generator import generate_documents

_TAGS_MAPPING = b"""
{
  "properties": {
    "name": {"type": "keyword"},
    "tags": {"type": "keyword"}
  }
}
"""

_TAGS_DOCUMENTS = b"""
[
  {"name": "A", "tags": ["x", "y"]},
  {"name": "B", "tags": "z"}
]
"""

_NESTED_MAPPING = b"""
{
  "mappings": {
    "properties": {
      "user": {
        "type": "nested",
        "properties": {
          "address": {
            "type": "object",
            "properties": {"zipcode": {"type": "integer"}}
          }
        }
      },
      "embedding": {"type": "dense_vector", "dims": 3},
      "seen": {"type": "date"}
    }
  }
}
"""


def test_bare_value_in_widened_list_becomes_single_element(tmp_path: Path) -> None:
    """Widen tags to a nullable list and wrap the bare value."""
    properties = mapping_properties(decode_mapping(_TAGS_MAPPING))
    result = run_pipeline(properties, decode_documents(_TAGS_DOCUMENTS))

    assert result.baseline.field("tags") == FieldDescriptor(name="tags", dtype=STRING)
    assert result.adjusted.field("tags") == FieldDescriptor(
        name="tags", dtype=ListType(element=STRING), nullable=True
    )
    assert result.batch.column(1).to_pylist() == [["x", "y"], ["z"]]

    target = write_batch_parquet(result.batch, tmp_path / "tags.parquet")
    table = pq.read_table(target)
    assert table.schema.field("tags").type == pa.list_(pa.string())
    assert table.column("name").to_pylist() == ["A", "B"]


def test_nested_struct_vector_and_timestamp_columns(tmp_path: Path) -> None:
    """Materialize nested structs, fixed vectors and RFC 3339 timestamps."""
    properties = mapping_properties(decode_mapping(_NESTED_MAPPING))
    documents = decode_documents(
        b'{"user": {"address": {"zipcode": 10001}}, "embedding": [0.5, 1, 2.5],'
        b' "seen": "2024-05-17T12:30:00.000000123Z"}\n'
        b'{"user": {"address": {"zipcode": "n/a"}}, "embedding": [1.0, 2.0]}\n',
        fmt="jsonl",
    )
    result = run_pipeline(properties, documents)

    assert result.adjusted.field("embedding").dtype == FixedVectorType(size=3, element=FLOAT32)
    users = result.batch.column(0).to_pylist()
    assert users[0]["address"]["zipcode"] == 10001
    assert users[1]["address"]["zipcode"] is None
    assert result.batch.column(1).to_pylist() == [[0.5, 1.0, 2.5], None]
    seen = result.batch.column(2).cast(pa.int64()).to_pylist()
    assert seen[0] % 1_000_000_000 == 123
    assert seen[1] is None
    assert result.schema.field("embedding").nullable
    assert result.materialized.substitutions == {"user": 1, "embedding": 1}

    table = pq.read_table(write_batch_parquet(result.batch, tmp_path / "nested.parquet"))
    assert table.num_rows == 2
    assert table.schema.field("embedding").type == pa.list_(pa.float32(), 3)


def test_generated_documents_convert_cleanly(tmp_path: Path) -> None:
    """Convert synthetic documents that randomly wrap values in lists."""
    properties = mapping_properties(decode_mapping(_NESTED_MAPPING))
    documents = generate_documents(properties, 25, seed=5, list_probability=0.5)
    result = run_pipeline(properties, documents, sample_size=5)

    assert result.batch.num_rows == 25
    table = pq.read_table(write_batch_parquet(result.batch, tmp_path / "generated.parquet"))
    assert table.num_rows == 25
    assert table.schema.names == ["user", "embedding", "seen"]
