"""Storage helpers for columnar output."""

from storage.parquet import ParquetWriteOptions, write_batch_parquet

__all__ = ["ParquetWriteOptions", "write_batch_parquet"]
