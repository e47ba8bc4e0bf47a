"""Parquet writer for materialized record batches."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParquetWriteOptions:
    """Parquet write settings.

    Notes
    -----
      - compression=None writes uncompressed pages.
      - store_schema=True embeds the Arrow schema so readers restore the
        exact timestamp and list types.
    """

    compression: str | None = "snappy"
    use_dictionary: bool = True
    write_statistics: bool = True
    row_group_size: int | None = None
    store_schema: bool = True


def write_batch_parquet(
    batch: pa.RecordBatch | pa.Table,
    path: str | Path,
    *,
    options: ParquetWriteOptions | None = None,
) -> Path:
    """Write a record batch to a single Parquet file.

    Parameters
    ----------
    batch
        Record batch (or table) to write.
    path
        Destination file; parent directories are created.
    options
        Write options; defaults to :class:`ParquetWriteOptions`.

    Returns
    -------
    pathlib.Path
        Path of the written file.
    """
    resolved = options or ParquetWriteOptions()
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    table = batch if isinstance(batch, pa.Table) else pa.Table.from_batches([batch])
    pq.write_table(
        table,
        str(target),
        compression=resolved.compression or "none",
        use_dictionary=resolved.use_dictionary,
        write_statistics=resolved.write_statistics,
        row_group_size=resolved.row_group_size,
        store_schema=resolved.store_schema,
    )
    logger.info("Wrote %d row(s) to %s.", table.num_rows, target)
    return target


__all__ = ["ParquetWriteOptions", "write_batch_parquet"]
