"""Parquet writer."""

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import structlog

logger = structlog.get_logger()


def write_wind_table(
    table: pd.DataFrame,
    output_path: str | Path,
    compression: str = "snappy",
) -> Path:
    """Write a wind table to a local parquet file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # attrs hold numpy grids that have no parquet representation
    plain = table.copy()
    plain.attrs = {}
    arrow_table = pa.Table.from_pandas(plain, preserve_index=False)
    pq.write_table(
        arrow_table,
        str(output_path),
        compression=compression,
        use_dictionary=True,
    )

    size_mb = output_path.stat().st_size / (1024 * 1024)
    logger.info("wind_table_written", path=str(output_path), row_count=len(table), size_mb=size_mb)
    return output_path
