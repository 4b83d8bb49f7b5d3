"""Extract wind data from downloaded product packages."""

from concurrent.futures import ProcessPoolExecutor

import pandas as pd
import structlog

from s1ocn.application.use_cases.download_products import DOWNLOADED_PATH_COLUMN
from s1ocn.domain.entities import WindData
from s1ocn.domain.ports import ArchiveReaderPort

logger = structlog.get_logger()


def run(
    files: pd.DataFrame,
    reader: ArchiveReaderPort,
    workers: int = 1,
) -> dict[str, WindData]:
    """Read wind data from every downloaded package, keyed by product name."""
    missing = {DOWNLOADED_PATH_COLUMN, "Name"} - set(files.columns)
    if missing:
        raise ValueError(f"Downloaded product table is missing columns: {sorted(missing)}")

    paths = files[DOWNLOADED_PATH_COLUMN].astype(str).tolist()
    names = files["Name"].astype(str).tolist()

    logger.info("extracting_wind_data", product_count=len(paths), workers=workers)

    # netCDF4 is not thread safe, so parallel reads go to separate processes
    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(reader.read, paths))
    else:
        results = [reader.read(path) for path in paths]

    return dict(zip(names, results))
