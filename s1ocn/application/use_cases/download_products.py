"""Download the product packages of a search result."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pandas as pd
import structlog

from s1ocn.domain.ports import ProductDownloaderPort, TokenProviderPort

logger = structlog.get_logger()

DOWNLOADED_PATH_COLUMN = "downloaded_file_path"


def run(
    files: pd.DataFrame,
    dest: str | Path,
    username: str,
    password: str,
    token_provider: TokenProviderPort,
    downloader: ProductDownloaderPort,
    workers: int = 1,
) -> pd.DataFrame:
    """Download every product in `files` and record the local paths."""
    missing = {"Id", "Name"} - set(files.columns)
    if missing:
        raise ValueError(f"Product table is missing columns: {sorted(missing)}")

    dest = Path(dest)
    token = token_provider.get_token(username, password)

    ids = files["Id"].astype(str).tolist()
    names = files["Name"].astype(str).tolist()

    logger.info("downloading_products", product_count=len(ids), dest=str(dest), workers=workers)

    def download(product_id: str, product_name: str) -> Path:
        return downloader.download(product_id, product_name, dest, token.access_token)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            paths = list(executor.map(download, ids, names))
    else:
        paths = [download(product_id, name) for product_id, name in zip(ids, names)]

    out = files.copy()
    out[DOWNLOADED_PATH_COLUMN] = [str(path) for path in paths]

    logger.info("products_downloaded", product_count=len(paths))
    return out
