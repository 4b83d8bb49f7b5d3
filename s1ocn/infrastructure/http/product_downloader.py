"""Product package downloader."""

import threading
from collections.abc import Callable
from pathlib import Path

import requests
import structlog
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from s1ocn.domain.errors import ProductDownloadError
from s1ocn.domain.ports import ProductDownloaderPort
from s1ocn.infrastructure.config.settings import Settings
from s1ocn.infrastructure.observability.metrics import (
    download_mb,
    product_download_failures,
    products_downloaded,
)

logger = structlog.get_logger()

REDIRECT_CODES = (301, 302, 303, 307, 308)
CHUNK_SIZE = 1024 * 1024


class ProductDownloader(ProductDownloaderPort):
    """Downloads product ZIP packages from the OData `$value` endpoint."""

    def __init__(
        self,
        settings: Settings,
        session_factory: Callable[[], requests.Session] = requests.Session,
        wait: wait_base | None = None,
    ) -> None:
        """Initialize downloader."""
        self.settings = settings
        self.session_factory = session_factory
        self._local = threading.local()
        self.wait = wait or wait_exponential(multiplier=1, min=2, max=10)

    @property
    def session(self) -> requests.Session:
        """Session of the calling thread, download workers never share one."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self.session_factory()
            self._local.session = session
        return session

    def product_url(self, product_id: str) -> str:
        """Download URL of a product."""
        return f"{self.settings.catalogue_base_url.rstrip('/')}/Products({product_id})/$value"

    def download(
        self,
        product_id: str,
        product_name: str,
        dest: Path,
        access_token: str,
    ) -> Path:
        """Download one product package and return its local path."""
        dest = Path(dest)
        dest.mkdir(parents=True, exist_ok=True)
        output_file = dest / f"{product_name}.zip"

        if output_file.exists():
            logger.info("product_already_downloaded", product_id=product_id, path=str(output_file))
            return output_file

        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self.settings.download_max_attempts),
                wait=self.wait,
                retry=retry_if_exception_type(requests.RequestException),
                reraise=True,
            ):
                with attempt:
                    size = self._stream_to_file(self.product_url(product_id), output_file, access_token)
        except requests.RequestException as e:
            product_download_failures.inc()
            logger.error("product_download_failed", product_id=product_id, error=str(e))
            raise ProductDownloadError(f"Failed to download product {product_id}: {e}") from e

        products_downloaded.inc()
        download_mb.observe(size / (1024 * 1024))
        logger.info("product_downloaded", product_id=product_id, path=str(output_file), size_bytes=size)
        return output_file

    def _stream_to_file(self, url: str, output_file: Path, access_token: str) -> int:
        """Stream a download to disk, keeping the bearer header across redirects."""
        headers = {"Authorization": f"Bearer {access_token}"}
        response = self.session.get(
            url,
            headers=headers,
            allow_redirects=False,
            stream=True,
            timeout=self.settings.download_timeout_seconds,
        )
        hops = 0
        while response.status_code in REDIRECT_CODES and hops < self.settings.max_redirects:
            location = response.headers.get("Location")
            if not location:
                break
            response.close()
            response = self.session.get(
                location,
                headers=headers,
                allow_redirects=False,
                stream=True,
                timeout=self.settings.download_timeout_seconds,
            )
            hops += 1

        partial_file = output_file.with_name(output_file.name + ".part")
        size = 0
        with response:
            if response.status_code in REDIRECT_CODES:
                raise requests.TooManyRedirects(f"Redirect chain not resolved for {url}")
            response.raise_for_status()
            with partial_file.open("wb") as fh:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
                        size += len(chunk)
        partial_file.replace(output_file)
        return size
