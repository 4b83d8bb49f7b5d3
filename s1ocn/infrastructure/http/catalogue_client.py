"""Catalogue HTTP client."""

import requests
import structlog

from s1ocn.domain.errors import CatalogueRequestError
from s1ocn.domain.ports import CatalogueClientPort
from s1ocn.domain.types import JsonValue
from s1ocn.infrastructure.config.settings import Settings
from s1ocn.infrastructure.observability.metrics import (
    catalogue_request_failures,
    catalogue_requests,
)

logger = structlog.get_logger()


class CatalogueHttpClient(CatalogueClientPort):
    """Blocking JSON client for the OData catalogue.

    URLs are sent as given: query strings are assembled and percent-encoded
    by the caller, and continuation links are opaque server URLs.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        """Initialize catalogue client."""
        self.settings = settings
        self.session = session or requests.Session()
        self.timeout = settings.request_timeout_seconds

    def get_json(self, url: str) -> JsonValue:
        """Get JSON body from the catalogue."""
        endpoint = _endpoint_name(url)
        catalogue_requests.labels(endpoint=endpoint).inc()
        logger.debug("catalogue_request", endpoint=endpoint, url=url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            catalogue_request_failures.labels(endpoint=endpoint).inc()
            logger.error("catalogue_request_failed", endpoint=endpoint, url=url, error=str(e))
            raise CatalogueRequestError(f"Catalogue request failed for {url}: {e}") from e
        except ValueError as e:
            catalogue_request_failures.labels(endpoint=endpoint).inc()
            logger.error("catalogue_response_not_json", endpoint=endpoint, url=url, error=str(e))
            raise CatalogueRequestError(f"Catalogue returned invalid JSON for {url}: {e}") from e


def _endpoint_name(url: str) -> str:
    """Name of the OData entity set addressed by a URL."""
    path = url.split("?", 1)[0].rstrip("/")
    segment = path.rsplit("/", 1)[-1]
    return segment.split("(", 1)[0] or "unknown"
