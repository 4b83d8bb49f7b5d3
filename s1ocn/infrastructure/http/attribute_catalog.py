"""Process-wide cached attribute catalogue."""

import threading

import structlog
from pydantic import ValidationError

from s1ocn.application.dto.catalog import AttributeList
from s1ocn.domain.entities import AttributeDescriptor
from s1ocn.domain.errors import CatalogUnavailableError, CatalogueRequestError
from s1ocn.domain.ports import AttributeCatalogPort, CatalogueClientPort
from s1ocn.infrastructure.observability.metrics import attribute_catalog_fetches

logger = structlog.get_logger()

# Lives for the whole process, keyed by (base url, product family)
_attribute_cache: dict[tuple[str, str], tuple[AttributeDescriptor, ...]] = {}
_attribute_cache_lock = threading.Lock()


def reset_attribute_cache() -> None:
    """Drop every cached attribute list."""
    with _attribute_cache_lock:
        _attribute_cache.clear()


class CachedAttributeCatalog(AttributeCatalogPort):
    """Attribute catalogue fetched once per product family and process."""

    def __init__(
        self,
        client: CatalogueClientPort,
        base_url: str,
        product_family: str,
    ) -> None:
        """Initialize attribute catalogue."""
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.product_family = product_family

    @property
    def url(self) -> str:
        """Attributes endpoint of the product family."""
        return f"{self.base_url}/Attributes({self.product_family})"

    @property
    def cache_key(self) -> tuple[str, str]:
        """Process cache entry of this catalogue."""
        return (self.base_url, self.product_family)

    def get_attributes(self) -> tuple[AttributeDescriptor, ...]:
        """Get attributes, fetching them on first use."""
        cached = _attribute_cache.get(self.cache_key)
        if cached is not None:
            return cached

        with _attribute_cache_lock:
            cached = _attribute_cache.get(self.cache_key)
            if cached is None:
                cached = self._fetch()
                _attribute_cache[self.cache_key] = cached
            return cached

    def _fetch(self) -> tuple[AttributeDescriptor, ...]:
        """Fetch and parse the attribute list."""
        logger.info("fetching_attribute_catalog", product_family=self.product_family, url=self.url)
        attribute_catalog_fetches.labels(product_family=self.product_family).inc()
        try:
            body = self.client.get_json(self.url)
            entries = AttributeList.validate_python(body)
        except (CatalogueRequestError, ValidationError) as e:
            logger.error(
                "attribute_catalog_unavailable",
                product_family=self.product_family,
                error=str(e),
            )
            raise CatalogUnavailableError(
                f"Attribute catalogue for {self.product_family} is unavailable: {e}"
            ) from e

        descriptors = tuple(entry.to_descriptor() for entry in entries)
        logger.info(
            "attribute_catalog_cached",
            product_family=self.product_family,
            attribute_count=len(descriptors),
        )
        return descriptors
