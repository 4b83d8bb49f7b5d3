"""Ports (interfaces) for infrastructure adapters."""

from abc import ABC, abstractmethod
from pathlib import Path

from s1ocn.domain.entities import AccessToken, AttributeDescriptor, WindData
from s1ocn.domain.types import JsonValue, Timestamp


class CatalogueClientPort(ABC):
    """Port for issuing requests against the remote catalogue."""

    @abstractmethod
    def get_json(self, url: str) -> JsonValue:
        """Get the JSON body behind an absolute, already encoded URL."""


class AttributeCatalogPort(ABC):
    """Port for resolving filterable attributes."""

    @abstractmethod
    def get_attributes(self) -> tuple[AttributeDescriptor, ...]:
        """Get the attributes advertised for the product family."""


class TokenProviderPort(ABC):
    """Port for exchanging credentials for an access token."""

    @abstractmethod
    def get_token(self, username: str, password: str) -> AccessToken:
        """Get access token."""


class ProductDownloaderPort(ABC):
    """Port for downloading product packages."""

    @abstractmethod
    def download(
        self,
        product_id: str,
        product_name: str,
        dest: Path,
        access_token: str,
    ) -> Path:
        """Download one product package and return its local path."""


class ArchiveReaderPort(ABC):
    """Port for reading wind data out of a product package."""

    @abstractmethod
    def read(self, filepath: str | Path) -> WindData:
        """Read wind data from a downloaded package."""


class ClockPort(ABC):
    """Port for time operations."""

    @abstractmethod
    def now(self) -> Timestamp:
        """Get current timestamp."""
