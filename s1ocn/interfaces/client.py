"""Facade wiring the catalogue search, download and extraction use cases."""

from collections.abc import Mapping
from pathlib import Path

import pandas as pd
import requests

from s1ocn.application.services.attribute_filter import AttributeFilterBuilder
from s1ocn.application.services.query_builder import SearchQueryBuilder
from s1ocn.application.services.wind_table import wind_data_list_to_tables
from s1ocn.application.use_cases.download_products import run as download_products
from s1ocn.application.use_cases.extract_wind_data import run as extract_wind_data
from s1ocn.application.use_cases.list_products import run as list_products
from s1ocn.domain.entities import SearchCriteria, WindData
from s1ocn.domain.enums import NoData
from s1ocn.domain.ports import (
    ArchiveReaderPort,
    AttributeCatalogPort,
    CatalogueClientPort,
    ClockPort,
    ProductDownloaderPort,
    TokenProviderPort,
)
from s1ocn.domain.types import AttributeValue, DateInput, PolygonInput, ResultCollection
from s1ocn.infrastructure.config.settings import Settings
from s1ocn.infrastructure.http.attribute_catalog import CachedAttributeCatalog
from s1ocn.infrastructure.http.catalogue_client import CatalogueHttpClient
from s1ocn.infrastructure.http.identity import KeycloakTokenProvider
from s1ocn.infrastructure.http.product_downloader import ProductDownloader
from s1ocn.infrastructure.io.ocn_archive_reader import OcnArchiveReader
from s1ocn.infrastructure.runtime.clock import SystemClock


class S1OCNClient:
    """Sentinel-1 OCN catalogue client."""

    def __init__(
        self,
        settings: Settings | None = None,
        catalogue: CatalogueClientPort | None = None,
        attribute_catalog: AttributeCatalogPort | None = None,
        token_provider: TokenProviderPort | None = None,
        downloader: ProductDownloaderPort | None = None,
        reader: ArchiveReaderPort | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        """Initialize client, building default adapters from settings."""
        self.settings = settings or Settings()
        session = requests.Session()

        self.catalogue = catalogue or CatalogueHttpClient(self.settings, session)
        self.attribute_catalog = attribute_catalog or CachedAttributeCatalog(
            self.catalogue,
            self.settings.catalogue_base_url,
            self.settings.product_family,
        )
        self.token_provider = token_provider or KeycloakTokenProvider(self.settings, session)
        self.downloader = downloader or ProductDownloader(self.settings)
        self.reader = reader or OcnArchiveReader()
        self.clock = clock or SystemClock()

        self.filter_builder = AttributeFilterBuilder(self.attribute_catalog)
        self.query_builder = SearchQueryBuilder(
            self.filter_builder,
            self.clock,
            base_url=self.settings.catalogue_base_url,
            collection_name=self.settings.collection_name,
            product_type=self.settings.product_type,
            max_page_size=self.settings.max_page_size,
        )

    def build_attribute_query(
        self,
        attribute_name: str,
        attribute_value: AttributeValue,
        value_operator: str = "eq",
    ) -> str:
        """Filter fragment for one attribute."""
        return self.filter_builder.build(attribute_name, attribute_value, value_operator)

    def search_url(self, criteria: SearchCriteria) -> str:
        """Query URL for a search."""
        return self.query_builder.build(criteria)

    def list_files(
        self,
        search_polygon: PolygonInput | None = None,
        datetime_start: DateInput = None,
        datetime_end: DateInput = None,
        max_results: int = 20,
        attributes_search: Mapping[str, AttributeValue] | None = None,
    ) -> ResultCollection | NoData:
        """Search the catalogue for OCN products."""
        criteria = SearchCriteria(
            max_results=max_results,
            search_polygon=search_polygon,
            datetime_start=datetime_start,
            datetime_end=datetime_end,
            attribute_filters=dict(attributes_search or {}),
        )
        return list_products(criteria, self.query_builder, self.catalogue)

    def download_files(
        self,
        files: pd.DataFrame,
        dest: str | Path,
        username: str | None = None,
        password: str | None = None,
        workers: int = 1,
    ) -> pd.DataFrame:
        """Download product packages, defaulting to configured credentials."""
        username = username or self.settings.username
        password = password or self.settings.password
        if not username or not password:
            raise ValueError("Data space username and password are required to download products")
        return download_products(
            files,
            dest,
            username,
            password,
            self.token_provider,
            self.downloader,
            workers=workers,
        )

    def extract_wind_data(self, files: pd.DataFrame, workers: int = 1) -> dict[str, WindData]:
        """Read wind data from downloaded packages."""
        return extract_wind_data(files, self.reader, workers=workers)

    def wind_tables(
        self,
        wind_data_list: dict[str, WindData],
        workers: int = 1,
    ) -> dict[str, pd.DataFrame]:
        """Convert extracted wind data to tables."""
        return wind_data_list_to_tables(wind_data_list, workers=workers)
