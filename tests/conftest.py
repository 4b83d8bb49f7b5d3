"""Shared test fixtures."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from s1ocn.application.services.attribute_filter import AttributeFilterBuilder
from s1ocn.application.services.query_builder import SearchQueryBuilder
from s1ocn.domain.entities import AttributeDescriptor
from s1ocn.domain.ports import AttributeCatalogPort, ClockPort
from s1ocn.infrastructure.http.attribute_catalog import reset_attribute_cache

BASE_URL = "https://catalogue.dataspace.copernicus.eu/odata/v1"

FIXED_NOW = datetime(2024, 9, 3, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clear_attribute_cache():
    """Start every test with an empty attribute cache."""
    reset_attribute_cache()
    yield
    reset_attribute_cache()


@pytest.fixture
def attribute_descriptors():
    """Attributes advertised for Sentinel-1."""
    return (
        AttributeDescriptor("productType", "String"),
        AttributeDescriptor("swathIdentifier", "String"),
        AttributeDescriptor("orbitDirection", "String"),
        AttributeDescriptor("relativeOrbitNumber", "Integer"),
        AttributeDescriptor("cloudCover", "Double"),
    )


@pytest.fixture
def mock_attribute_catalog(attribute_descriptors):
    """Create mock attribute catalogue."""
    catalog = MagicMock(spec=AttributeCatalogPort)
    catalog.get_attributes.return_value = attribute_descriptors
    return catalog


@pytest.fixture
def mock_clock():
    """Create mock clock."""
    clock = MagicMock(spec=ClockPort)
    clock.now.return_value = FIXED_NOW
    return clock


@pytest.fixture
def query_builder(mock_attribute_catalog, mock_clock):
    """Create query builder backed by the mock catalogue."""
    return SearchQueryBuilder(
        AttributeFilterBuilder(mock_attribute_catalog),
        mock_clock,
        base_url=BASE_URL,
        collection_name="SENTINEL-1",
        product_type="OCN",
        max_page_size=1000,
    )
