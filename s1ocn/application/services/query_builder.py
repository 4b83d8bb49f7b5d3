"""Search query assembly."""

import structlog

from s1ocn.application.services.attribute_filter import AttributeFilterBuilder, encode_query_text
from s1ocn.application.services.date_normalizer import normalize_date
from s1ocn.application.services.geometry_normalizer import normalize_polygon
from s1ocn.domain.entities import SearchCriteria
from s1ocn.domain.enums import ValueOperator
from s1ocn.domain.ports import ClockPort

logger = structlog.get_logger()

AND = "%20and%20"

PRODUCT_TYPE_ATTRIBUTE = "productType"

# Lower bound used when only an end date is given
EPOCH_FLOOR = "1900-01-01T00:00:00.000Z"

SRID = 4326

PRODUCTS_QUERY_TEMPLATE = (
    "{base_url}/Products?$orderby=ContentDate/Start%20asc&$top={top}"
    "&$filter=Collection/Name%20eq%20%27{collection}%27"
)

DATE_RANGE_TEMPLATE = "ContentDate/Start%20ge%20{start}%20and%20ContentDate/Start%20le%20{end}"

INTERSECTS_TEMPLATE = "OData.CSC.Intersects(area=geography%27SRID={srid};{polygon}%27)"


class SearchQueryBuilder:
    """Assembles the Products query URL for a search."""

    def __init__(
        self,
        filter_builder: AttributeFilterBuilder,
        clock: ClockPort,
        base_url: str,
        collection_name: str,
        product_type: str,
        max_page_size: int = 1000,
    ) -> None:
        """Initialize query builder."""
        self.filter_builder = filter_builder
        self.clock = clock
        self.base_url = base_url.rstrip("/")
        self.collection_name = collection_name
        self.product_type = product_type
        self.max_page_size = max_page_size

    def page_size(self, criteria: SearchCriteria) -> int:
        """Per request page size."""
        return min(criteria.max_results, self.max_page_size)

    def build(self, criteria: SearchCriteria) -> str:
        """Build the complete, encoded query URL."""
        predicates = [
            self.product_type_predicate(),
            *self.attribute_predicates(criteria),
        ]

        date_predicate = self.date_range_predicate(criteria)
        if date_predicate is not None:
            predicates.append(date_predicate)

        polygon_predicate = self.polygon_predicate(criteria)
        if polygon_predicate is not None:
            predicates.append(polygon_predicate)

        url = AND.join([self.base_query(criteria), *predicates])
        logger.debug("search_query_built", predicate_count=len(predicates) + 1, url=url)
        return url

    def base_query(self, criteria: SearchCriteria) -> str:
        """Products endpoint with ordering, page size and collection predicate."""
        return PRODUCTS_QUERY_TEMPLATE.format(
            base_url=self.base_url,
            top=self.page_size(criteria),
            collection=encode_query_text(self.collection_name),
        )

    def product_type_predicate(self) -> str:
        """Predicate pinning the product type."""
        return self.filter_builder.build(PRODUCT_TYPE_ATTRIBUTE, self.product_type)

    def attribute_predicates(self, criteria: SearchCriteria) -> list[str]:
        """One equality predicate per caller attribute, product type excluded."""
        return [
            self.filter_builder.build(name, value, ValueOperator.EQ)
            for name, value in criteria.attribute_filters.items()
            if name != PRODUCT_TYPE_ATTRIBUTE
        ]

    def date_range_predicate(self, criteria: SearchCriteria) -> str | None:
        """Acquisition start window, if any bound was given."""
        if criteria.datetime_start is None and criteria.datetime_end is None:
            return None

        now = self.clock.now()
        start = (
            EPOCH_FLOOR
            if criteria.datetime_start is None
            else normalize_date(criteria.datetime_start, default=now)
        )
        end = normalize_date(criteria.datetime_end, default=now)
        return DATE_RANGE_TEMPLATE.format(start=start, end=end)

    def polygon_predicate(self, criteria: SearchCriteria) -> str | None:
        """Spatial intersection predicate, if a polygon was given."""
        if criteria.search_polygon is None:
            return None
        return INTERSECTS_TEMPLATE.format(
            srid=SRID,
            polygon=normalize_polygon(criteria.search_polygon),
        )
