"""List products matching a search - paginated retrieval."""

import pandas as pd
import structlog
from pydantic import ValidationError

from s1ocn.application.dto.catalog import ProductPage
from s1ocn.application.services.query_builder import SearchQueryBuilder
from s1ocn.domain.entities import Page, SearchCriteria
from s1ocn.domain.enums import NO_DATA, NoData
from s1ocn.domain.errors import CatalogueRequestError
from s1ocn.domain.ports import CatalogueClientPort
from s1ocn.domain.types import ProductRecord, ResultCollection
from s1ocn.infrastructure.observability.metrics import pages_fetched

logger = structlog.get_logger()


def run(
    criteria: SearchCriteria,
    query_builder: SearchQueryBuilder,
    client: CatalogueClientPort,
) -> ResultCollection | NoData:
    """Run a search and collect every page of results.

    Continuation links are only followed when more results were requested
    than a single page can hold. Returns `NO_DATA` when the first page is
    empty.
    """
    iterate_pages = criteria.max_results > query_builder.max_page_size

    url = query_builder.build(criteria)
    logger.info(
        "searching_products",
        max_results=criteria.max_results,
        page_size=query_builder.page_size(criteria),
        iterate_pages=iterate_pages,
    )

    page = _fetch_page(client, url)
    if not page.items:
        logger.info("no_products_found")
        return NO_DATA

    items: list[ProductRecord] = list(page.items)
    page_count = 1

    while iterate_pages and page.next_link:
        page = _fetch_page(client, page.next_link)
        items.extend(page.items)
        page_count += 1

    logger.info("products_found", product_count=len(items), page_count=page_count)
    return pd.DataFrame(items)


def _fetch_page(client: CatalogueClientPort, url: str) -> Page:
    """Fetch and parse one page of products."""
    body = client.get_json(url)
    try:
        page = ProductPage.model_validate(body).to_page()
    except ValidationError as e:
        logger.error("product_page_invalid", url=url, error=str(e))
        raise CatalogueRequestError(f"Unexpected product page from {url}: {e}") from e

    pages_fetched.inc()
    logger.debug("product_page_fetched", item_count=len(page.items), has_next=page.next_link is not None)
    return page
