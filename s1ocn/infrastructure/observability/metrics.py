"""Prometheus metrics."""

from prometheus_client import Counter, Histogram

catalogue_requests = Counter(
    "s1ocn_catalogue_requests_total",
    "Total number of catalogue requests",
    ["endpoint"],
)

catalogue_request_failures = Counter(
    "s1ocn_catalogue_request_failures_total",
    "Total number of failed catalogue requests",
    ["endpoint"],
)

pages_fetched = Counter(
    "s1ocn_pages_fetched_total",
    "Total number of product pages fetched",
)

attribute_catalog_fetches = Counter(
    "s1ocn_attribute_catalog_fetches_total",
    "Total number of attribute catalogue fetches",
    ["product_family"],
)

polygon_fallbacks = Counter(
    "s1ocn_polygon_fallbacks_total",
    "Total number of searches widened to the default polygon",
    ["reason"],
)

products_downloaded = Counter(
    "s1ocn_products_downloaded_total",
    "Total number of product packages downloaded",
)

product_download_failures = Counter(
    "s1ocn_product_download_failures_total",
    "Total number of failed product downloads",
)

download_mb = Histogram(
    "s1ocn_download_mb",
    "Size of downloaded product packages in MB",
    buckets=[1, 10, 50, 100, 250, 500, 1000],
)
