"""Metrics server."""

from prometheus_client import start_http_server

from s1ocn.infrastructure.config.settings import Settings


def start_metrics_server(settings: Settings) -> bool:
    """Start Prometheus metrics HTTP server when a port is configured."""
    if settings.prometheus_port is None:
        return False
    start_http_server(settings.prometheus_port)
    return True
