"""ASGI integration."""

from request_metrics.api.middleware import (
    AsgiResponse,
    RequestMetricsMiddleware,
    install_request_metrics,
)

__all__ = ["AsgiResponse", "RequestMetricsMiddleware", "install_request_metrics"]
