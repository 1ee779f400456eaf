"""Core protocols for dependency injection.

The interceptor depends on these protocols only; concrete registries
live under ``request_metrics.adapters`` and host responses are supplied
by the integration layer.
"""

from request_metrics.core.protocols.http_response import HttpResponse
from request_metrics.core.protocols.metric_registry import (
    Counter,
    Meter,
    MetricRegistry,
    Timer,
    TimerContext,
)

__all__ = [
    "Counter",
    "HttpResponse",
    "Meter",
    "MetricRegistry",
    "Timer",
    "TimerContext",
]
