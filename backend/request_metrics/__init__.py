"""Request instrumentation: in-flight requests, latency and status-code meters."""

from request_metrics.core.bindings import MetricBindings
from request_metrics.core.classifier import StatusBuckets, classify_status
from request_metrics.core.config import InterceptorConfig
from request_metrics.core.interceptor import RequestInterceptor
from request_metrics.core.status_capture import StatusCapture

__all__ = [
    "InterceptorConfig",
    "MetricBindings",
    "RequestInterceptor",
    "StatusBuckets",
    "StatusCapture",
    "classify_status",
]
