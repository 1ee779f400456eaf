"""Metric registry adapters."""

from request_metrics.adapters.metric_registry.fake import FakeMetricRegistry
from request_metrics.adapters.metric_registry.prometheus import PrometheusMetricRegistry

__all__ = ["PrometheusMetricRegistry", "FakeMetricRegistry"]
