"""Metric handles resolved once at startup and shared by all requests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from request_metrics.core.classifier import STATUS_GROUPS, classify_status
from request_metrics.core.protocols.metric_registry import Counter, Meter, MetricRegistry, Timer

ACTIVE_REQUESTS_SUFFIX = "activeRequests"
REQUESTS_SUFFIX = "requests"


def metric_name(namespace: str, suffix: str) -> str:
    """Join *namespace* and *suffix* into a dotted metric name."""
    return f"{namespace}.{suffix}"


@dataclass(frozen=True)
class MetricBindings:
    """Immutable table of metric handles.

    Built by :meth:`build` before any request is processed.  The mappings
    are read-only views, so concurrent requests only ever call thread-safe
    operations on the handles themselves.
    """

    exact_meters: Mapping[int, Meter]
    group_meters: Mapping[int, Meter]
    other_meter: Meter
    active_requests: Counter
    request_timer: Timer

    @classmethod
    def build(
        cls,
        registry: MetricRegistry,
        *,
        namespace: str,
        status_metric_names: Mapping[int, str],
        other_metric_name: str,
    ) -> MetricBindings:
        """Resolve every configured name to a handle from *registry*."""
        exact = {
            status: registry.meter(metric_name(namespace, name))
            for status, name in status_metric_names.items()
        }
        groups = {
            group: registry.meter(metric_name(namespace, f"{group}xx")) for group in STATUS_GROUPS
        }
        return cls(
            exact_meters=MappingProxyType(exact),
            group_meters=MappingProxyType(groups),
            other_meter=registry.meter(metric_name(namespace, other_metric_name)),
            active_requests=registry.counter(metric_name(namespace, ACTIVE_REQUESTS_SUFFIX)),
            request_timer=registry.timer(metric_name(namespace, REQUESTS_SUFFIX)),
        )

    def mark_status(self, status: int) -> None:
        """Mark the exact and/or group meter for *status*, or the catch-all."""
        buckets = classify_status(status, self.exact_meters)
        if buckets.exact is not None:
            self.exact_meters[buckets.exact].mark()
        if buckets.group is not None:
            self.group_meters[buckets.group].mark()
        if buckets.other:
            self.other_meter.mark()
