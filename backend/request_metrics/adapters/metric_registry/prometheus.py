"""Prometheus implementation of the MetricRegistry protocol.

Creates a dedicated CollectorRegistry by default so interceptor metrics
are isolated from the global default registry.  Meters map to Counters,
counters to Gauges and timers to Histograms observed in seconds.
"""

import re
import threading
import time
from typing import Callable, TypeVar

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_:]")

H = TypeVar("H")


def prometheus_name(name: str) -> str:
    """Turn a dotted metric name into a valid Prometheus metric name."""
    sanitized = _INVALID_NAME_CHARS.sub("_", name)
    if not sanitized or sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    return sanitized


class PrometheusMeter:
    """Meter backed by a Prometheus Counter."""

    def __init__(self, name: str, registry: CollectorRegistry) -> None:
        self._counter = Counter(
            prometheus_name(name), f"Events marked on {name}", registry=registry
        )

    def mark(self) -> None:
        self._counter.inc()


class PrometheusCounter:
    """Up/down counter backed by a Prometheus Gauge."""

    def __init__(self, name: str, registry: CollectorRegistry) -> None:
        self._gauge = Gauge(prometheus_name(name), f"Running total of {name}", registry=registry)

    def inc(self) -> None:
        self._gauge.inc()

    def dec(self) -> None:
        self._gauge.dec()


class PrometheusTimerContext:
    """One running measurement; observes the elapsed seconds on stop()."""

    def __init__(self, histogram: Histogram) -> None:
        self._histogram = histogram
        self._start = time.perf_counter()

    def stop(self) -> None:
        self._histogram.observe(time.perf_counter() - self._start)


class PrometheusTimer:
    """Timer backed by a Prometheus Histogram."""

    def __init__(self, name: str, registry: CollectorRegistry) -> None:
        self._histogram = Histogram(
            prometheus_name(name),
            f"Duration of {name} in seconds",
            registry=registry,
        )

    def start(self) -> PrometheusTimerContext:
        return PrometheusTimerContext(self._histogram)


class PrometheusMetricRegistry:
    """Prometheus-backed metric registry.

    Handles are cached by their Prometheus name, so repeated lookups (and
    dotted names that sanitize to the same name, such as ``a.b`` and
    ``a_b``) return the same object instead of re-registering a collector,
    which Prometheus rejects.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()
        self._handles: dict[tuple[str, str], object] = {}
        self._lock = threading.Lock()

    @property
    def collector_registry(self) -> CollectorRegistry:
        """The underlying registry, for export by the host."""
        return self._registry

    def _get_or_create(
        self, kind: str, name: str, create: Callable[[str, CollectorRegistry], H]
    ) -> H:
        key = (kind, prometheus_name(name))
        with self._lock:
            handle = self._handles.get(key)
            if handle is None:
                handle = create(name, self._registry)
                self._handles[key] = handle
            return handle

    # -- MetricRegistry protocol methods --

    def meter(self, name: str) -> PrometheusMeter:
        return self._get_or_create("meter", name, PrometheusMeter)

    def counter(self, name: str) -> PrometheusCounter:
        return self._get_or_create("counter", name, PrometheusCounter)

    def timer(self, name: str) -> PrometheusTimer:
        return self._get_or_create("timer", name, PrometheusTimer)
