"""Fake MetricRegistry for testing.

Counts every call in memory so tests can assert on metrics behaviour
without reaching into prometheus-client internals.  All counts are
guarded by one lock so the fake is safe under concurrent requests.
"""

from __future__ import annotations

import threading
import time


class FakeMeter:
    """In-memory meter."""

    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock
        self.count = 0

    def mark(self) -> None:
        with self._lock:
            self.count += 1


class FakeCounter:
    """In-memory up/down counter."""

    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock
        self.count = 0
        self.max_count = 0

    def inc(self) -> None:
        with self._lock:
            self.count += 1
            self.max_count = max(self.max_count, self.count)

    def dec(self) -> None:
        with self._lock:
            self.count -= 1


class FakeTimerContext:
    """One running measurement on a FakeTimer."""

    def __init__(self, timer: FakeTimer) -> None:
        self._timer = timer
        self._start = time.perf_counter()
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True
        self._timer.record(time.perf_counter() - self._start)


class FakeTimer:
    """In-memory timer recording every duration."""

    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock
        self.durations: list[float] = []
        self.started = 0

    @property
    def count(self) -> int:
        return len(self.durations)

    def start(self) -> FakeTimerContext:
        with self._lock:
            self.started += 1
        return FakeTimerContext(self)

    def record(self, duration: float) -> None:
        with self._lock:
            self.durations.append(duration)


class FakeMetricRegistry:
    """In-memory spy implementing the MetricRegistry protocol.

    Usage:
        fake = FakeMetricRegistry()
        # … inject into the interceptor …
        assert fake.meters["request_metrics.RequestInterceptor.4xx"].count == 1
        assert fake.counters["request_metrics.RequestInterceptor.activeRequests"].count == 0
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.meters: dict[str, FakeMeter] = {}
        self.counters: dict[str, FakeCounter] = {}
        self.timers: dict[str, FakeTimer] = {}

    def meter(self, name: str) -> FakeMeter:
        if name not in self.meters:
            self.meters[name] = FakeMeter(self._lock)
        return self.meters[name]

    def counter(self, name: str) -> FakeCounter:
        if name not in self.counters:
            self.counters[name] = FakeCounter(self._lock)
        return self.counters[name]

    def timer(self, name: str) -> FakeTimer:
        if name not in self.timers:
            self.timers[name] = FakeTimer(self._lock)
        return self.timers[name]

    # -- test helpers --

    def meter_counts(self) -> dict[str, int]:
        """Snapshot of every meter's count, keyed by metric name."""
        with self._lock:
            return {name: meter.count for name, meter in self.meters.items()}

    def clear(self) -> None:
        """Reset all recorded counts, keeping the handles."""
        with self._lock:
            for meter in self.meters.values():
                meter.count = 0
            for counter in self.counters.values():
                counter.count = 0
                counter.max_count = 0
            for timer in self.timers.values():
                timer.durations.clear()
                timer.started = 0
