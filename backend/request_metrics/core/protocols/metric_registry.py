"""MetricRegistry protocol for request instrumentation.

Abstracts the metrics backend so the interceptor depends on a protocol
rather than a concrete library.  Production uses Prometheus; tests inject
a fake that counts calls in memory.

Every handle returned by a registry must be safe to use from many
concurrent requests at once.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Meter(Protocol):
    """Rate/count of discrete events."""

    def mark(self) -> None:
        """Record one occurrence."""
        ...


@runtime_checkable
class Counter(Protocol):
    """Running total that can go up and down."""

    def inc(self) -> None:
        """Increment by one."""
        ...

    def dec(self) -> None:
        """Decrement by one."""
        ...


@runtime_checkable
class TimerContext(Protocol):
    """A single running duration measurement."""

    def stop(self) -> None:
        """Stop the measurement and record one sample."""
        ...


@runtime_checkable
class Timer(Protocol):
    """Distribution of durations."""

    def start(self) -> TimerContext:
        """Begin one measurement."""
        ...


@runtime_checkable
class MetricRegistry(Protocol):
    """Protocol for the registry that owns meters, counters and timers.

    Asking twice for the same name returns the same handle.
    """

    def meter(self, name: str) -> Meter:
        """Get or create the meter called *name*."""
        ...

    def counter(self, name: str) -> Counter:
        """Get or create the counter called *name*."""
        ...

    def timer(self, name: str) -> Timer:
        """Get or create the timer called *name*."""
        ...
