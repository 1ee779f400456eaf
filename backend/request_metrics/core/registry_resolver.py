"""Lookup-or-fallback acquisition of the shared metric registry."""

from collections.abc import Callable, Mapping
from typing import Any, Optional

from request_metrics.core.logging import logger
from request_metrics.core.protocols.metric_registry import MetricRegistry

RegistryFactory = Callable[[], MetricRegistry]


def _lookup(shared_state: Any, key: str) -> Any:
    if isinstance(shared_state, Mapping):
        return shared_state.get(key)
    return getattr(shared_state, key, None)


def resolve_registry(
    shared_state: Any,
    key: Optional[str],
    factory: Optional[RegistryFactory] = None,
) -> MetricRegistry:
    """Return the registry published under *key*, or a fresh private one.

    *shared_state* may be ``None``, a mapping, or an attribute namespace
    such as Starlette's ``app.state``.  A value that is not a
    ``MetricRegistry`` instance (including a registry class) is treated as
    missing.  Falling back is
    not an error, but it is logged because metrics recorded into a
    private registry are never exported by the host.
    """
    found = None if shared_state is None or key is None else _lookup(shared_state, key)
    # A registry class has the protocol's methods too, but only as unbound functions.
    if not isinstance(found, type) and isinstance(found, MetricRegistry):
        return found

    if factory is None:
        from request_metrics.adapters.metric_registry.prometheus import PrometheusMetricRegistry

        factory = PrometheusMetricRegistry

    logger.with_context(context_base="interceptor", operation="resolve_registry").warning(
        f"No metric registry published under {key!r} (found {type(found).__name__}); "
        "using a private registry"
    )
    return factory()
