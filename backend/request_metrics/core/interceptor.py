"""Per-request instrumentation around a downstream handler.

``RequestInterceptor`` counts in-flight requests, times each request and
marks one meter per status bucket.  The cleanup runs on every exit path
from the handler, including exceptions and task cancellation, and the
handler's exception is always re-raised unchanged.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Optional, TypeVar

from request_metrics.core.bindings import MetricBindings
from request_metrics.core.config import InterceptorConfig
from request_metrics.core.logging import logger
from request_metrics.core.protocols.http_response import HttpResponse
from request_metrics.core.protocols.metric_registry import TimerContext
from request_metrics.core.registry_resolver import RegistryFactory, resolve_registry
from request_metrics.core.status_capture import StatusCapture

T = TypeVar("T")

NextHandler = Callable[[Any, StatusCapture], T]
AsyncNextHandler = Callable[[Any, StatusCapture], Awaitable[T]]


class RequestInterceptor:
    """Instruments requests with an active-request counter, a timer and status meters.

    Args:
        config: Metric names and the registry lookup key.
        shared_state: Where a host publishes its registry (a mapping or an
            object such as ``app.state``).  ``None`` means no shared registry.
        registry_factory: Builds the private registry used when nothing
            valid is published under ``config.registry_key``.
    """

    def __init__(
        self,
        config: InterceptorConfig,
        *,
        shared_state: Any = None,
        registry_factory: Optional[RegistryFactory] = None,
    ) -> None:
        self.config = config
        self._shared_state = shared_state
        self._registry_factory = registry_factory
        self._bindings: Optional[MetricBindings] = None
        self.logger = logger.with_context(context_base="interceptor", namespace=config.namespace)

    @property
    def bindings(self) -> MetricBindings:
        if self._bindings is None:
            raise RuntimeError("RequestInterceptor.init() has not been called")
        return self._bindings

    def init(self) -> None:
        """Resolve the registry and build the metric bindings.

        Must run once, before any request is processed.
        """
        if self._bindings is not None:
            raise RuntimeError("RequestInterceptor is already initialized")

        registry = resolve_registry(
            self._shared_state, self.config.registry_key, self._registry_factory
        )
        self._bindings = MetricBindings.build(
            registry,
            namespace=self.config.namespace,
            status_metric_names=self.config.status_metric_names,
            other_metric_name=self.config.other_metric_name,
        )
        self.logger.info(
            f"Request metrics initialized with {len(self._bindings.exact_meters)} status meters"
        )

    def destroy(self) -> None:
        """Nothing to release; the registry owns all metric state."""
        self.logger.debug("Request metrics interceptor destroyed")

    def process(self, request: Any, response: HttpResponse, next_handler: NextHandler[T]) -> T:
        """Run *next_handler* with a status-capturing response and record metrics."""
        bindings = self.bindings
        wrapped = StatusCapture(response)
        bindings.active_requests.inc()
        context: Optional[TimerContext] = None
        try:
            context = bindings.request_timer.start()
            return next_handler(request, wrapped)
        finally:
            self._complete(bindings, context, wrapped)

    async def process_async(
        self,
        request: Any,
        response: HttpResponse,
        next_handler: AsyncNextHandler[T],
    ) -> T:
        """Coroutine variant of :meth:`process` for async handlers."""
        bindings = self.bindings
        wrapped = StatusCapture(response)
        bindings.active_requests.inc()
        context: Optional[TimerContext] = None
        try:
            context = bindings.request_timer.start()
            return await next_handler(request, wrapped)
        finally:
            self._complete(bindings, context, wrapped)

    @staticmethod
    def _complete(
        bindings: MetricBindings, context: Optional[TimerContext], wrapped: StatusCapture
    ) -> None:
        try:
            if context is not None:
                context.stop()
        finally:
            try:
                bindings.active_requests.dec()
            finally:
                bindings.mark_status(wrapped.status)
