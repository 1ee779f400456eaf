"""ASGI integration for the request interceptor.

``RequestMetricsMiddleware`` is a pure ASGI middleware: it never buffers
bodies and works under FastAPI and plain Starlette alike.  The status the
downstream app writes in its ``http.response.start`` message is routed
through the interceptor's status-capturing response before the message
is forwarded.
"""

from typing import Optional

from starlette.applications import Starlette
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from request_metrics.core.config import InterceptorConfig, settings
from request_metrics.core.interceptor import RequestInterceptor
from request_metrics.core.registry_resolver import RegistryFactory
from request_metrics.core.status_capture import StatusCapture


class AsgiResponse:
    """Host response record for one ASGI HTTP request.

    ASGI apps write their status in the response start message, so this
    record only keeps what was written; the bytes go out through ``send``.
    """

    def __init__(self) -> None:
        self.status: Optional[int] = None
        self.error_message: Optional[str] = None

    def set_status(self, status: int) -> None:
        self.status = status

    def send_error(self, status: int, message: Optional[str] = None) -> None:
        self.status = status
        self.error_message = message


class RequestMetricsMiddleware:
    """Run every HTTP request through a :class:`RequestInterceptor`.

    Non-HTTP scopes (``lifespan``, ``websocket``) pass straight through.
    The interceptor must already be initialized.
    """

    def __init__(self, app: ASGIApp, interceptor: RequestInterceptor) -> None:
        self.app = app
        self.interceptor = interceptor

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def call_app(request_scope: Scope, response: StatusCapture) -> None:
            async def send_with_status(message: Message) -> None:
                if message["type"] == "http.response.start":
                    response.set_status(message["status"])
                await send(message)

            await self.app(request_scope, receive, send_with_status)

        await self.interceptor.process_async(scope, AsgiResponse(), call_app)


def install_request_metrics(
    app: Starlette,
    config: Optional[InterceptorConfig] = None,
    *,
    registry_factory: Optional[RegistryFactory] = None,
) -> RequestInterceptor:
    """Initialize an interceptor against ``app.state`` and add the middleware.

    Publish the registry on ``app.state`` under ``config.registry_key``
    before calling this, otherwise a private registry is used.
    """
    interceptor = RequestInterceptor(
        config or settings.interceptor_config(),
        shared_state=app.state,
        registry_factory=registry_factory,
    )
    interceptor.init()
    app.add_middleware(RequestMetricsMiddleware, interceptor=interceptor)
    return interceptor
