"""Response wrapper that remembers the last status code written."""

from typing import Any, Optional

from request_metrics.core.protocols.http_response import HttpResponse

# HTTP: a response that never sets a status goes out as 200.
DEFAULT_STATUS = 200

# Slots kept on the wrapper; every other assignment goes to the wrapped response.
_OWN_ATTRIBUTES = frozenset({"_response", "_status"})


class StatusCapture:
    """Wraps a host response and records every status-setting call.

    The three status-setting operations (``set_status``, ``send_error``
    with and without a message) update the captured value and then
    delegate to the wrapped response unchanged.  Any other attribute is
    read, assigned or deleted on the wrapped response.
    """

    def __init__(self, response: HttpResponse) -> None:
        self._response = response
        self._status = DEFAULT_STATUS

    @property
    def response(self) -> HttpResponse:
        return self._response

    @property
    def status(self) -> int:
        """Last status written, or 200 if none was."""
        return self._status

    def set_status(self, status: int) -> None:
        self._status = status
        self._response.set_status(status)

    def send_error(self, status: int, message: Optional[str] = None) -> None:
        self._status = status
        if message is None:
            self._response.send_error(status)
        else:
            self._response.send_error(status, message)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._response, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _OWN_ATTRIBUTES:
            object.__setattr__(self, name, value)
        else:
            setattr(self._response, name, value)

    def __delattr__(self, name: str) -> None:
        if name in _OWN_ATTRIBUTES:
            object.__delattr__(self, name)
        else:
            delattr(self._response, name)
