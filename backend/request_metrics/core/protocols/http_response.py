"""HttpResponse protocol: the status-setting surface of a host response.

Only the operations that can change the status code are part of the
protocol.  Everything else a host response offers is reached through
plain attribute access and is never intercepted.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class HttpResponse(Protocol):
    """Protocol for a response whose status is written by the handler."""

    def set_status(self, status: int) -> None:
        """Set the response status code."""
        ...

    def send_error(self, status: int, message: Optional[str] = None) -> None:
        """Send an error response with *status* and an optional message."""
        ...
