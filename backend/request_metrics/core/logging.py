"""Package logger with contextual fields.

Usage:
    from request_metrics.core.logging import logger

    log = logger.with_context(context_base="interceptor", operation="init")
    log.info("Built metric bindings")
"""

import logging
from typing import Any, MutableMapping

_LOGGER_NAME = "request_metrics"


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that carries a dict of context fields.

    Fields are passed to handlers via ``extra`` and appended to the
    message as ``key=value`` pairs so they survive plain-text formatters.
    """

    def __init__(self, base: logging.Logger, context: dict[str, Any] | None = None) -> None:
        super().__init__(base, dict(context or {}))

    @property
    def context(self) -> dict[str, Any]:
        return dict(self.extra)

    def with_context(self, **fields: Any) -> "ContextualLogger":
        """Return a new logger with *fields* merged over the current context."""
        return ContextualLogger(self.logger, {**self.extra, **fields})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        if not self.extra:
            return msg, kwargs
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        rendered = " ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"{msg} [{rendered}]", kwargs


logger = ContextualLogger(logging.getLogger(_LOGGER_NAME))
