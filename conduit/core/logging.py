"""Logging configuration.

Every module derives its logger from the base ``logger`` exported here,
narrowing it with a prefix and identity dimensions:

    oauth_logger = logger.with_prefix("OAuth: ").with_context(component="oauth_handler")
    oauth_logger.with_context(workspace_id=str(workspace_id)).info("Consent URL generated")

Dimensions are attached to each record as ``record.dimensions`` and rendered
after the message by the formatter.
"""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from conduit.core.config import settings


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a message prefix and key/value dimensions."""

    def __init__(
        self,
        logger: logging.Logger,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Wrap ``logger`` with an optional prefix and dimensions."""
        super().__init__(logger, {})
        self.prefix = prefix
        self.dimensions: Dict[str, Any] = dict(dimensions or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Prepend the prefix and merge dimensions into ``extra``."""
        extra = dict(kwargs.get("extra") or {})
        call_dimensions = extra.pop("dimensions", {})
        extra["dimensions"] = {**self.dimensions, **call_dimensions}
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger whose messages additionally start with ``prefix``."""
        return ContextualLogger(self.logger, f"{self.prefix}{prefix}", self.dimensions)

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with ``dimensions`` added to the existing ones."""
        return ContextualLogger(self.logger, self.prefix, {**self.dimensions, **dimensions})


class _DimensionFormatter(logging.Formatter):
    """Appends ``key=value`` dimensions to the formatted message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if not dimensions:
            return base
        rendered = " ".join(f"{k}={v}" for k, v in sorted(dimensions.items()))
        return f"{base} [{rendered}]"


class LoggerConfigurator:
    """Builds configured ``ContextualLogger`` instances."""

    FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def configure_logger(
        cls, name: str, dimensions: Optional[Dict[str, Any]] = None
    ) -> ContextualLogger:
        """Configure the named stdlib logger once and wrap it."""
        base = logging.getLogger(name)
        if not base.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(_DimensionFormatter(cls.FORMAT))
            base.addHandler(handler)
        base.setLevel(settings.LOG_LEVEL)
        return ContextualLogger(base, dimensions=dimensions)


logger = LoggerConfigurator.configure_logger(
    "conduit", dimensions={"environment": settings.ENVIRONMENT.value}
)
