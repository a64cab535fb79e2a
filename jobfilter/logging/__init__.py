"""Structured logging helpers shared by every jobfilter component."""

import logging
from typing import Optional, Union

from .context import clear_log_context, get_log_context, log_context


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges a default component into per-call extra fields."""

    def process(self, msg, kwargs):
        """Merge adapter extra with call extra; the call's values win."""
        extra = kwargs.get("extra") or {}
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Get a logger that tags every record with a component field.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier (e.g. "matching", "adapter")

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="matching")
        >>> logger.info("Posting classified", extra={"event": "matching.posting.classified"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger


__all__ = [
    "ComponentLoggerAdapter",
    "get_logger",
    "log_context",
    "get_log_context",
    "clear_log_context",
]
