"""Context propagation for structured logging.

Fields pushed here (source, posting_id, ...) are injected into every log
record emitted inside the scope. Context lives in a ContextVar so that
callers classifying postings from several threads or tasks never see each
other's fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("jobfilter_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs: Any) -> Token:
    """Merge fields into the logging context.

    None values are skipped so callers can pass optional identifiers
    (e.g. a posting without an external_id) without polluting records.

    Returns:
        Token to hand back to pop_log_context()
    """
    fields = {key: value for key, value in kwargs.items() if value is not None}
    return LogContextVar.set({**LogContextVar.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the logging context captured by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Mostly useful in tests."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(source="greenhouse", posting_id="4012345"):
        ...     classifier.classify(posting)  # records carry source and posting_id
    """

    def __init__(self, **kwargs: Any):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
