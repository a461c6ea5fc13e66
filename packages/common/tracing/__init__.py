"""Correlation ID tracking for request tracing.

Every HTTP request (and every CLI extraction) runs under a correlation ID that
is attached to all log records emitted while handling it.
"""

import uuid
from contextvars import ContextVar
from types import TracebackType

# Context variable for storing the current correlation ID
_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new correlation ID.

    Returns:
        str: A new UUID4 correlation ID as a string.
    """
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current context.

    If no correlation ID is provided, generates a new one.

    Args:
        correlation_id: Optional correlation ID to set. If None, generates a new one.

    Returns:
        str: The correlation ID that was set.

    Example:
        >>> corr_id = set_correlation_id()
        >>> get_correlation_id() == corr_id
        True
    """
    if correlation_id is None:
        correlation_id = generate_correlation_id()

    _correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str | None:
    """Get the correlation ID for the current context."""
    return _correlation_id_var.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context."""
    _correlation_id_var.set(None)


class TracingContext:
    """Context manager for managing correlation IDs.

    Sets a correlation ID for a code block and restores the previous one on exit.

    Example:
        >>> with TracingContext("req-1") as corr_id:
        ...     get_correlation_id()
        'req-1'
    """

    def __init__(self, correlation_id: str | None = None) -> None:
        self.correlation_id = correlation_id
        self.previous_id: str | None = None

    def __enter__(self) -> str:
        self.previous_id = get_correlation_id()
        self.correlation_id = set_correlation_id(self.correlation_id)
        return self.correlation_id

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self.previous_id is None:
            clear_correlation_id()
        else:
            set_correlation_id(self.previous_id)


# Export public API
__all__ = [
    "TracingContext",
    "clear_correlation_id",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
