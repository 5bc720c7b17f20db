# fintrack/utils/context.py
"""
Correlation context for engine log records.

The engine runs inside whatever request or job the caller owns. Callers set a
correlation ID before invoking the engines so every log line emitted during
that computation can be traced back to the request.

Uses Python's contextvars so the value follows async tasks and threads that
copy the context.

Usage:
    from fintrack.utils.context import set_correlation_id

    set_correlation_id("req-abc-123")
    valuate(holdings, prices, "EUR")
"""

from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """
    Get the current correlation ID.

    Returns:
        The correlation ID set by the caller, or None if not set.
    """
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID for the current context.

    Args:
        correlation_id: Unique identifier of the caller's request or job
    """
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID."""
    _correlation_id_var.set(None)
