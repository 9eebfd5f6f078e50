from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConnectionTerminatedError,
    InternalError,
    NetworkError,
    ParsingError,
)


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    This function categorizes the exception and forwards it to structured
    logging so repeated failures aggregate under a stable error type.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.

    Returns:
        None

    Raises:
        No exceptions are raised by this function.
    """
    error_type = "unknown"
    if isinstance(error, NetworkError | OSError | ConnectionError):
        error_type = "network"
    elif isinstance(error, ConnectionTerminatedError):
        error_type = "connection"
    elif isinstance(error, ParsingError):
        error_type = "parsing"
    elif isinstance(error, InternalError):
        error_type = "internal"

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


def is_retryable_error(error: BaseException) -> bool:
    """Check if an exception should trigger a retry."""
    return isinstance(error, NetworkError | OSError | ConnectionError)
