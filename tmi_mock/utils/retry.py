"""Retry utilities for asynchronous operations using Tenacity."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..errors.handling import is_retryable_error

T = TypeVar("T")


class RetryExhaustedError(Exception):
    """Exception raised when all retry attempts have been exhausted."""

    def __init__(self, message: str, attempts: int, final_exception: BaseException | None = None) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.final_exception = final_exception


async def retry_async(
    operation: Callable[[int], Awaitable[T]],
    context: str,
    max_attempts: int = 5,
    max_backoff: float = 10,
) -> T:
    """Retry an asynchronous operation with exponential backoff using Tenacity.

    Only transient failures (see ``is_retryable_error``) are retried; any
    other exception propagates immediately.

    Args:
        operation: Async callable that takes the attempt number and returns a result.
        context: Human-readable name of the operation for logging.
        max_attempts: Maximum number of attempts.
        max_backoff: Upper bound for the exponential wait between attempts.

    Returns:
        The result from operation if successful.

    Raises:
        RetryExhaustedError: If all attempts are exhausted.
    """
    attempt_count = 0

    def before_retry(retry_state):
        nonlocal attempt_count
        attempt_count = retry_state.attempt_number
        if attempt_count > 1:
            logging.info(f"🔁 Retrying {context} (attempt {attempt_count}/{max_attempts})")

    async def wrapped_operation() -> T:
        return await operation(attempt_count)

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, max=max_backoff),
        retry=retry_if_exception(is_retryable_error),
        before=before_retry,
        reraise=True,
    )

    try:
        return await retrying(wrapped_operation)
    except Exception as e:
        if not is_retryable_error(e):
            raise
        raise RetryExhaustedError(
            f"{context} failed after {max_attempts} attempts",
            attempts=max_attempts,
            final_exception=e,
        ) from e
