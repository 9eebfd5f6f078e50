"""Utility functions package for the mock chat server.

Exposed functions:
    format_duration: Formats time durations into human-readable strings.
    retry_async: Tenacity-backed retry for transient async failures.
"""

from .helpers import format_duration
from .retry import RetryExhaustedError, retry_async

__all__ = ["format_duration", "retry_async", "RetryExhaustedError"]
