"""Error hierarchy and logging helpers."""

from .handling import log_error
from .internal import (
    ConnectionTerminatedError,
    InternalError,
    NetworkError,
    ParsingError,
)

__all__ = [
    "log_error",
    "InternalError",
    "NetworkError",
    "ParsingError",
    "ConnectionTerminatedError",
]
