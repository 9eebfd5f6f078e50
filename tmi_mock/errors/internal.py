"""Centralized internal error hierarchy.

These exceptions give semantic categories to failures inside the server so
that connection handling and structured error logging can treat them
uniformly. Raw ``websockets`` / ``OSError`` failures are wrapped at the
transport boundary instead of leaking into protocol code.

Classes:
  InternalError              – Base for all internal errors.
  NetworkError               – Transport/bind issues (safe to retry).
  ParsingError               – A command line that matched a prefix but not its shape.
  ConnectionTerminatedError  – Attempted I/O on a connection that was terminated.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Covers failures to bind the listening socket and unexpected send
    failures on an open WebSocket.
    """


class ParsingError(InternalError):
    """Exception raised when a command line does not have its expected shape.

    The interpreter recovers from this locally by answering with the
    unknown-command reply; it never reaches the connection loop.
    """


class ConnectionTerminatedError(InternalError):
    """Exception raised when sending on a connection that was already terminated."""


__all__ = [
    "InternalError",
    "NetworkError",
    "ParsingError",
    "ConnectionTerminatedError",
]
