"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..session.state import StateWrite


class CommandType(Enum):
    """Command family a line was recognized as."""

    CAPABILITIES = "capabilities"
    CHANNELS = "channels"
    USERNAME = "username"
    TOKEN = "token"
    PING = "ping"
    PONG = "pong"
    MESSAGE = "message"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class CommandResult:
    """Outcome of interpreting one inbound line.

    Attributes:
        command: The recognized command token (e.g. ``JOIN``).
        type: Command family used for dispatch and logging.
        response: Line or CRLF-joined block to send back, if any.
        write: Session field assignment the connection must apply, if any.
        cancel_liveness: True when the armed PONG watchdog should be disarmed.
    """

    command: str
    type: CommandType
    response: str | None = None
    write: StateWrite | None = None
    cancel_liveness: bool = False
