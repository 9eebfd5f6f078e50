"""Per-connection session state and the capability handshake."""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from enum import Enum


class HandshakeState(Enum):
    UNACKNOWLEDGED = "unacknowledged"
    ACKNOWLEDGED = "acknowledged"


class SessionField(Enum):
    """Session fields the interpreter is allowed to write."""

    CAPABILITIES = "capabilities"
    TOKEN = "token"
    USERNAME = "username"


@dataclass(frozen=True, slots=True)
class StateWrite:
    field: SessionField
    value: str | list[str]


@dataclass(slots=True)
class SessionState:
    """State of one client connection.

    Only the owning connection (through ``apply``) and its liveness
    supervisor (through ``pending_liveness_timeout``) mutate it.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    username: str | None = None
    token: str | None = None
    capabilities: list[str] | None = None
    handshake: HandshakeState = HandshakeState.UNACKNOWLEDGED
    pending_liveness_timeout: asyncio.TimerHandle | None = None

    @property
    def is_acknowledged(self) -> bool:
        return self.handshake is HandshakeState.ACKNOWLEDGED

    @property
    def display_name(self) -> str:
        """Username for replies; empty until NICK was received."""
        return self.username or ""

    def apply(self, write: StateWrite) -> None:
        if write.field is SessionField.CAPABILITIES:
            self.capabilities = list(write.value)
        elif write.field is SessionField.TOKEN:
            self.token = str(write.value)
        elif write.field is SessionField.USERNAME:
            self.username = str(write.value)

    def is_ready_for_acknowledgment(self) -> bool:
        return bool(self.capabilities and self.token and self.username)

    def acknowledge(self) -> bool:
        """Fire the handshake transition if it is due.

        Returns True exactly once: the first time capabilities, token and
        username are all present. The state flips before the caller sends
        anything, so a second call can never produce a second welcome.
        """
        if self.is_acknowledged or not self.is_ready_for_acknowledgment():
            return False
        self.handshake = HandshakeState.ACKNOWLEDGED
        return True

    def cancel_liveness_timeout(self) -> bool:
        """Disarm the pending PONG watchdog; returns True if one was armed."""
        handle = self.pending_liveness_timeout
        self.pending_liveness_timeout = None
        if handle is None or handle.cancelled():
            return False
        handle.cancel()
        return True


__all__ = ["HandshakeState", "SessionField", "SessionState", "StateWrite"]
