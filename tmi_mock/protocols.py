"""Protocol definitions for the server's external collaborators.

The session core only talks to the transport and to the identity
generator through these interfaces, so tests can substitute recording
doubles and deterministic generators.
"""

from __future__ import annotations

from typing import Protocol


class TransportProtocol(Protocol):
    """Per-connection duplex text channel."""

    @property
    def is_open(self) -> bool:
        """Whether the connection can still be written to."""
        ...

    async def send(self, text: str) -> None:
        """Send a single line or a CRLF-joined block as one frame."""
        ...

    async def terminate(self) -> None:
        """Close the connection immediately."""
        ...


class IdentityGeneratorProtocol(Protocol):
    """Source of plausible random chatter handles."""

    def generate_username(self) -> str:
        """Return a random username."""
        ...
