"""WebSocket transport adapter for one client connection."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

import websockets

from ..errors.internal import ConnectionTerminatedError, NetworkError


def split_lines(frame: str | bytes) -> list[str]:
    """Split an inbound frame into non-empty protocol lines."""
    if isinstance(frame, bytes):
        frame = frame.decode("utf-8", errors="replace")
    return [line.rstrip("\r") for line in frame.split("\n") if line.strip()]


class WebSocketTransport:
    """Wraps a ``websockets`` server connection.

    After ``terminate`` no frame is ever written again: further ``send``
    calls raise ``ConnectionTerminatedError``.

    Attributes:
        ws: The underlying websockets connection.
        peer (str): Remote address for logging.
    """

    def __init__(self, ws: Any) -> None:
        self.ws = ws
        self.peer = str(getattr(ws, "remote_address", None) or "unknown")
        self._terminated = False

    @property
    def is_open(self) -> bool:
        return not self._terminated

    async def send(self, text: str) -> None:
        if self._terminated:
            raise ConnectionTerminatedError(
                "Connection already terminated", data={"peer": self.peer}
            )
        try:
            await self.ws.send(text)
        except websockets.exceptions.ConnectionClosed as e:
            self._terminated = True
            raise ConnectionTerminatedError(
                f"WebSocket closed while sending: {str(e)}", data={"peer": self.peer}
            ) from e
        except OSError as e:
            raise NetworkError(
                f"WebSocket send failed: {str(e)}", data={"peer": self.peer}
            ) from e

    async def terminate(self) -> None:
        if self._terminated:
            return
        self._terminated = True
        try:
            await self.ws.close(code=1001, reason="ping timeout")
        except Exception as e:  # noqa: BLE001
            logging.warning(f"⚠️ WebSocket close error: {str(e)}")

    async def lines(self) -> AsyncIterator[str]:
        """Yield inbound lines until the peer disconnects or we terminate."""
        try:
            async for frame in self.ws:
                if self._terminated:
                    return
                for line in split_lines(frame):
                    yield line
        except websockets.exceptions.ConnectionClosed as e:
            logging.debug(f"🔌 WebSocket closed by peer {self.peer}: {str(e)}")


__all__ = ["WebSocketTransport", "split_lines"]
