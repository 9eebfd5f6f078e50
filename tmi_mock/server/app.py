"""Mock chat server: accepts WebSocket clients and shares the registries."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import websockets

from ..config.model import ServerConfig
from ..errors.internal import NetworkError
from ..identity import RuntimeProviders
from ..irc.interpreter import ProtocolInterpreter
from ..registry.channels import ChannelRegistry
from ..registry.users import UserRegistry
from ..utils.retry import retry_async
from .connection import ClientConnection
from .transport import WebSocketTransport


class MockChatServer:
    """Owns the listener, the shared registries and the live connections.

    Attributes:
        config: Effective server configuration.
        providers: Identity/clock/id/randomness sources shared by all sessions.
        channels: Process-wide channel registry.
        users: Process-wide user registry.
        interpreter: Interpreter bound to the registries above.
        connections: Connections currently being served.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        providers: RuntimeProviders | None = None,
    ) -> None:
        self.config = config or ServerConfig()
        self.providers = providers or RuntimeProviders()
        self.channels = ChannelRegistry(self.providers)
        self.users = UserRegistry(self.providers)
        self.interpreter = ProtocolInterpreter(
            self.channels,
            self.users,
            self.providers,
            synthesize_threshold=self.config.synthesize_user_threshold,
        )
        self.connections: set[ClientConnection] = set()
        self._server: Any = None
        self._stop_event = asyncio.Event()

    @property
    def port(self) -> int:
        """Bound port (useful when configured with port 0)."""
        if self._server is None:
            return self.config.port
        for sock in self._server.sockets:
            return sock.getsockname()[1]
        return self.config.port

    async def start(self) -> None:
        """Bind the listening socket, retrying while the address is busy.

        Raises:
            RetryExhaustedError: If every bind attempt failed.
        """
        if self._server is not None:
            return

        async def bind(attempt: int) -> Any:
            try:
                return await websockets.serve(
                    self.handle,
                    self.config.host_address,
                    self.config.port,
                    ping_interval=None,
                )
            except OSError as e:
                raise NetworkError(
                    f"Failed to bind {self.config.host_address}:{self.config.port}: {str(e)}",
                    data={"attempt": attempt},
                ) from e

        self._server = await retry_async(
            bind,
            context="listener bind",
            max_attempts=self.config.bind_max_attempts,
            max_backoff=self.config.bind_max_backoff,
        )
        self._stop_event.clear()
        logging.info(f"🚀 Server started. Listening on port {self.port}...")

    async def handle(self, ws: Any, *_: Any) -> None:
        """websockets connection handler; one call per client."""
        transport = WebSocketTransport(ws)
        connection = ClientConnection(
            transport,
            self.interpreter,
            ping_interval=self.config.ping_interval,
            pong_timeout=self.config.pong_timeout,
        )
        self.connections.add(connection)
        try:
            await connection.run(transport.lines())
        finally:
            self.connections.discard(connection)

    async def serve_forever(self) -> None:
        await self.start()
        await self._stop_event.wait()

    def request_stop(self) -> None:
        self._stop_event.set()

    async def stop(self) -> None:
        """Close the listener and every live connection."""
        self._stop_event.set()
        if self._server is None:
            return
        server, self._server = self._server, None
        for connection in list(self.connections):
            await connection.close()
        server.close()
        await server.wait_closed()
        logging.info("✅ Server stopped")

    async def __aenter__(self) -> MockChatServer:
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.stop()


__all__ = ["MockChatServer"]
