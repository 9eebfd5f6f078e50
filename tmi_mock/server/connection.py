"""One client connection: inbound line loop, handshake and liveness."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterable

from ..constants import PING_INTERVAL_SECONDS, PONG_TIMEOUT_SECONDS
from ..errors.handling import log_error
from ..errors.internal import ConnectionTerminatedError
from ..irc import replies
from ..irc.interpreter import ProtocolInterpreter
from ..irc.models import CommandResult
from ..protocols import TransportProtocol
from ..session.liveness import LivenessSupervisor
from ..session.state import SessionState
from ..utils.helpers import format_duration


class ClientConnection:
    """Drives one session from accept to close.

    Attributes:
        transport: Where replies are written.
        interpreter: Shared interpreter (and through it, the shared registries).
        session: This connection's state.
        supervisor: PING/PONG watchdog for this connection.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        interpreter: ProtocolInterpreter,
        ping_interval: float = PING_INTERVAL_SECONDS,
        pong_timeout: float = PONG_TIMEOUT_SECONDS,
        session: SessionState | None = None,
    ) -> None:
        self.transport = transport
        self.interpreter = interpreter
        self.session = session or SessionState()
        self.supervisor = LivenessSupervisor(
            transport, self.session, interval=ping_interval, timeout=pong_timeout
        )
        self.connected_at = time.monotonic()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def run(self, lines: AsyncIterable[str]) -> None:
        """Process ``lines`` in order until the stream ends, then tear down."""
        logging.info(f"🔌 New client connected (id={self.session.id})")
        self.supervisor.start()
        try:
            async for line in lines:
                if self._closed or self.supervisor.terminated:
                    break
                await self.handle_line(line)
        finally:
            await self.close()

    async def handle_line(self, line: str) -> CommandResult | None:
        """Interpret one line and apply its effects.

        Failures are contained to the line that caused them; the connection
        keeps running.
        """
        logging.debug(f"📨 Message from client (id={self.session.id}): {line!r}")
        try:
            result = await self.interpreter.interpret(line, self.session)
            await self.apply(result)
            return result
        except ConnectionTerminatedError:
            logging.debug(f"🔌 Dropping reply for terminated connection (id={self.session.id})")
            return None
        except asyncio.CancelledError:
            raise
        except Exception as e:  # noqa: BLE001
            log_error(
                "Failed to process client line",
                e,
                context={"session": self.session.id, "line": line},
            )
            return None

    async def apply(self, result: CommandResult) -> None:
        if result.cancel_liveness:
            self.supervisor.acknowledge_pong()
        if result.write is not None:
            self.session.apply(result.write)
        if result.response:
            await self.transport.send(result.response)
        if result.write is not None:
            await self._maybe_acknowledge()

    async def _maybe_acknowledge(self) -> None:
        if not self.session.acknowledge():
            return
        logging.info(
            f"🤝 Acknowledging client (id={self.session.id}, user={self.session.username}, "
            f"caps={' '.join(self.session.capabilities or [])})"
        )
        frames = replies.handshake_frames(
            self.session.capabilities or [], self.session.display_name, self.interpreter.host
        )
        for frame in frames:
            await self.transport.send(frame)

    async def close(self) -> None:
        """Stop liveness supervision; idempotent and local to this connection."""
        if self._closed:
            return
        self._closed = True
        await self.supervisor.stop()
        logging.info(
            f"👋 Client disconnected (id={self.session.id}, "
            f"duration={format_duration(time.monotonic() - self.connected_at)})"
        )


__all__ = ["ClientConnection"]
