"""PING/PONG liveness supervision for one client connection."""

from __future__ import annotations

import asyncio
import logging

from ..constants import PING_INTERVAL_SECONDS, PONG_TIMEOUT_SECONDS
from ..errors.handling import log_error
from ..errors.internal import ConnectionTerminatedError, NetworkError
from ..irc.replies import PING
from ..logging_config import log_structured_error
from ..protocols import TransportProtocol
from .state import SessionState


class LivenessSupervisor:
    """Periodically PINGs a client and terminates it if no PONG follows.

    Each tick cancels whatever watchdog is still armed, arms a fresh one and
    then sends ``PING``, so a PONG that arrives while the send is still in
    flight already finds the new watchdog to disarm. When the watchdog fires
    the connection is terminated exactly once.

    Attributes:
        transport: Connection to probe.
        session: Session whose ``pending_liveness_timeout`` holds the watchdog.
        interval: Seconds between PINGs.
        timeout: Seconds allowed for the PONG.
    """

    def __init__(
        self,
        transport: TransportProtocol,
        session: SessionState,
        interval: float = PING_INTERVAL_SECONDS,
        timeout: float = PONG_TIMEOUT_SECONDS,
    ) -> None:
        self.transport = transport
        self.session = session
        self.interval = interval
        self.timeout = timeout
        self._task: asyncio.Task[None] | None = None
        self._termination: asyncio.Task[None] | None = None
        self._terminated = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def terminated(self) -> bool:
        return self._terminated

    def start(self) -> None:
        if self.running or self._terminated:
            return
        self._task = asyncio.create_task(
            self._run(), name=f"liveness-{self.session.id}"
        )

    async def stop(self) -> None:
        """Stop pinging and disarm the watchdog; safe to call repeatedly.

        Never raises: a failure of the ping loop is logged, not propagated
        into connection teardown.
        """
        self.session.cancel_liveness_timeout()
        task, self._task = self._task, None
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as e:  # noqa: BLE001
            log_error("Liveness loop failed", e, context={"session": self.session.id})

    def acknowledge_pong(self) -> None:
        if self.session.cancel_liveness_timeout():
            logging.debug(f"🏓 PONG received in time (session={self.session.id})")

    async def _run(self) -> None:
        while not self._terminated:
            await asyncio.sleep(self.interval)
            try:
                await self.ping()
            except NetworkError as e:
                # The watchdog stays armed: a client we cannot reach won't PONG.
                log_error("Failed to send PING", e, context={"session": self.session.id})

    async def ping(self) -> None:
        """Arm a new watchdog and send one PING.

        Raises:
            NetworkError: If the transport failed to write the PING.
        """
        if self._terminated:
            return
        self.session.cancel_liveness_timeout()
        handle = asyncio.get_running_loop().call_later(self.timeout, self._on_timeout)
        self.session.pending_liveness_timeout = handle
        logging.debug(f"🏓 Pinging client (session={self.session.id})")
        try:
            await self.transport.send(PING)
        except ConnectionTerminatedError:
            handle.cancel()
            if self.session.pending_liveness_timeout is handle:
                self.session.pending_liveness_timeout = None

    def _on_timeout(self) -> None:
        self.session.pending_liveness_timeout = None
        if self._terminated:
            return
        self._terminated = True
        log_structured_error(
            error_type="liveness",
            message="Client didn't PONG in time - terminating connection",
            context={"session": self.session.id, "timeout": self.timeout},
        )
        self._termination = asyncio.create_task(self._terminate())

    async def _terminate(self) -> None:
        await self.transport.terminate()
        await self.stop()


__all__ = ["LivenessSupervisor"]
