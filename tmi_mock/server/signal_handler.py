"""SignalHandler - handles system signals and shutdown coordination."""

import logging
import signal
from collections.abc import Callable


class SignalHandler:
    """Handler for system signals and shutdown coordination.

    Args:
        on_shutdown: Called once, on the first SIGINT/SIGTERM.
    """

    def __init__(self, on_shutdown: Callable[[], None] | None = None) -> None:
        self.shutdown_initiated = False
        self.on_shutdown = on_shutdown

    def stop(self) -> None:
        """Initiate shutdown (idempotent)."""
        if self.shutdown_initiated:
            return
        self.shutdown_initiated = True
        if self.on_shutdown is not None:
            self.on_shutdown()

    def setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown on SIGINT/SIGTERM."""

        def handler(signum: int, _frame: object | None) -> None:  # noqa: D401
            if self.shutdown_initiated:
                return
            logging.warning(
                f"🛑 Signal received - initiating shutdown (signal={signum})"
            )
            self.stop()

        signal.signal(signal.SIGINT, handler)
        signal.signal(signal.SIGTERM, handler)
