#!/usr/bin/env python3
"""
Main entry point for the mock Twitch chat server
"""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from .config import get_configuration, print_config_summary
from .config.model import ServerConfig
from .errors.handling import log_error
from .logging_config import LoggerConfigurator
from .server import MockChatServer, SignalHandler


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mock Twitch chat (TMI) server")
    parser.add_argument("--port", type=int, default=None, help="Listening port (default: $PORT or 3001)")
    parser.add_argument("--host", dest="host_address", default=None, help="Bind address")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Validate configuration and exit",
    )
    return parser.parse_args(argv)


async def main(config: ServerConfig) -> None:
    """Run the server until SIGINT/SIGTERM.

    Raises:
        RetryExhaustedError: If the listening port could not be bound.
    """
    server = MockChatServer(config)
    loop = asyncio.get_running_loop()
    signals = SignalHandler(lambda: loop.call_soon_threadsafe(server.request_stop))
    signals.setup_signal_handlers()
    try:
        print_config_summary(config)
        await server.serve_forever()
    finally:
        await server.stop()
        logging.info("🏁 Application shutdown complete")


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: On configuration errors, health-check results or fatal errors.
    """
    args = parse_args(argv)
    overrides = {"port": args.port, "host_address": args.host_address, "debug": args.debug}

    try:
        config = get_configuration(overrides)
    except ValidationError as e:
        LoggerConfigurator().configure()
        logging.error(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    LoggerConfigurator({"debug": config.debug}).configure()

    if args.health_check:
        logging.info(f"✅ Health check passed - port {config.port}")
        sys.exit(0)

    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        sys.exit(0)
    except asyncio.CancelledError:
        sys.exit(0)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
