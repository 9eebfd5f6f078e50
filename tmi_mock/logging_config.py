"""Logging setup and structured error lines for the mock chat server.

Log output goes through colorlog. Errors logged with
``log_structured_error`` are also counted per category so the process can
print a one-line-per-category report when it exits.
"""

import atexit
import logging
import os
import sys
from collections import Counter
from typing import Any

import colorlog

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}


class ErrorCounter:
    """Per-category error counts, plus the last message seen for each."""

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()
        self.last_message: dict[str, str] = {}

    def record(self, error_type: str, message: str) -> None:
        self.counts[error_type] += 1
        self.last_message[error_type] = message

    def reset(self) -> None:
        self.counts.clear()
        self.last_message.clear()

    def log_report(self) -> None:
        if not self.counts:
            logging.info("📊 No errors recorded")
            return
        logging.warning("📊 Errors recorded during this run:")
        for error_type, count in self.counts.most_common():
            logging.warning(f"  {error_type}: {count} (last: {self.last_message[error_type]})")


error_counts = ErrorCounter()


class ConsoleHandler(logging.StreamHandler):
    """Colored stderr handler installed by ``LoggerConfigurator``."""


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Emit ``[TYPE] message | Exception: ... | Context: k=v ...`` and count it.

    Args:
        error_type: Category such as 'network', 'parsing' or 'liveness'.
        message: What went wrong.
        exception: The exception behind it, if any.
        context: Correlation data (session id, raw line, ...).
        level: Logging level for the line.
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_counts.record(error_type, message)


def _debug_enabled(config: dict[str, Any]) -> bool:
    if config.get("debug"):
        return True
    return os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")


class LoggerConfigurator:
    """Installs the colored stderr handler on the root logger.

    ``configure`` may be called more than once (first with defaults, then
    with the loaded configuration); the handler and the exit report are
    installed only once.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}

    def configure(self) -> None:
        root = logging.getLogger()
        root.setLevel(logging.DEBUG if _debug_enabled(self.config) else logging.INFO)

        if not any(isinstance(h, ConsoleHandler) for h in root.handlers):
            handler = ConsoleHandler(sys.stderr)
            handler.setFormatter(
                colorlog.ColoredFormatter(
                    LOG_FORMAT,
                    datefmt="%Y-%m-%d %H:%M:%S",
                    log_colors=LOG_COLORS,
                    secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
                )
            )
            root.addHandler(handler)
            atexit.register(error_counts.log_report)

        # websockets logs every frame at DEBUG
        logging.getLogger("websockets").setLevel(logging.INFO)


__all__ = ["ConsoleHandler", "ErrorCounter", "LoggerConfigurator", "error_counts", "log_structured_error"]
