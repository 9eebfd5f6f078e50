"""Configuration assembly from environment-backed constants and CLI overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from .. import constants
from .model import ServerConfig


def _debug_from_env() -> bool:
    return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")


def get_configuration(overrides: Mapping[str, Any] | None = None) -> ServerConfig:
    """Build the server configuration.

    Values come from ``constants`` (each overridable through an environment
    variable of the same name); non-None ``overrides`` win.

    Raises:
        pydantic.ValidationError: If the resulting configuration is invalid.
    """
    data: dict[str, Any] = {
        "host_address": constants.HOST_ADDRESS,
        "port": constants.PORT,
        "ping_interval": constants.PING_INTERVAL_SECONDS,
        "pong_timeout": constants.PONG_TIMEOUT_SECONDS,
        "synthesize_user_threshold": constants.SYNTHESIZE_USER_THRESHOLD,
        "bind_max_attempts": constants.BIND_MAX_ATTEMPTS,
        "bind_max_backoff": constants.BIND_MAX_BACKOFF_SECONDS,
        "debug": _debug_from_env(),
    }
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return ServerConfig.from_dict(data)


def print_config_summary(config: ServerConfig) -> None:
    """Log the effective configuration."""
    logging.info("⚙️ Configuration")
    logging.info(f"👉 Listening on {config.host_address}:{config.port}")
    logging.info(
        f"👉 Liveness: PING every {config.ping_interval:g}s, PONG within {config.pong_timeout:g}s"
    )
    logging.info(f"👉 New chatter threshold: {config.synthesize_user_threshold:g}")
    if config.debug:
        logging.info("👉 Debug logging enabled")
