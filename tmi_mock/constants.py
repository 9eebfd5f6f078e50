"""
Configuration constants for the mock Twitch chat server

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


# Protocol identity (not configurable: clients match on it)
SERVER_HOST = "tmi.twitch.tv"

# Listener
PORT = _get_env_int("PORT", 3001)  # Listening port
HOST_ADDRESS = _get_env_str("HOST_ADDRESS", "0.0.0.0")  # Bind address
BIND_MAX_ATTEMPTS = _get_env_int(
    "BIND_MAX_ATTEMPTS", 5
)  # Attempts to bind the listening socket before giving up
BIND_MAX_BACKOFF_SECONDS = _get_env_int(
    "BIND_MAX_BACKOFF_SECONDS", 10
)  # Maximum backoff between bind attempts

# Liveness supervision
PING_INTERVAL_SECONDS = _get_env_float(
    "PING_INTERVAL_SECONDS", 30
)  # Seconds between server-initiated PINGs
PONG_TIMEOUT_SECONDS = _get_env_float(
    "PONG_TIMEOUT_SECONDS", 1
)  # Seconds a client has to answer a PING

# Chat synthesis
SYNTHESIZE_USER_THRESHOLD = _get_env_float(
    "SYNTHESIZE_USER_THRESHOLD", 0.75
)  # Random draws >= this fabricate a new chatter instead of reusing a member
DEFAULT_BITS_COUNT = _get_env_int("DEFAULT_BITS_COUNT", 100)
DEFAULT_GIFT_COUNT = _get_env_int("DEFAULT_GIFT_COUNT", 5)
DEFAULT_SUB_MONTHS = _get_env_int("DEFAULT_SUB_MONTHS", 3)
DEFAULT_VIEWER_COUNT = _get_env_int("DEFAULT_VIEWER_COUNT", 10)

# Color-related constants
COLOR_RANDOM_HEX_MAX_ATTEMPTS = _get_env_int(
    "COLOR_RANDOM_HEX_MAX_ATTEMPTS", 10
)  # Max attempts to generate unique random hex color
COLOR_MAX_HUE = _get_env_int("COLOR_MAX_HUE", 359)  # Maximum hue value (0-359 degrees)
COLOR_MIN_SATURATION = _get_env_int(
    "COLOR_MIN_SATURATION", 60
)  # Minimum saturation percentage
COLOR_MAX_SATURATION = _get_env_int(
    "COLOR_MAX_SATURATION", 100
)  # Maximum saturation percentage
COLOR_MIN_LIGHTNESS = _get_env_int(
    "COLOR_MIN_LIGHTNESS", 35
)  # Minimum lightness percentage
COLOR_MAX_LIGHTNESS = _get_env_int(
    "COLOR_MAX_LIGHTNESS", 75
)  # Maximum lightness percentage
COLOR_HUE_SECTOR_SIZE = _get_env_int(
    "COLOR_HUE_SECTOR_SIZE", 60
)  # Hue sector size for HSL to RGB conversion
COLOR_RGB_MAX_VALUE = _get_env_int(
    "COLOR_RGB_MAX_VALUE", 255
)  # Maximum RGB component value
