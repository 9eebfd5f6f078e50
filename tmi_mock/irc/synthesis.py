"""Chat event synthesis for ``PRIVMSG``.

A client "sends" a chat line and the server answers with a fully tagged
chat event, as if a viewer had written it. Tag defaults can be overridden
from the message text with ``key=value`` tokens, which makes it possible
to script sub/gift/bits scenarios from a test client.
"""

from __future__ import annotations

import calendar
import re
from datetime import UTC, datetime
from typing import Any

from ..constants import (
    DEFAULT_BITS_COUNT,
    DEFAULT_GIFT_COUNT,
    DEFAULT_SUB_MONTHS,
    DEFAULT_VIEWER_COUNT,
    SERVER_HOST,
)
from ..identity import RuntimeProviders
from ..registry.models import Channel, User
from .tags import serialize_tags

_KEY_RE = re.compile(r"^[A-Za-z][\w-]*$")
_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?(\d+\.\d*|\.\d+)$")


def coerce_value(value: str) -> Any:
    """Turn numeric-looking override values into numbers."""
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    return value


def _takes_value(token: str) -> bool:
    return bool(token) and not token.startswith("-")


def parse_overrides(body: str) -> dict[str, Any]:
    """Extract tag overrides from a message body.

    Tokens are read the way command-line flags are:
      ``key=value``                    sets ``key``
      ``--key=value``, ``--key value`` sets ``key``
      ``--flag``                       sets ``flag`` to True
      ``--no-flag``                    sets ``flag`` to False
      ``-abc``, ``-x value``           short flags; only the last one takes a value

    A flag only consumes the following token when that token is not itself
    a flag. Values that look numeric become numbers. Everything after a
    bare ``--`` and any other word is ordinary message text.
    """
    overrides: dict[str, Any] = {}
    tokens = body.split(" ")
    i = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1
        if token == "--":
            break
        name = token.lstrip("-")
        dashes = len(token) - len(name)

        if dashes == 0:
            key, sep, raw = token.partition("=")
            if sep and _KEY_RE.match(key):
                overrides[key] = coerce_value(raw)
            continue

        if name.startswith("no-") and _KEY_RE.match(name[3:]):
            overrides[name[3:]] = False
            continue

        name, _, inline = name.partition("=")
        value: Any = True
        if inline:
            value = coerce_value(inline)
        elif i < len(tokens) and _takes_value(tokens[i]):
            value = coerce_value(tokens[i])
            i += 1

        if dashes == 2:
            if _KEY_RE.match(name):
                overrides[name] = value
            continue
        letters = [ch for ch in name if ch.isalnum()]
        for ch in letters[:-1]:
            overrides[ch] = True
        if letters:
            overrides[letters[-1]] = value
    return overrides


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def end_month(timestamp_ms: int, months: int) -> tuple[int, str]:
    """Month reached ``months`` after ``timestamp_ms``.

    Returns:
        tuple[int, str]: Zero-based month index (0 = January) and its English name.
    """
    start = datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)
    index = (start.month - 1 + months) % 12
    return index, calendar.month_name[index + 1]


def build_chat_parameters(
    channel: Channel,
    user: User,
    body: str,
    providers: RuntimeProviders,
) -> dict[str, Any]:
    """Build the tag map for a synthesized chat event.

    Defaults come first, overrides parsed from ``body`` replace or extend
    them, and the derived fields are computed from the final values.
    """
    now = providers.clock()
    parameters: dict[str, Any] = {
        "bitscount": DEFAULT_BITS_COUNT,
        "channel": channel.name,
        "channelid": channel.id,
        "color": user.color,
        "giftcount": DEFAULT_GIFT_COUNT,
        "host": SERVER_HOST,
        "message": body,
        "messageid": providers.new_id(),
        "months": DEFAULT_SUB_MONTHS,
        "timestamp": now,
        "userid": user.id,
        "username": user.username,
        "viewercount": DEFAULT_VIEWER_COUNT,
    }
    parameters.update(parse_overrides(body))

    months = _as_int(parameters["months"], DEFAULT_SUB_MONTHS)
    try:
        index, name = end_month(_as_int(parameters["timestamp"], now), months)
    except (OverflowError, OSError, ValueError):
        # Out-of-range timestamp override; derive from the real clock instead.
        index, name = end_month(now, months)
    parameters["endmonth"] = index
    parameters["endmonthname"] = name

    if "totalgiftcount" not in parameters:
        parameters["totalgiftcount"] = parameters["giftcount"]
    return parameters


def render_chat_event(parameters: dict[str, Any], body: str) -> str:
    return f"{serialize_tags(parameters)} {body}"


__all__ = [
    "build_chat_parameters",
    "coerce_value",
    "end_month",
    "parse_overrides",
    "render_chat_event",
]
