"""IRCv3 message-tag serialization."""

from __future__ import annotations

from collections.abc import Mapping

_ESCAPES = {
    "\\": "\\\\",
    ";": "\\:",
    " ": "\\s",
    "\r": "\\r",
    "\n": "\\n",
}


def format_tag_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return "".join(_ESCAPES.get(ch, ch) for ch in str(value))


def serialize_tags(tags: Mapping[str, object]) -> str:
    """Encode ``tags`` as ``@k=v;k=v`` in mapping order."""
    return "@" + ";".join(f"{key}={format_tag_value(value)}" for key, value in tags.items())


__all__ = ["format_tag_value", "serialize_tags"]
