"""
Client-side decoding of tagged server lines, for asserting on replies.
"""

from __future__ import annotations

_UNESCAPES = {"\\": "\\", ":": ";", "s": " ", "r": "\r", "n": "\n"}


def _unescape(value: str) -> str:
    out: list[str] = []
    chars = iter(value)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        out.append(_UNESCAPES.get(nxt, nxt))
    return "".join(out)


def parse_tags(raw_tags: str) -> dict[str, str]:
    """Decode a tag section (with or without the leading ``@``)."""
    tags: dict[str, str] = {}
    for tag in raw_tags.removeprefix("@").split(";"):
        if tag:
            key, _, value = tag.partition("=")
            tags[key] = _unescape(value)
    return tags


def split_tagged_line(line: str) -> tuple[dict[str, str], str]:
    """Split ``@tags rest`` into decoded tags and the rest of the line."""
    if not line.startswith("@"):
        return {}, line
    raw_tags, _, rest = line.partition(" ")
    return parse_tags(raw_tags), rest
