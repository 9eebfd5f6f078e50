"""Inbound command recognition.

``parse_command`` turns a raw line into exactly one of the command
variants below. It performs no side effects; the interpreter decides what
each variant does to the registries and the session.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ..errors.internal import ParsingError
from .models import CommandType

CAP_REQ_PREFIX = "CAP REQ :"
JOIN_PREFIX = "JOIN "
NICK_PREFIX = "NICK "
PASS_PREFIX = "PASS "

_PRIVMSG_RE = re.compile(r"^PRIVMSG #(\w+) :(\S*)(.*)$")


@dataclass(frozen=True, slots=True)
class CapabilityRequest:
    raw: str
    capabilities: list[str] = field(default_factory=list)
    command = "CAP REQ"
    type = CommandType.CAPABILITIES


@dataclass(frozen=True, slots=True)
class JoinChannel:
    raw: str
    channel: str
    command = "JOIN"
    type = CommandType.CHANNELS


@dataclass(frozen=True, slots=True)
class SetNickname:
    raw: str
    username: str
    command = "NICK"
    type = CommandType.USERNAME


@dataclass(frozen=True, slots=True)
class SetToken:
    raw: str
    token: str
    command = "PASS"
    type = CommandType.TOKEN


@dataclass(frozen=True, slots=True)
class Ping:
    raw: str
    command = "PING"
    type = CommandType.PING


@dataclass(frozen=True, slots=True)
class Pong:
    raw: str
    command = "PONG"
    type = CommandType.PONG


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """A ``PRIVMSG`` to a channel.

    Attributes:
        channel: Channel name without ``#``.
        trigger: First whitespace-free token of the text (may be empty).
        body: The full text after ``:``; the trigger is its first token.
    """

    raw: str
    channel: str
    trigger: str
    body: str
    command = "PRIVMSG"
    type = CommandType.MESSAGE


@dataclass(frozen=True, slots=True)
class UnknownCommand:
    """Anything unrecognized, including lines that failed a sub-pattern.

    Attributes:
        command: First word of the text before the first colon.
        reason: Why a recognized prefix was rejected, if it was.
    """

    raw: str
    command: str
    reason: str | None = None
    type = CommandType.UNKNOWN


Command = (
    CapabilityRequest
    | JoinChannel
    | SetNickname
    | SetToken
    | Ping
    | Pong
    | ChatMessage
    | UnknownCommand
)


def command_token(raw_line: str) -> str:
    """Return the command word used in the unknown-command reply."""
    head = raw_line.split(":", 1)[0].strip()
    return head.split(" ", 1)[0] if head else ""


def parse_chat_message(raw_line: str) -> ChatMessage:
    """Parse a ``PRIVMSG #channel :text`` line.

    Raises:
        ParsingError: If the line does not have that shape.
    """
    match = _PRIVMSG_RE.match(raw_line)
    if match is None:
        raise ParsingError(
            "PRIVMSG must look like 'PRIVMSG #<channel> :<text>'",
            data={"raw": raw_line},
        )
    channel, trigger, rest = match.groups()
    return ChatMessage(raw=raw_line, channel=channel, trigger=trigger, body=trigger + rest)


def parse_command(raw_line: str) -> Command:
    """Recognize ``raw_line``; prefixes are tried in a fixed order, first match wins."""
    if raw_line.startswith(CAP_REQ_PREFIX):
        return CapabilityRequest(
            raw=raw_line, capabilities=raw_line[len(CAP_REQ_PREFIX):].split(" ")
        )

    if raw_line.startswith(JOIN_PREFIX):
        channel = raw_line[len(JOIN_PREFIX):].strip()
        if channel.startswith("#"):
            channel = channel[1:]
        return JoinChannel(raw=raw_line, channel=channel.strip())

    if raw_line.startswith(NICK_PREFIX):
        return SetNickname(raw=raw_line, username=raw_line[len(NICK_PREFIX):])

    if raw_line.startswith(PASS_PREFIX):
        return SetToken(raw=raw_line, token=raw_line[len(PASS_PREFIX):])

    if raw_line.startswith("PING"):
        return Ping(raw=raw_line)

    if raw_line.startswith("PONG"):
        return Pong(raw=raw_line)

    if raw_line.startswith("PRIVMSG"):
        try:
            return parse_chat_message(raw_line)
        except ParsingError as e:
            logging.debug(f"⚠️ Malformed PRIVMSG treated as unknown: {e} (raw={raw_line!r})")
            return UnknownCommand(raw=raw_line, command=command_token(raw_line), reason=str(e))

    return UnknownCommand(raw=raw_line, command=command_token(raw_line))


__all__ = [
    "Command",
    "CapabilityRequest",
    "JoinChannel",
    "SetNickname",
    "SetToken",
    "Ping",
    "Pong",
    "ChatMessage",
    "UnknownCommand",
    "command_token",
    "parse_chat_message",
    "parse_command",
]
