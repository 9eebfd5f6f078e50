"""Server reply builders.

Every literal the server writes lives here so the wire format can be read
in one place.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..constants import SERVER_HOST

CRLF = "\r\n"
PING = "PING"
PONG = "PONG"


def join_block(username: str, channel: str, channel_id: str, host: str = SERVER_HOST) -> str:
    """JOIN echo, NAMES list and ROOMSTATE for a freshly joined channel."""
    return CRLF.join(
        [
            f":{username}!{username}@{username}.{host} JOIN #{channel}",
            f":{username}.{host} 353 {username} = #{channel} :{username}",
            f":{username}.{host} 366 {username} #{channel} :End of /NAMES list",
            (
                "@emote-only=0;followers-only=-1;r9k=0;rituals=0;"
                f"room-id={channel_id};slow=0;subs-only=0 :{host} ROOMSTATE #{channel}"
            ),
        ]
    )


def capability_ack(capabilities: Sequence[str], host: str = SERVER_HOST) -> str:
    return f":{host} CAP * ACK :{' '.join(capabilities)}"


def welcome_block(username: str, host: str = SERVER_HOST) -> str:
    """RPL_WELCOME through RPL_ENDOFMOTD."""
    return CRLF.join(
        [
            f":{host} 001 {username} :Welcome, GLHF!",
            f":{host} 002 {username} :Your host is {host}",
            f":{host} 003 {username} :This server is rather new",
            f":{host} 004 {username} :-",
            f":{host} 375 {username} :-",
            f":{host} 372 {username} :You are in a maze of twisty passages, all alike.",
            f":{host} 376 {username} :>",
        ]
    )


def handshake_frames(
    capabilities: Sequence[str], username: str, host: str = SERVER_HOST
) -> list[str]:
    """Frames sent once the handshake completes, in order: CAP ACK, welcome, PING."""
    return [capability_ack(capabilities, host), welcome_block(username, host), PING]


def unknown_command(username: str, command: str, host: str = SERVER_HOST) -> str:
    return f":{host} 421 {username} {command} :Unknown command"


__all__ = [
    "CRLF",
    "PING",
    "PONG",
    "join_block",
    "capability_ack",
    "welcome_block",
    "handshake_frames",
    "unknown_command",
]
