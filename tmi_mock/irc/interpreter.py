"""Protocol interpreter: one inbound line in, one ``CommandResult`` out."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..constants import SERVER_HOST, SYNTHESIZE_USER_THRESHOLD
from ..identity import RuntimeProviders
from ..registry.channels import ChannelRegistry
from ..registry.models import Channel, User
from ..registry.users import UserRegistry
from ..session.state import SessionField, SessionState, StateWrite
from . import replies
from .commands import (
    CapabilityRequest,
    ChatMessage,
    Command,
    JoinChannel,
    Ping,
    Pong,
    SetNickname,
    SetToken,
    UnknownCommand,
    parse_command,
)
from .models import CommandResult, CommandType
from .synthesis import build_chat_parameters, render_chat_event


class ProtocolInterpreter:
    """Applies parsed commands to the shared registries.

    The interpreter never mutates the session itself: field assignments are
    returned as ``StateWrite`` instructions and PONG handling as a
    ``cancel_liveness`` flag, both applied by the owning connection.
    """

    def __init__(
        self,
        channels: ChannelRegistry,
        users: UserRegistry,
        providers: RuntimeProviders | None = None,
        synthesize_threshold: float = SYNTHESIZE_USER_THRESHOLD,
        host: str = SERVER_HOST,
    ) -> None:
        self.channels = channels
        self.users = users
        self.providers = providers or RuntimeProviders()
        self.synthesize_threshold = synthesize_threshold
        self.host = host
        self._handlers: dict[type, Callable[..., Awaitable[CommandResult]]] = {
            CapabilityRequest: self._on_capabilities,
            JoinChannel: self._on_join,
            SetNickname: self._on_nick,
            SetToken: self._on_pass,
            Ping: self._on_ping,
            Pong: self._on_pong,
            ChatMessage: self._on_chat_message,
            UnknownCommand: self._on_unknown,
        }

    async def interpret(self, raw_line: str, session: SessionState) -> CommandResult:
        command = parse_command(raw_line)
        return await self.dispatch(command, session)

    async def dispatch(self, command: Command, session: SessionState) -> CommandResult:
        handler = self._handlers[type(command)]
        return await handler(command, session)

    async def _on_capabilities(
        self, command: CapabilityRequest, session: SessionState
    ) -> CommandResult:
        return CommandResult(
            command=command.command,
            type=command.type,
            write=StateWrite(SessionField.CAPABILITIES, list(command.capabilities)),
        )

    async def _on_join(self, command: JoinChannel, session: SessionState) -> CommandResult:
        username = session.display_name
        user = await self.users.get_or_create(username)
        channel = await self.channels.join(command.channel, user)
        logging.debug(
            f"📥 {username or '<anonymous>'} joined #{channel.name} "
            f"(members={len(channel.members)}, session={session.id})"
        )
        return CommandResult(
            command=command.command,
            type=command.type,
            response=replies.join_block(username, channel.name, channel.id, self.host),
        )

    async def _on_nick(self, command: SetNickname, session: SessionState) -> CommandResult:
        return CommandResult(
            command=command.command,
            type=command.type,
            write=StateWrite(SessionField.USERNAME, command.username),
        )

    async def _on_pass(self, command: SetToken, session: SessionState) -> CommandResult:
        return CommandResult(
            command=command.command,
            type=command.type,
            write=StateWrite(SessionField.TOKEN, command.token),
        )

    async def _on_ping(self, command: Ping, session: SessionState) -> CommandResult:
        return CommandResult(command=command.command, type=command.type, response=replies.PONG)

    async def _on_pong(self, command: Pong, session: SessionState) -> CommandResult:
        return CommandResult(command=command.command, type=command.type, cancel_liveness=True)

    async def _on_chat_message(
        self, command: ChatMessage, session: SessionState
    ) -> CommandResult:
        channel, user = await self._resolve_chatter(command.channel)
        parameters = build_chat_parameters(channel, user, command.body, self.providers)
        logging.debug(
            f"💬 #{channel.name} {user.username}: {command.body} "
            f"(trigger={command.trigger!r}, session={session.id})"
        )
        return CommandResult(
            command=command.command,
            type=command.type,
            response=render_chat_event(parameters, command.body),
        )

    async def _resolve_chatter(self, channel_name: str) -> tuple[Channel, User]:
        """Find or fabricate the user that "sent" a chat line.

        Nothing is registered until every fallible step succeeded, so a
        failing identity generator leaves both registries untouched.
        """
        async with self.channels.locked() as table:
            channel = table.get(channel_name)
            is_new = channel is None
            if channel is None:
                channel = table.new_channel(channel_name)

            if channel.is_empty or self.providers.rng.random() >= self.synthesize_threshold:
                username = self.providers.identity.generate_username().replace(".", "")
                user = self.users.new_user(username)
                if is_new:
                    table.insert(channel)
                await self.users.insert(user)
                channel.add_user(user)
                logging.debug(f"🎭 Synthesized chatter {username!r} in #{channel_name}")
            else:
                user = await self.users.choose_random(channel.members)
            return channel, user

    async def _on_unknown(
        self, command: UnknownCommand, session: SessionState
    ) -> CommandResult:
        logging.debug(
            f"❓ Unknown command {command.command!r} (session={session.id}, raw={command.raw!r})"
        )
        return CommandResult(
            command=command.command,
            type=CommandType.UNKNOWN,
            response=replies.unknown_command(session.display_name, command.command, self.host),
        )


async def interpret(
    raw_line: str,
    session: SessionState,
    channels: ChannelRegistry,
    users: UserRegistry,
    providers: RuntimeProviders | None = None,
) -> CommandResult:
    """One-shot form of ``ProtocolInterpreter.interpret``."""
    return await ProtocolInterpreter(channels, users, providers).interpret(raw_line, session)


__all__ = ["ProtocolInterpreter", "interpret"]
