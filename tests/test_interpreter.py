from __future__ import annotations

import asyncio

import pytest

from tmi_mock.irc.interpreter import ProtocolInterpreter, interpret
from tmi_mock.irc.models import CommandType
from tmi_mock.irc.replies import join_block
from tmi_mock.registry import ChannelRegistry, UserRegistry
from tmi_mock.session.state import SessionField, SessionState
from tests.fixtures.tag_fixtures import split_tagged_line
from tests.fixtures.transport_fixtures import (
    FailingIdentityGenerator,
    ScriptedRandom,
    make_providers,
)


@pytest.mark.asyncio
async def test_capability_request_returns_write(interpreter, session):
    result = await interpreter.interpret("CAP REQ :a b", session)
    assert result.type is CommandType.CAPABILITIES
    assert result.response is None
    assert result.write.field is SessionField.CAPABILITIES
    assert result.write.value == ["a", "b"]
    assert session.capabilities is None  # not applied by the interpreter


@pytest.mark.asyncio
async def test_nick_and_pass_return_writes(interpreter, session):
    nick = await interpreter.interpret("NICK viewer", session)
    assert nick.type is CommandType.USERNAME
    assert (nick.write.field, nick.write.value) == (SessionField.USERNAME, "viewer")
    token = await interpreter.interpret("PASS oauth:xyz", session)
    assert token.type is CommandType.TOKEN
    assert (token.write.field, token.write.value) == (SessionField.TOKEN, "oauth:xyz")
    assert nick.response is None and token.response is None


@pytest.mark.asyncio
async def test_ping_and_pong(interpreter, session):
    ping = await interpreter.interpret("PING", session)
    assert ping.response == "PONG"
    assert ping.type is CommandType.PING
    pong = await interpreter.interpret("PONG :tmi.twitch.tv", session)
    assert pong.response is None
    assert pong.cancel_liveness is True
    assert pong.type is CommandType.PONG


@pytest.mark.asyncio
async def test_unknown_command_with_username(interpreter, session):
    session.username = "viewer"
    result = await interpreter.interpret("FOOBAR hello", session)
    assert result.type is CommandType.UNKNOWN
    assert result.command == "FOOBAR"
    assert result.response == ":tmi.twitch.tv 421 viewer FOOBAR :Unknown command"


@pytest.mark.asyncio
async def test_unknown_command_without_username(interpreter, session):
    result = await interpreter.interpret("FOOBAR hello", session)
    assert result.response == ":tmi.twitch.tv 421  FOOBAR :Unknown command"


class TestJoin:
    """JOIN responses and idempotence."""

    @pytest.mark.asyncio
    async def test_join_response_block(self, interpreter, session, channels):
        session.username = "viewer"
        result = await interpreter.interpret("JOIN #room", session)
        channel = await channels.get("room")
        assert result.type is CommandType.CHANNELS
        assert result.response == join_block("viewer", "room", channel.id)
        assert result.response.split("\r\n") == [
            ":viewer!viewer@viewer.tmi.twitch.tv JOIN #room",
            ":viewer.tmi.twitch.tv 353 viewer = #room :viewer",
            ":viewer.tmi.twitch.tv 366 viewer #room :End of /NAMES list",
            (
                "@emote-only=0;followers-only=-1;r9k=0;rituals=0;"
                f"room-id={channel.id};slow=0;subs-only=0 :tmi.twitch.tv ROOMSTATE #room"
            ),
        ]

    @pytest.mark.asyncio
    async def test_join_twice_is_idempotent(self, interpreter, session, channels, users):
        session.username = "viewer"
        first = await interpreter.interpret("JOIN #room", session)
        second = await interpreter.interpret("JOIN #room", session)
        channel = await channels.get("room")
        assert first.response == second.response
        assert len(channels) == 1
        assert channel.is_connected
        assert [m.username for m in channel.members] == ["viewer"]
        assert len(users) == 1

    @pytest.mark.asyncio
    async def test_join_connects_channel_created_by_chat(self, interpreter, session, channels):
        await interpreter.interpret("PRIVMSG #room :hi", session)
        chat_channel = await channels.get("room")
        assert not chat_channel.is_connected
        session.username = "viewer"
        await interpreter.interpret("JOIN #room", session)
        assert chat_channel.is_connected
        assert (await channels.get("room")) is chat_channel

    @pytest.mark.asyncio
    async def test_concurrent_joins_from_many_sessions(self, interpreter, channels):
        sessions = [SessionState(username=f"user{i}") for i in range(25)]
        results = await asyncio.gather(
            *(interpreter.interpret("JOIN #samechan", s) for s in sessions)
        )
        channel = await channels.get("samechan")
        assert len(channels) == 1
        assert len(channel.members) == 25
        assert {m.username for m in channel.members} == {f"user{i}" for i in range(25)}
        assert all(f"room-id={channel.id};" in r.response for r in results)


class TestChatMessage:
    """PRIVMSG synthesis."""

    @pytest.mark.asyncio
    async def test_empty_channel_synthesizes_user(self, interpreter, session, channels, users):
        result = await interpreter.interpret("PRIVMSG #newchan :hi", session)
        assert result.type is CommandType.MESSAGE
        tags, body = split_tagged_line(result.response)
        assert body == "hi"
        assert tags["username"] == "firstchatter"
        assert tags["channel"] == "newchan"
        channel = await channels.get("newchan")
        assert tags["channelid"] == channel.id
        assert [m.username for m in channel.members] == ["firstchatter"]
        assert "firstchatter" in users

    @pytest.mark.asyncio
    async def test_chat_channel_is_not_connected(self, interpreter, session, channels):
        await interpreter.interpret("PRIVMSG #quiet :hello", session)
        assert (await channels.get("quiet")).is_connected is False

    @pytest.mark.asyncio
    async def test_giftcount_override(self, interpreter, session):
        result = await interpreter.interpret("PRIVMSG #c :hello giftcount=50", session)
        tags, body = split_tagged_line(result.response)
        assert tags["giftcount"] == "50"
        assert tags["totalgiftcount"] == "50"
        assert tags["message"] == "hello giftcount=50"
        assert body == "hello giftcount=50"

    @pytest.mark.asyncio
    async def test_existing_member_reused_below_threshold(self, session):
        providers = make_providers(names=["fresh"], rng=ScriptedRandom([0.1]))
        channels, users = ChannelRegistry(providers), UserRegistry(providers)
        interp = ProtocolInterpreter(channels, users, providers)
        session.username = "alice"
        await interp.interpret("JOIN #room", session)

        result = await interp.interpret("PRIVMSG #room :hey", session)
        tags, _ = split_tagged_line(result.response)
        assert tags["username"] == "alice"
        assert len((await channels.get("room")).members) == 1

    @pytest.mark.asyncio
    async def test_new_user_synthesized_at_threshold(self, session):
        providers = make_providers(names=["new.viewer"], rng=ScriptedRandom([0.75]))
        channels, users = ChannelRegistry(providers), UserRegistry(providers)
        interp = ProtocolInterpreter(channels, users, providers)
        session.username = "alice"
        await interp.interpret("JOIN #room", session)

        result = await interp.interpret("PRIVMSG #room :hey", session)
        tags, _ = split_tagged_line(result.response)
        assert tags["username"] == "newviewer"
        assert {m.username for m in (await channels.get("room")).members} == {
            "alice",
            "newviewer",
        }

    @pytest.mark.asyncio
    async def test_failed_synthesis_leaves_registries_untouched(self, session):
        providers = make_providers()
        providers.identity = FailingIdentityGenerator()
        channels, users = ChannelRegistry(providers), UserRegistry(providers)
        interp = ProtocolInterpreter(channels, users, providers)

        with pytest.raises(RuntimeError):
            await interp.interpret("PRIVMSG #ghost :boo", session)
        assert "ghost" not in channels
        assert len(users) == 0

    @pytest.mark.asyncio
    async def test_malformed_privmsg_is_unknown(self, interpreter, session, channels):
        session.username = "viewer"
        result = await interpreter.interpret("PRIVMSG nochannel", session)
        assert result.type is CommandType.UNKNOWN
        assert result.response == ":tmi.twitch.tv 421 viewer PRIVMSG :Unknown command"
        assert len(channels) == 0

    @pytest.mark.asyncio
    async def test_concurrent_chat_on_new_channel(self, interpreter, channels):
        sessions = [SessionState() for _ in range(10)]
        await asyncio.gather(
            *(interpreter.interpret("PRIVMSG #rush :go", s) for s in sessions)
        )
        assert len(channels) == 1


@pytest.mark.asyncio
async def test_module_level_interpret(channels, users, providers, session):
    result = await interpret("PING", session, channels, users, providers)
    assert result.response == "PONG"
