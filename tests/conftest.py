import os

import pytest
import pytest_asyncio

# Keep liveness timers short for anything that reads the environment
os.environ.setdefault("PING_INTERVAL_SECONDS", "30")
os.environ.setdefault("PONG_TIMEOUT_SECONDS", "1")

from tmi_mock.identity import RuntimeProviders  # noqa: E402
from tmi_mock.irc.interpreter import ProtocolInterpreter  # noqa: E402
from tmi_mock.registry import ChannelRegistry, UserRegistry  # noqa: E402
from tmi_mock.session.state import SessionState  # noqa: E402
from tests.fixtures.transport_fixtures import FakeTransport, make_providers  # noqa: E402


@pytest.fixture
def providers() -> RuntimeProviders:
    return make_providers(names=["first.chatter", "second.chatter", "third.chatter"])


@pytest.fixture
def channels(providers: RuntimeProviders) -> ChannelRegistry:
    return ChannelRegistry(providers)


@pytest.fixture
def users(providers: RuntimeProviders) -> UserRegistry:
    return UserRegistry(providers)


@pytest.fixture
def interpreter(
    channels: ChannelRegistry, users: UserRegistry, providers: RuntimeProviders
) -> ProtocolInterpreter:
    return ProtocolInterpreter(channels, users, providers)


@pytest.fixture
def session() -> SessionState:
    return SessionState(id="session-1")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest_asyncio.fixture
async def running_server():
    """A real server on an ephemeral localhost port."""
    from tmi_mock.config.model import ServerConfig
    from tmi_mock.server.app import MockChatServer

    server = MockChatServer(
        ServerConfig(host_address="127.0.0.1", port=0, ping_interval=30, pong_timeout=1),
        make_providers(names=["e2e.viewer"]),
    )
    await server.start()
    try:
        yield server
    finally:
        await server.stop()
