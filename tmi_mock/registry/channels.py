"""Process-wide channel registry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from ..identity import RuntimeProviders
from .models import Channel, User


class ChannelTable:
    """Unlocked view over the channel map.

    Only handed out by ``ChannelRegistry.locked()``; callers must not keep
    it past the ``async with`` block.
    """

    def __init__(self, channels: dict[str, Channel], providers: RuntimeProviders) -> None:
        self._channels = channels
        self._providers = providers

    def get(self, name: str) -> Channel | None:
        return self._channels.get(name)

    def new_channel(self, name: str, *, connected: bool = False) -> Channel:
        """Build a channel with a fresh id without registering it."""
        return Channel(id=self._providers.new_id(), name=name, is_connected=connected)

    def insert(self, channel: Channel) -> None:
        """Register ``channel``.

        Raises:
            ValueError: If a channel with the same name is already registered.
        """
        if channel.name in self._channels:
            raise ValueError(f"channel {channel.name!r} already registered")
        self._channels[channel.name] = channel
        logging.debug(
            f"📺 Registered channel #{channel.name} (id={channel.id}, connected={channel.is_connected})"
        )

    def get_or_create(self, name: str, *, connected: bool = False) -> Channel:
        channel = self._channels.get(name)
        if channel is None:
            channel = self.new_channel(name, connected=connected)
            self.insert(channel)
        return channel


class ChannelRegistry:
    """Maps channel names to channels, one lock for the whole map.

    Compound operations that must not be interleaved with other
    connections (look up, decide, insert) run inside ``locked()``. When a
    caller also needs the user registry, the channel lock is taken first.
    """

    def __init__(self, providers: RuntimeProviders | None = None) -> None:
        self._providers = providers or RuntimeProviders()
        self._channels: dict[str, Channel] = {}
        self._lock = asyncio.Lock()
        self._table = ChannelTable(self._channels, self._providers)

    def __len__(self) -> int:
        return len(self._channels)

    def __contains__(self, name: object) -> bool:
        return name in self._channels

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[ChannelTable]:
        async with self._lock:
            yield self._table

    async def get(self, name: str) -> Channel | None:
        async with self.locked() as table:
            return table.get(name)

    async def insert(self, channel: Channel) -> None:
        async with self.locked() as table:
            table.insert(channel)

    async def get_or_create(self, name: str, *, connected: bool = False) -> Channel:
        async with self.locked() as table:
            return table.get_or_create(name, connected=connected)

    async def join(self, name: str, user: User) -> Channel:
        """Connect ``name`` (creating it if needed) and add ``user`` as a member."""
        async with self.locked() as table:
            channel = table.get_or_create(name, connected=True)
            if not channel.is_connected:
                channel.connect()
            channel.add_user(user)
            return channel


__all__ = ["ChannelRegistry", "ChannelTable"]
