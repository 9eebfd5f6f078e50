"""Process-wide user registry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from ..color import random_chat_color
from ..identity import RuntimeProviders
from .models import User


class UserRegistry:
    """Maps usernames to users.

    All access goes through a single ``asyncio.Lock`` so concurrent
    get-or-create calls for the same username yield one entity. A later
    ``insert`` under an existing username rebinds the key; users that were
    already handed out (e.g. as channel members) stay valid.
    """

    def __init__(self, providers: RuntimeProviders | None = None) -> None:
        self._providers = providers or RuntimeProviders()
        self._users: dict[str, User] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, username: object) -> bool:
        return username in self._users

    def new_user(self, username: str) -> User:
        """Build a user with a fresh id and color without registering it."""
        return User(
            id=self._providers.new_id(),
            username=username,
            color=random_chat_color(self._providers.rng),
        )

    async def get(self, username: str) -> User | None:
        async with self._lock:
            return self._users.get(username)

    async def insert(self, user: User) -> None:
        async with self._lock:
            self._users[user.username] = user

    async def get_or_create(self, username: str) -> User:
        async with self._lock:
            user = self._users.get(username)
            if user is None:
                user = self.new_user(username)
                self._users[username] = user
                logging.debug(f"👤 Registered user {username!r} (id={user.id})")
            return user

    async def choose_random(self, candidates: Sequence[User]) -> User:
        """Pick one of ``candidates`` uniformly at random.

        Raises:
            ValueError: If ``candidates`` is empty.
        """
        if not candidates:
            raise ValueError("cannot choose from an empty set of users")
        async with self._lock:
            return self._providers.rng.choice(list(candidates))


__all__ = ["UserRegistry"]
