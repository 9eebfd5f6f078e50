"""Channel and user entities held by the registries."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False, slots=True)
class User:
    """A chatter known to the server.

    Identity is the object itself: two sessions may create distinct users
    that share a username.
    """

    id: str
    username: str
    color: str


@dataclass(eq=False, slots=True)
class Channel:
    """A chat room.

    Attributes:
        id: Opaque identifier used as the ``room-id``/``channelid`` tag.
        name: Registry key, without the leading ``#``.
        is_connected: True once a client explicitly joined the channel.
    """

    id: str
    name: str
    is_connected: bool = False
    _members: dict[int, User] = field(default_factory=dict, repr=False)

    @property
    def members(self) -> list[User]:
        return list(self._members.values())

    @property
    def is_empty(self) -> bool:
        return not self._members

    def connect(self) -> None:
        self.is_connected = True

    def add_user(self, user: User) -> bool:
        """Add ``user`` as a member; returns False if it already was one."""
        key = id(user)
        if key in self._members:
            return False
        self._members[key] = user
        return True

    def has_member(self, user: User) -> bool:
        return id(user) in self._members


__all__ = ["Channel", "User"]
