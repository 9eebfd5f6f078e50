"""In-memory channel and user registries shared by all connections."""

from .channels import ChannelRegistry, ChannelTable
from .models import Channel, User
from .users import UserRegistry

__all__ = ["Channel", "ChannelRegistry", "ChannelTable", "User", "UserRegistry"]
