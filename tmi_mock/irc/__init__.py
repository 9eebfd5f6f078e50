"""IRC subsystem package.

Contains command recognition, reply builders, tag serialization, chat
synthesis and the protocol interpreter for the TMI dialect.
"""

from .commands import Command, parse_command  # noqa: F401
from .interpreter import ProtocolInterpreter, interpret  # noqa: F401
from .models import CommandResult, CommandType  # noqa: F401
from .tags import serialize_tags  # noqa: F401

__all__ = [
    "Command",
    "CommandResult",
    "CommandType",
    "ProtocolInterpreter",
    "interpret",
    "parse_command",
    "serialize_tags",
]
