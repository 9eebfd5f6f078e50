"""Default identity, clock and id providers.

Randomness and time are gathered in ``RuntimeProviders`` so the interpreter
never reaches for module-level generators directly.
"""

from __future__ import annotations

import random
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from faker import Faker

from .protocols import IdentityGeneratorProtocol


class FakerIdentityGenerator:
    """Generate usernames with Faker's internet provider."""

    def __init__(self, seed: int | None = None) -> None:
        self._faker = Faker()
        if seed is not None:
            self._faker.seed_instance(seed)

    def generate_username(self) -> str:
        return self._faker.user_name()


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def new_unique_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class RuntimeProviders:
    """Injectable sources of identity, time, ids and randomness.

    Attributes:
        identity: Username generator for synthesized chatters.
        clock: Returns the current time as epoch milliseconds.
        new_id: Returns a fresh opaque identifier.
        rng: Random source for member selection, synthesis draws and colors.
    """

    identity: IdentityGeneratorProtocol = field(default_factory=FakerIdentityGenerator)
    clock: Callable[[], int] = now_ms
    new_id: Callable[[], str] = new_unique_id
    rng: random.Random = field(default_factory=random.Random)


__all__ = [
    "FakerIdentityGenerator",
    "RuntimeProviders",
    "now_ms",
    "new_unique_id",
]
