"""
Fixtures for transport and provider doubles.
"""

from __future__ import annotations

import asyncio
import itertools
import random
from collections.abc import AsyncIterator, Iterable

from tmi_mock.errors.internal import ConnectionTerminatedError
from tmi_mock.identity import RuntimeProviders

# 2024-01-15T00:00:00Z
FIXED_NOW_MS = 1705276800000


class FakeTransport:
    """Records frames instead of writing them to a socket."""

    def __init__(self) -> None:
        self.sent: list[str] = []
        self.terminate_calls = 0
        self.sends_after_terminate = 0
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    async def send(self, text: str) -> None:
        if not self._open:
            self.sends_after_terminate += 1
            raise ConnectionTerminatedError("Connection already terminated")
        self.sent.append(text)

    async def terminate(self) -> None:
        self.terminate_calls += 1
        self._open = False


class SequenceIdentityGenerator:
    """Hands out usernames from a fixed list, then numbered fallbacks."""

    def __init__(self, names: list[str], prefix: str = "chatter") -> None:
        self._names = list(names)
        self._prefix = prefix
        self._counter = 0

    def generate_username(self) -> str:
        if self._names:
            return self._names.pop(0)
        self._counter += 1
        return f"{self._prefix}{self._counter}"


class ScriptedRandom(random.Random):
    """Random whose ``random()`` draws come from a fixed script."""

    def __init__(self, draws: Iterable[float], seed: int = 0) -> None:
        super().__init__(seed)
        self._draws = list(draws)

    def random(self) -> float:  # type: ignore[override]
        if self._draws:
            return self._draws.pop(0)
        return 0.0


class FailingIdentityGenerator:
    def generate_username(self) -> str:
        raise RuntimeError("identity source unavailable")


def make_providers(
    names: list[str] | None = None,
    rng: random.Random | None = None,
    now: int = FIXED_NOW_MS,
) -> RuntimeProviders:
    counter = itertools.count(1)
    return RuntimeProviders(
        identity=SequenceIdentityGenerator(names or []),
        clock=lambda: now,
        new_id=lambda: f"id-{next(counter)}",
        rng=rng or random.Random(1234),
    )


async def iterate_lines(lines: Iterable[str]) -> AsyncIterator[str]:
    for line in lines:
        yield line


class SlowTransport(FakeTransport):
    """FakeTransport whose ``send`` yields to the loop for ``delay`` seconds."""

    def __init__(self, delay: float) -> None:
        super().__init__()
        self.delay = delay

    async def send(self, text: str) -> None:
        await asyncio.sleep(self.delay)
        await super().send(text)


class FailingTransport(FakeTransport):
    """FakeTransport whose ``send`` always raises ``error``."""

    def __init__(self, error: BaseException) -> None:
        super().__init__()
        self.error = error
        self.send_attempts = 0

    async def send(self, text: str) -> None:
        self.send_attempts += 1
        raise self.error
