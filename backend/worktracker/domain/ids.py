"""Identifier strategies for new work entries."""

import time
from collections.abc import Callable
from uuid import uuid4

IdGenerator = Callable[[], str]


def uuid_id_generator() -> str:
    return str(uuid4())


class TimestampIdGenerator:
    """Milliseconds-since-epoch ids, strictly increasing within a process.

    When the clock repeats a millisecond (or steps backwards) the previous
    value plus one is issued instead, so an id is never handed out twice.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        now = int(self._clock() * 1000)
        if now <= self._last:
            now = self._last + 1
        self._last = now
        return str(now)


def build_id_generator(strategy: str) -> IdGenerator:
    """Return the generator for a configured strategy name."""
    if strategy == "timestamp":
        return TimestampIdGenerator()
    if strategy == "uuid":
        return uuid_id_generator
    raise ValueError(f"Unknown id strategy '{strategy}'")
