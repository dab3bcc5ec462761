"""Window id generators."""

from __future__ import annotations

import random
import string
from typing import Protocol

_BASE36 = string.digits + string.ascii_lowercase


class IdSource(Protocol):
    """Anything that hands out window ids."""

    def next_id(self) -> str: ...


class CounterIdSource:
    """Monotonically increasing ids: ``w1``, ``w2``, ..."""

    def __init__(self, prefix: str = "w", start: int = 1) -> None:
        self.prefix = prefix
        self._next = start

    def next_id(self) -> str:
        value = f"{self.prefix}{self._next}"
        self._next += 1
        return value


class RandomIdSource:
    """Random base-36 ids that never repeat within one source."""

    def __init__(self, length: int = 9, rng: random.Random | None = None) -> None:
        self.length = length
        self._rng = rng or random.Random()
        self._issued: set[str] = set()

    def next_id(self) -> str:
        while True:
            value = "".join(self._rng.choice(_BASE36) for _ in range(self.length))
            if value not in self._issued:
                self._issued.add(value)
                return value


def build_id_source(kind: str) -> IdSource:
    """Build an id source from its settings name."""
    if kind == "random":
        return RandomIdSource()
    if kind == "counter":
        return CounterIdSource()
    raise ValueError(f"Unknown id source: {kind}")
