"""Injectable randomness for breeding draws.

Every stochastic operation takes a RandomSource so outcomes are reproducible
under a fixed seed. The only contract is ``next_float() -> [0, 1)``.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """A stream of uniform floats in [0, 1)."""

    def next_float(self) -> float: ...


class SeededRandomSource:
    """RandomSource backed by a private ``random.Random`` instance.

    Args:
        seed: Seed for deterministic streams. None seeds from system entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)
        self.draws = 0

    def next_float(self) -> float:
        self.draws += 1
        return self._random.random()

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self.seed}, draws={self.draws})"


class ScriptedRandomSource:
    """RandomSource that replays a fixed sequence of floats.

    Useful for exercising exact branches of a stochastic operation. Raises
    RuntimeError when the script runs out, so unexpected extra draws are loud.
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values: Iterator[float] = iter(values)
        self.draws = 0

    def next_float(self) -> float:
        try:
            value = next(self._values)
        except StopIteration:
            msg = f"Scripted random source exhausted after {self.draws} draws"
            raise RuntimeError(msg) from None
        if not 0.0 <= value < 1.0:
            msg = f"Scripted value outside [0, 1): {value}"
            raise ValueError(msg)
        self.draws += 1
        return value


def uniform_index(rng: RandomSource, size: int) -> int:
    """Draw a uniform integer in [0, size)."""
    if size <= 0:
        msg = "size must be positive"
        raise ValueError(msg)
    return min(size - 1, int(rng.next_float() * size))
