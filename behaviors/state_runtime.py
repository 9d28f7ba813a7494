from __future__ import annotations
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class DeterministicRNG:
    """Deterministic RNG for sketches (same seed -> same artwork)."""
    def __init__(self, seed: int = 0):
        self._rng = random.Random(int(seed) & 0xFFFFFFFF)

    def rand(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)


def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo: return lo
    if x > hi: return hi
    return x
