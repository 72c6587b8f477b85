"""Seeded random numbers that are reproducible across runs and platforms.

The seed is hashed with xmur3 and the first hash output drives a mulberry32
generator. Everything is 32-bit unsigned arithmetic with explicit masking,
so a given seed yields the same float sequence on every platform.
"""

from __future__ import annotations

from typing import Iterator

_MASK = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def _code_units(seed: str | bytes) -> list[int]:
    if isinstance(seed, bytes):
        return list(seed)
    data = seed.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def xmur3(seed: str | bytes) -> Iterator[int]:
    units = _code_units(seed)
    h = (1779033703 ^ len(units)) & _MASK
    for unit in units:
        h = _imul(h ^ unit, 3432918353)
        h = ((h << 13) | (h >> 19)) & _MASK
    while True:
        h = _imul(h ^ (h >> 16), 2246822507)
        h = _imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        yield h


class Rng:
    """mulberry32 generator. Restart it only by seeding a new one."""

    def __init__(self, state: int) -> None:
        self._state = state & _MASK

    def next(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / 4294967296

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.next()


def seed_rng(seed: str | bytes) -> Rng:
    return Rng(next(xmur3(seed)))
