"""Marsaglia's multiply-with-carry pseudo-random number generator."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF


class MultiplyWithCarry:
    """A 32-bit multiply-with-carry generator seeded with one integer."""

    def __init__(self, seed: int) -> None:
        w = seed & _MASK32
        z = ~seed & _MASK32
        if w in (0, 0x464FFFFF):
            w += 1
        if z in (0, 0x9068FFFF):
            z += 1
        self._w = w
        self._z = z

    def next(self) -> int:
        """Advance the generator and return a 32-bit unsigned value."""
        self._z = (36969 * (self._z & 0xFFFF) + (self._z >> 16)) & _MASK32
        self._w = (18000 * (self._w & 0xFFFF) + (self._w >> 16)) & _MASK32
        return ((self._z << 16) + self._w) & _MASK32

    def __iter__(self) -> "MultiplyWithCarry":
        return self

    def __next__(self) -> int:
        return self.next()