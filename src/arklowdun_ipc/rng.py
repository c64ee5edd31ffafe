"""Random-number primitives consumed by scenario handlers.

``SeededRng`` is a 32-bit xorshift generator. Its output is bit-for-bit
reproducible for a given seed and draw count, and fixture ids derived from it
must stay stable across releases. ``SystemRng`` is non-reproducible and must
not back any test that asserts exact values.
"""
from __future__ import annotations

import random
from typing import Protocol, runtime_checkable

_MASK_32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0

DEFAULT_SEED = 1


@runtime_checkable
class Rng(Protocol):
    """Capability: produce the next value in ``[0, 1)``."""

    def next(self) -> float: ...


class SeededRng:
    """Deterministic xorshift32 stream.

    The seed is coerced to an unsigned 32-bit value. A seed of ``0`` is a
    fixed point of xorshift and yields ``0.0`` forever.
    """

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self._state = int(seed) & _MASK_32

    @property
    def state(self) -> int:
        return self._state

    def reseed(self, seed: int = DEFAULT_SEED) -> None:
        """Restart the stream from *seed*."""
        self._state = int(seed) & _MASK_32

    def next(self) -> float:
        x = self._state
        x ^= (x << 13) & _MASK_32
        x ^= x >> 17
        x ^= (x << 5) & _MASK_32
        self._state = x
        return x / _TWO_POW_32

    def __repr__(self) -> str:
        return f"SeededRng(state={self._state})"


class SystemRng:
    """True-random stream backed by the operating system."""

    def __init__(self) -> None:
        self._source = random.SystemRandom()

    def next(self) -> float:
        return self._source.random()

    def __repr__(self) -> str:
        return "SystemRng()"
