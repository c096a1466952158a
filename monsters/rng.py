"""Seedable 32-bit Mersenne Twister random source."""

from __future__ import annotations

import math
import random
import struct

_MASK32 = 0xFFFFFFFF
_U32_MAX = 0xFFFFFFFF
_STATE_SIZE = 624
DEFAULT_SEED = 5489


def _to_f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _genrand_state(seed: int) -> tuple[int, ...]:
    state = [seed & _MASK32]
    for i in range(1, _STATE_SIZE):
        prev = state[-1]
        state.append((1812433253 * (prev ^ (prev >> 30)) + i) & _MASK32)
    return tuple(state)


class Random:
    """MT19937 generator that reproduces the standard 32-bit engine sequence."""

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self._engine = random.Random()
        self.set_seed(seed)

    def set_seed(self, seed: int) -> None:
        """Reset the engine state from a 32-bit seed."""
        state = _genrand_state(seed)
        self._engine.setstate((3, state + (_STATE_SIZE,), None))

    def next_u32(self) -> int:
        """Return the next raw 32-bit output of the engine."""
        return self._engine.getrandbits(32)

    def uint(self, low: int, high: int) -> int:
        """Return an integer in [low, high] using modulo reduction."""
        if high < low:
            raise ValueError(f"empty range: {low}..{high}")
        span = high - low + 1
        if span > _U32_MAX:
            raise ValueError("range exceeds 32 bits")
        return low + self.next_u32() % span

    def uniform(self) -> float:
        """Return a single-precision float in [0, 1]."""
        return _to_f32(_to_f32(float(self.next_u32())) / _to_f32(float(_U32_MAX)))

    def vec3(self, low: float = 0.0, high: float = 1.0) -> tuple[float, float, float]:
        """Return three floats, each scaled into [low, high]."""
        width = high - low
        return (
            self.uniform() * width + low,
            self.uniform() * width + low,
            self.uniform() * width + low,
        )

    def in_unit_sphere(self) -> tuple[float, float, float]:
        """Return a random direction of unit length."""
        x, y, z = self.vec3(-1.0, 1.0)
        length = math.sqrt(x * x + y * y + z * z)
        return (x / length, y / length, z / length)