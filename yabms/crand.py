"""Deterministic pseudo-random numbers matching the C library ``rand()``.

The benchmarks seed the generator with a fixed value so that every run works
on the same input data. This module reproduces the additive feedback
generator used by the GNU C library (``TYPE_3``, degree 31, separation 3),
so seeded sequences are identical to those of the native benchmarks.
"""

from __future__ import annotations

from collections import deque

RAND_MAX = 0x7FFFFFFF

_MASK32 = 0xFFFFFFFF
_DEGREE = 31
_SEPARATION = 3
_DISCARD = 10 * _DEGREE


def _to_int32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _trunc_divmod(numerator: int, denominator: int) -> tuple[int, int]:
    """Division and remainder rounding toward zero, as C does."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return quotient, numerator - quotient * denominator


class CRand:
    """A seeded generator whose ``rand()`` returns values in ``[0, RAND_MAX]``."""

    RAND_MAX = RAND_MAX

    def __init__(self, seed: int) -> None:
        seed &= _MASK32
        if seed == 0:
            seed = 1

        word = _to_int32(seed)
        initial = [word]
        for _ in range(1, _DEGREE):
            hi, lo = _trunc_divmod(word, 127773)
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            initial.append(word)
        initial.extend(initial[:_SEPARATION])

        self._state: deque[int] = deque(
            (value & _MASK32 for value in initial[_SEPARATION:]), maxlen=_DEGREE
        )
        for _ in range(_DISCARD):
            self._step()

    def _step(self) -> int:
        value = (self._state[0] + self._state[-_SEPARATION]) & _MASK32
        self._state.append(value)
        return value

    def rand(self) -> int:
        """Return the next pseudo-random integer."""
        return self._step() >> 1