"""A small CPU set stored as a 32-bit mask."""

from __future__ import annotations

_BITS = 32


class CpuSet:
    """A set of CPU numbers in the range ``[0, 32)``."""

    def __init__(self) -> None:
        self.mask = 0

    def zero(self) -> None:
        """Remove every CPU from the set."""
        self.mask = 0

    @staticmethod
    def _check(num: int) -> None:
        if not 0 <= num < _BITS:
            raise ValueError(f"CPU number {num} is outside 0..{_BITS - 1}")

    def set(self, num: int) -> None:
        """Add CPU ``num`` to the set."""
        self._check(num)
        self.mask |= 1 << num

    def isset(self, num: int) -> bool:
        """Tell whether CPU ``num`` is in the set."""
        self._check(num)
        return bool(self.mask & (1 << num))

    def first(self, ncpus: int) -> int:
        """Return the lowest CPU in the set below ``ncpus``, or ``ncpus``."""
        limit = min(ncpus, _BITS)
        return next((core for core in range(limit) if self.isset(core)), ncpus)

    def __iter__(self):
        return (core for core in range(_BITS) if self.mask & (1 << core))

    def __len__(self) -> int:
        return bin(self.mask).count("1")