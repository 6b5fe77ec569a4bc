"""Run timing, outlier-free runtime statistics and runtime dumps."""

from __future__ import annotations

import math
import time
from collections.abc import Iterable
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Optional, Union

StrPath = Union[str, "PathLike[str]"]


@dataclass(frozen=True)
class StatsRound:
    """One pass of the outlier-removal statistics."""

    number: int
    average: int
    stdev: int
    active: int
    masked: int
    minimum: int
    maximum: int


class Stopwatch:
    """Measure the wall time of a ``with`` block on the monotonic clock."""

    def __init__(self) -> None:
        self._start: Optional[int] = None
        self._end: Optional[int] = None

    def __enter__(self) -> "Stopwatch":
        self._end = None
        self._start = time.monotonic_ns()
        return self

    def __exit__(self, *args) -> None:
        self._end = time.monotonic_ns()

    def elapsed_ns(self) -> int:
        """Nanoseconds between entry and exit, or since entry while running."""
        if self._start is None:
            raise RuntimeError("stopwatch was never started")
        end = self._end if self._end is not None else time.monotonic_ns()
        return end - self._start


def outlier_free_rounds(runtimes: Iterable[int], nstdevs: int) -> list[StatsRound]:
    """Repeatedly drop runtimes further than ``nstdevs`` standard deviations
    from the integer mean until a pass drops nothing.

    The last round's ``average`` is the outlier-free average.
    """
    if nstdevs < 0:
        raise ValueError(f"number of standard deviations must be >= 0, got {nstdevs}")
    kept = [int(r) for r in runtimes]
    if not kept:
        raise ValueError("no runtimes to analyse")
    if any(r < 0 for r in kept):
        raise ValueError("runtimes must not be negative")

    rounds: list[StatsRound] = []
    while True:
        if not kept:
            raise ValueError("every runtime was discarded as an outlier")
        count = len(kept)
        average = sum(kept) // count
        stdev = int(math.sqrt(sum((r - average) ** 2 for r in kept) // count))
        limit = nstdevs * stdev
        survivors = [r for r in kept if abs(r - average) <= limit]
        masked = count - len(survivors)
        rounds.append(
            StatsRound(
                number=len(rounds) + 1,
                average=average,
                stdev=stdev,
                active=count,
                masked=masked,
                minimum=min(kept),
                maximum=max(kept),
            )
        )
        if masked == 0:
            return rounds
        kept = survivors


def write_runtimes_csv(
    path: StrPath, impl_name: str, runtimes: Iterable[int], avg: int
) -> Path:
    """Write the runtimes dump and return the path written."""
    values = [int(r) for r in runtimes]
    lines = [
        f"impl,{impl_name}",
        f"num_of_runs,{len(values)}",
        "runtimes" + "".join(f", {r}" for r in values),
        f"avg,{int(avg)}",
    ]
    target = Path(path)
    with open(target, "w", encoding="ascii", newline="") as handle:
        handle.write("\n".join(lines))
    return target