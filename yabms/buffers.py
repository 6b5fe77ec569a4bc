"""Benchmark data buffers: allocation, initialisation, guards and checks."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import islice
from os import PathLike
from pathlib import Path
from typing import Protocol, Union

import numpy as np

GUARD = bytes((0xFE, 0xCA, 0xAD, 0xDE))
GUARD_SIZE = len(GUARD)

StrPath = Union[str, "PathLike[str]"]


class _RandomSource(Protocol):
    def rand(self) -> int: ...


class MatrixFileError(Exception):
    """A matrix data file could not be opened or read."""


def _require_count(nelems: int) -> None:
    if nelems < 0:
        raise ValueError(f"cannot allocate {nelems} elements")


def alloc_data(nelems: int) -> bytearray:
    """Return a zero-filled byte buffer of ``nelems`` bytes."""
    _require_count(nelems)
    return bytearray(nelems)


def alloc_init_data(rng: _RandomSource, nelems: int) -> bytearray:
    """Return ``nelems`` bytes drawn from ``rng``, each reduced modulo 256."""
    _require_count(nelems)
    return bytearray(rng.rand() & 0xFF for _ in range(nelems))


def alloc_init_matrix_data(nelems: int) -> np.ndarray:
    """Return a float32 vector whose elements hold their own index."""
    _require_count(nelems)
    return np.arange(nelems, dtype=np.float32)


def load_matrix_file(path: StrPath, nelems: int) -> np.ndarray:
    """Read ``nelems`` whitespace-separated floats from a text file."""
    _require_count(nelems)
    name = Path(path).name
    try:
        with open(path, encoding="ascii", errors="replace") as handle:
            text = handle.read()
    except OSError as exc:
        raise MatrixFileError(f"Error opening file {name}") from exc

    tokens = list(islice(iter(text.split()), nelems))
    if len(tokens) < nelems:
        raise MatrixFileError(f"Error reading {name} file")
    try:
        values = [float(token) for token in tokens]
    except ValueError as exc:
        raise MatrixFileError(f"Error reading {name} file") from exc
    return np.array(values, dtype=np.float32)


def _check_guard_room(buffer: Sequence[int], size: int) -> None:
    if size < 0 or len(buffer) < size + GUARD_SIZE:
        raise IndexError(
            f"buffer of {len(buffer)} bytes has no room for a guard at {size}"
        )


def set_guard(buffer: bytearray, size: int) -> None:
    """Write the guard word into ``buffer`` just past ``size`` bytes."""
    _check_guard_room(buffer, size)
    buffer[size : size + GUARD_SIZE] = GUARD


def check_guard(buffer: Sequence[int], size: int) -> bool:
    """Tell whether the guard word past ``size`` bytes is intact."""
    _check_guard_room(buffer, size)
    return bytes(buffer[size : size + GUARD_SIZE]) == GUARD


def _paired(ref: Sequence, array: Sequence, size: int):
    if size < 0:
        raise ValueError(f"invalid comparison size {size}")
    if len(ref) < size or len(array) < size:
        raise IndexError(f"cannot compare {size} elements of shorter sequences")
    return islice(zip(ref, array), size)


def check_match(ref: Sequence, array: Sequence, size: int) -> bool:
    """Tell whether the first ``size`` elements are equal."""
    return all(a == b for a, b in _paired(ref, array, size))


def check_float_match(ref: Sequence, array: Sequence, size: int, delta: float) -> bool:
    """Tell whether the first ``size`` elements differ by less than ``delta``."""
    return all(abs(float(a) - float(b)) < delta for a, b in _paired(ref, array, size))


def match_label(matched: bool) -> str:
    """Return the label printed next to the runtime."""
    return "MATCHING" if matched else "MISMATCH"