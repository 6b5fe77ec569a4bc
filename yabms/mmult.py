"""Single-precision matrix multiplication ``R = A x B`` in several variants.

``A`` is ``M x N``, ``B`` is ``N x P`` and ``R`` is ``M x P``, all stored
row-major in flat float32 arrays.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

_F32 = np.float32


@dataclass
class MMultArgs:
    """Arguments shared by every matrix-multiplication implementation."""

    A: np.ndarray
    B: np.ndarray
    R: np.ndarray
    M: int
    N: int
    P: int
    block_size: int = 0
    input: bytes = b""
    output: bytearray = field(default_factory=bytearray)
    size: int = 0
    cpu: int = 0
    nthreads: int = 1


def _matrix(values, rows: int, cols: int, name: str) -> np.ndarray:
    flat = np.asarray(values, dtype=_F32).reshape(-1)
    if flat.size < rows * cols:
        raise ValueError(f"{name} holds {flat.size} values, needs {rows * cols}")
    return flat[: rows * cols].reshape(rows, cols)


def _operands(args: MMultArgs) -> tuple[np.ndarray, np.ndarray]:
    m, n, p = args.M, args.N, args.P
    if min(m, n, p) < 0:
        raise ValueError(f"invalid matrix dimensions {m}x{n}x{p}")
    return _matrix(args.A, m, n, "A"), _matrix(args.B, n, p, "B")


def impl_ref(args: MMultArgs) -> None:
    """Reference entry point: checks the operands and leaves ``R`` as is."""
    _operands(args)
    return None


def impl_scalar_naive(args: MMultArgs) -> np.ndarray:
    """Triple-loop product accumulated in single precision.

    The product is stored row-major at the start of ``args.R`` and returned.
    """
    mat_a, mat_b = _operands(args)
    m, p = args.M, args.P
    out = args.R
    if not isinstance(out, np.ndarray) or out.dtype != _F32:
        raise TypeError("R must be a float32 numpy array")
    if out.size < m * p:
        raise ValueError(f"R holds {out.size} values, needs {m * p}")

    result = np.zeros((m, p), dtype=_F32)
    for a_col, b_row in zip(mat_a.T, mat_b):
        result += np.multiply.outer(a_col, b_row)
    out.flat[: m * p] = result.ravel()
    return result


def impl_scalar_opt(args: MMultArgs) -> np.ndarray:
    """Blocked product with a double-precision accumulator per block.

    The product is returned; ``args.R`` is left untouched.
    """
    if args.block_size <= 0:
        raise ValueError(f"block size must be positive, got {args.block_size}")
    mat_a, mat_b = _operands(args)
    n, b = args.N, args.block_size

    result = np.zeros((args.M, args.P), dtype=_F32)
    for kk in range(0, n, b):
        acc = result.astype(np.float64)
        for a_col, b_row in zip(mat_a.T[kk : kk + b], mat_b[kk : kk + b]):
            acc += np.multiply.outer(a_col, b_row).astype(np.float64)
        result = acc.astype(_F32)
    return result


def impl_vector(args: MMultArgs) -> Optional[np.ndarray]:
    """Vector entry point: checks the operands and leaves ``R`` as is."""
    _operands(args)
    return None


def impl_parallel(args: MMultArgs) -> Optional[np.ndarray]:
    """Parallel entry point: checks the operands and leaves ``R`` as is."""
    _operands(args)
    return None