"""Element-wise addition of two int32 vectors, in several implementations.

Every implementation reads ``size // 4`` native 32-bit integers from
``input0`` and ``input1`` and writes their wrapping sum into ``output``.
Bytes of ``output`` beyond that range are left untouched.
"""

from __future__ import annotations

import os
import threading
from array import array
from dataclasses import dataclass
from typing import Union

import numpy as np

Buffer = Union[bytes, bytearray, memoryview]

_ITEM = 4
_LANES = 32 // _ITEM
_UNROLL = 8


@dataclass
class VVAddArgs:
    """Arguments shared by every vector-add implementation."""

    input0: Buffer
    input1: Buffer
    output: Union[bytearray, memoryview]
    size: int
    cpu: int = 0
    nthreads: int = 1

    @property
    def count(self) -> int:
        """Number of int32 elements processed."""
        return self.size // _ITEM


def _element_count(args: VVAddArgs) -> int:
    if args.size < 0:
        raise ValueError(f"invalid data size {args.size}")
    n = args.count
    needed = n * _ITEM
    for name in ("input0", "input1", "output"):
        if len(memoryview(getattr(args, name)).cast("B")) < needed:
            raise ValueError(f"{name} is shorter than {needed} bytes")
    return n


def _views(args: VVAddArgs) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    n = _element_count(args)
    src0 = np.frombuffer(args.input0, dtype=np.int32, count=n)
    src1 = np.frombuffer(args.input1, dtype=np.int32, count=n)
    dest = np.frombuffer(args.output, dtype=np.int32, count=n)
    if not dest.flags.writeable:
        raise ValueError("output buffer is read-only")
    return dest, src0, src1


def _add(dest: np.ndarray, src0: np.ndarray, src1: np.ndarray) -> None:
    np.add(src0, src1, out=dest)


def impl_ref(args: VVAddArgs) -> None:
    """Reference implementation."""
    dest, src0, src1 = _views(args)
    _add(dest, src0, src1)


def impl_scalar_naive(args: VVAddArgs) -> None:
    """Element-by-element addition with 32-bit wrap-around."""
    n = _element_count(args)
    nbytes = n * _ITEM
    src0 = memoryview(args.input0).cast("B")[:nbytes].cast("i")
    src1 = memoryview(args.input1).cast("B")[:nbytes].cast("i")
    dest = memoryview(args.output).cast("B")[:nbytes].cast("i")
    dest[:] = array(
        "i",
        (((a + b + 0x80000000) & 0xFFFFFFFF) - 0x80000000 for a, b in zip(src0, src1)),
    )


def impl_scalar_opt(args: VVAddArgs) -> None:
    """Addition that handles the ``n % 8`` head first, then blocks of eight."""
    dest, src0, src1 = _views(args)
    head = dest.size % _UNROLL
    _add(dest[:head], src0[:head], src1[:head])
    body = slice(head, None)
    _add(
        dest[body].reshape(-1, _UNROLL),
        src0[body].reshape(-1, _UNROLL),
        src1[body].reshape(-1, _UNROLL),
    )


def impl_vector(args: VVAddArgs) -> None:
    """Addition in eight-lane chunks, with a masked final chunk."""
    dest, src0, src1 = _views(args)
    for start in range(0, dest.size, _LANES):
        lanes = slice(start, start + _LANES)
        _add(dest[lanes], src0[lanes], src1[lanes])


def _pin_current_thread(cpu: int) -> None:
    setter = getattr(os, "sched_setaffinity", None)
    if setter is None:
        return
    try:
        setter(0, {cpu})
    except (OSError, ValueError):
        pass


def _worker(dest: np.ndarray, src0: np.ndarray, src1: np.ndarray, cpu: int) -> None:
    _pin_current_thread(cpu)
    _add(dest, src0, src1)


def impl_parallel(args: VVAddArgs) -> None:
    """Split the work evenly across ``nthreads``; the caller takes the first
    share and the trailing remainder."""
    if args.nthreads < 1:
        raise ValueError(f"need at least one thread, got {args.nthreads}")
    dest, src0, src1 = _views(args)
    n = dest.size
    nthreads = args.nthreads
    per_thread, remaining = divmod(n, nthreads)

    threads = []
    for i in range(1, nthreads):
        share = slice(i * per_thread, (i + 1) * per_thread)
        thread = threading.Thread(
            target=_worker,
            args=(dest[share], src0[share], src1[share], (args.cpu + i) % nthreads),
        )
        thread.start()
        threads.append(thread)

    first = slice(0, per_thread)
    _add(dest[first], src0[first], src1[first])
    tail = slice(n - remaining, n)
    _add(dest[tail], src0[tail], src1[tail])

    for thread in threads:
        thread.join()