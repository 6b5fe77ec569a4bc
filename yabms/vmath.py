"""Vectorised single-precision ``log`` and ``exp`` approximations.

The functions operate element-wise on float32 data, using the Cephes-style
polynomial approximations of the benchmark suite's SIMD math routines. Every
intermediate step is carried out in single precision, and the bit-level tricks
(exponent extraction, NaN masks, building powers of two) act on the IEEE-754
representation directly.
"""

from __future__ import annotations

import numpy as np

_F = np.float32

_MIN_NORM = np.array([0x00800000], dtype=np.uint32).view(np.float32)[0]
_HALF_BITS = np.array([0.5], dtype=np.float32).view(np.uint32)[0]
_EXP_MASK_INV = np.uint32(~0x7F800000 & 0xFFFFFFFF)
_ALL_ONES = np.uint32(0xFFFFFFFF)
_SQRTHF = _F(0.707106781186547524)

_LOG_COEFFS = tuple(
    _F(c)
    for c in (
        7.0376836292e-2,
        -1.1514610310e-1,
        1.1676998740e-1,
        -1.2420140846e-1,
        1.4249322787e-1,
        -1.6668057665e-1,
        2.0000714765e-1,
        -2.4999993993e-1,
        3.3333331174e-1,
    )
)

_EXP_COEFFS = tuple(
    _F(c)
    for c in (
        1.9875691500e-4,
        1.3981999507e-3,
        8.3334519073e-3,
        4.1665795894e-2,
        1.6666665459e-1,
        5.0000001201e-1,
    )
)

_LN2_HI = _F(0.693359375)
_LN2_LO = _F(-2.12194440e-4)
_LOG2E = _F(1.44269504088896341)
_EXP_HI = _F(88.3762626647949)
_EXP_LO = _F(-88.3762626647949)


def _prepare(x) -> tuple[np.ndarray, tuple[int, ...]]:
    arr = np.array(x, dtype=np.float32)
    return arr.reshape(-1), arr.shape


def _max_ps(a: np.ndarray, b) -> np.ndarray:
    # Like the SIMD max: the second operand wins unless the first is greater.
    return np.where(a > b, a, b).astype(np.float32)


def _min_ps(a: np.ndarray, b) -> np.ndarray:
    # Like the SIMD min: the second operand wins unless the first is smaller.
    return np.where(a < b, a, b).astype(np.float32)


def log_ps(x) -> np.ndarray:
    """Natural logarithm; non-positive inputs give NaN."""
    x, shape = _prepare(x)
    with np.errstate(all="ignore"):
        invalid = np.where(x <= _F(0), _ALL_ONES, np.uint32(0)).astype(np.uint32)
        x = _max_ps(x, _MIN_NORM)

        bits = x.view(np.uint32)
        exponent = (bits >> np.uint32(23)).astype(np.int32)

        bits = (bits & _EXP_MASK_INV) | _HALF_BITS
        x = bits.view(np.float32)

        e = (exponent - np.int32(0x7F)).astype(np.float32) + _F(1)

        mask = x < _SQRTHF
        tmp = np.where(mask, x, _F(0)).astype(np.float32)
        x = x - _F(1)
        e = e - np.where(mask, _F(1), _F(0)).astype(np.float32)
        x = x + tmp

        z = x * x

        y = np.full_like(x, _LOG_COEFFS[0])
        for coeff in _LOG_COEFFS[1:]:
            y = y * x
            y = y + coeff
        y = y * x
        y = y * z

        y = y + e * _LN2_LO
        y = y - z * _F(0.5)

        x = x + y
        x = x + e * _LN2_HI
        result = (x.view(np.uint32) | invalid).view(np.float32)
    return result.reshape(shape)


def approx_log_ps(x) -> np.ndarray:
    """Natural logarithm from the first four terms of the atanh series."""
    x, shape = _prepare(x)
    with np.errstate(all="ignore"):
        one = _F(1)
        two = _F(2)
        r = (x - one) / (x + one)
        r2 = r * r

        result = np.zeros_like(x)
        term = r
        for i in range(4):
            c = two / _F(2 * i + 1)
            result = result + c * term
            term = term * r2
    return result.reshape(shape)


def exp_ps(x) -> np.ndarray:
    """Exponential, with inputs clamped to about +/-88.376."""
    x, shape = _prepare(x)
    with np.errstate(all="ignore"):
        x = _min_ps(x, _EXP_HI)
        x = _max_ps(x, _EXP_LO)

        fx = x * _LOG2E
        fx = fx + _F(0.5)

        tmp = np.floor(fx).astype(np.float32)
        correction = np.where(tmp > fx, _F(1), _F(0)).astype(np.float32)
        fx = tmp - correction

        tmp = fx * _LN2_HI
        z = fx * _LN2_LO
        x = x - tmp
        x = x - z

        z = x * x

        y = np.full_like(x, _EXP_COEFFS[0])
        for coeff in _EXP_COEFFS[1:]:
            y = y * x
            y = y + coeff
        y = y * z
        y = y + x
        y = y + _F(1)

        n = fx.astype(np.int32)
        n = n + np.int32(0x7F)
        n = np.left_shift(n, np.int32(23)).astype(np.int32)
        pow2n = n.view(np.float32)
        y = y * pow2n
    return y.reshape(shape)