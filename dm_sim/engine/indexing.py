"""Flat-index / bit-vector conversions and approximate comparison helpers.

Qubit 0 is the most significant bit, so a flat matrix index ``i * size + j``
decomposes into the row bits of ``i`` followed by the column bits of ``j``.
"""

from __future__ import annotations

import numpy as np


def int_to_bits(value: int, width: int) -> list[int]:
    """Big-endian bit decomposition of ``value`` over ``width`` bits."""
    if value < 0 or value >= (1 << width):
        raise ValueError(f"{value} does not fit in {width} bits")
    return [(value >> (width - 1 - b)) & 1 for b in range(width)]


def bits_to_int(bits) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | (1 if bit else 0)
    return value


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def log2_exact(n: int) -> int:
    """Returns k such that 2**k == n; raises ValueError otherwise."""
    if not is_power_of_two(n):
        raise ValueError(f"{n} is not a power of two")
    return n.bit_length() - 1


def complex_approx_eq(a, b, tol: float) -> bool:
    """True if |a - b| <= tol (complex modulus), for every element when given arrays."""
    return bool(np.all(np.abs(np.subtract(a, b, dtype=np.complex128)) <= tol))
