"""
Full-precision multiply-divide over 256-bit words (deterministic, integer-only).

`mul_div(a, b, d)` returns `floor(a * b / d)` for u256 operands even when the
product needs 512 bits. The product is held as a `(hi, lo)` pair of 256-bit
words built from 128-bit limbs, so no intermediate value exceeds 2**256.

Contract:
- operands are ints in [0, U256_MAX]
- d > 0
- the quotient must fit 256 bits (hi < d), else OverflowError
"""

from __future__ import annotations


WORD_BITS = 256
U256_MAX = (1 << WORD_BITS) - 1

_HALF_BITS = WORD_BITS // 2
_HALF_MASK = (1 << _HALF_BITS) - 1


def _require_u256(value: int, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0 or value > U256_MAX:
        raise ValueError(f"{name} must be in [0, 2**256): {value}")


def mul_wide(a: int, b: int) -> tuple[int, int]:
    """
    512-bit product of two u256 words.

    Returns (hi, lo) such that a * b == hi * 2**256 + lo, with hi, lo < 2**256.
    """
    _require_u256(a, "a")
    _require_u256(b, "b")

    a1, a0 = a >> _HALF_BITS, a & _HALF_MASK
    b1, b0 = b >> _HALF_BITS, b & _HALF_MASK

    # Each partial product is < 2**256.
    p00 = a0 * b0
    p01 = a0 * b1
    p10 = a1 * b0
    p11 = a1 * b1

    # Middle column: carry out of the low half plus both cross terms' low halves.
    mid = (p00 >> _HALF_BITS) + (p01 & _HALF_MASK) + (p10 & _HALF_MASK)
    lo = ((mid & _HALF_MASK) << _HALF_BITS) | (p00 & _HALF_MASK)
    hi = p11 + (p01 >> _HALF_BITS) + (p10 >> _HALF_BITS) + (mid >> _HALF_BITS)

    if hi > U256_MAX:
        raise AssertionError("internal error: high word out of range")
    return hi, lo


def div_wide(hi: int, lo: int, d: int) -> tuple[int, int]:
    """
    Divide the 512-bit value `hi * 2**256 + lo` by a u256 divisor.

    Returns (q, r) with q, r < 2**256. Requires hi < d so the quotient fits one word.
    """
    _require_u256(hi, "hi")
    _require_u256(lo, "lo")
    _require_u256(d, "d")
    if d == 0:
        raise ZeroDivisionError("mul_div denominator must be positive")
    if hi >= d:
        raise OverflowError("mul_div quotient does not fit 256 bits")

    if hi == 0:
        return lo // d, lo % d

    # Restoring long division, one bit of `lo` per round. The running remainder
    # stays < d; `carry` holds the bit shifted out of the top of the word.
    rem = hi
    q = 0
    for i in range(WORD_BITS - 1, -1, -1):
        carry = rem >> (WORD_BITS - 1)
        rem = ((rem << 1) & U256_MAX) | ((lo >> i) & 1)
        q <<= 1
        if carry or rem >= d:
            rem = (rem - d) & U256_MAX
            q |= 1

    if q > U256_MAX or rem >= d:
        raise AssertionError("internal error: long division out of range")
    return q, rem


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator) with full 512-bit intermediate precision."""
    _require_u256(denominator, "denominator")
    if denominator == 0:
        raise ZeroDivisionError("mul_div denominator must be positive")
    hi, lo = mul_wide(a, b)
    q, _ = div_wide(hi, lo, denominator)
    return q
