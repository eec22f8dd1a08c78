"""fibdrv - Software ripple-carry adder over a 64-bit word."""
from __future__ import annotations

from .protocol import WORD_BITS, WORD_MASK


def to_word(x: int) -> int:
    """Reduce an integer to the unsigned 64-bit word (two's complement wrap)."""
    return x & WORD_MASK


def bit_add(a: int, b: int) -> int:
    """Add two words one bit position at a time, like a hardware ripple adder.

    Runs exactly WORD_BITS iterations. The carry out of the top bit is
    dropped, so the result equals native wraparound addition.
    """
    a = to_word(a)
    b = to_word(b)
    s = 0
    carry = 0
    for i in range(WORD_BITS):
        a_bit = (a >> i) & 1
        b_bit = (b >> i) & 1
        s |= (a_bit ^ b_bit ^ carry) << i
        carry = (a_bit & b_bit) | (a_bit & carry) | (b_bit & carry)
    return s


def native_add(a: int, b: int) -> int:
    """Reference wraparound addition using the native operator."""
    return to_word(to_word(a) + to_word(b))
