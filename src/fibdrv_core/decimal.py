"""fibdrv - Decimal rendering of a word into a bounded byte buffer."""
from __future__ import annotations

from .protocol import WORD_MASK

_ZERO = ord("0")


def reverse_prefix(buf: bytearray | memoryview, n: int) -> bool:
    """Reverse buf[:n] in place. Returns False for an empty prefix."""
    if n <= 0:
        return False
    lo, hi = 0, n - 1
    while lo < hi:
        buf[lo], buf[hi] = buf[hi], buf[lo]
        lo += 1
        hi -= 1
    return True


def encode_decimal(value: int, buf: bytearray | memoryview) -> bool:
    """Write the decimal digits of value into buf, most significant first.

    The whole buffer is zero-filled first. Returns False when buf has no
    capacity or runs out before every digit is written; in that case buf
    holds the partial, unreversed digits.
    """
    if not 0 <= value <= WORD_MASK:
        raise ValueError(f"value {value} is not a 64-bit unsigned word")

    size = len(buf)
    if size == 0:
        return False

    buf[:] = bytes(size)

    n = 0
    rest = value
    while True:
        rest, digit = divmod(rest, 10)
        buf[n] = _ZERO + digit
        n += 1
        if rest == 0:
            break
        if n >= size:
            return False

    return reverse_prefix(buf, n)


def decode_decimal(buf: bytes | bytearray | memoryview) -> int:
    """Parse the digit run before the first NUL byte."""
    raw = bytes(buf).split(b"\x00", 1)[0]
    if not raw or not raw.isdigit():
        raise ValueError(f"not a decimal rendering: {raw!r}")
    return int(raw)
