"""fibdrv - Fibonacci sequence engine."""
from __future__ import annotations

from typing import Callable, Iterator

from .adder import bit_add


def fib_sequence(k: int, add: Callable[[int, int], int] = bit_add) -> int:
    """Return fib(k) by a linear scan, wrapping modulo 2^64.

    Only the last two values are kept. Indices past MAX_INDEX are not
    rejected here; the cursor clamp keeps reads inside the domain.
    """
    if k < 0:
        raise ValueError(f"index must be non-negative, got {k}")
    if k < 2:
        return k

    prev, cur = 0, 1
    for _ in range(2, k + 1):
        prev, cur = cur, add(cur, prev)
    return cur


def iter_sequence(k: int, add: Callable[[int, int], int] = bit_add) -> Iterator[tuple[int, int]]:
    """Yield (i, fib(i)) for i in 0..k."""
    if k < 0:
        return
    prev, cur = 0, 1
    yield 0, prev
    if k == 0:
        return
    yield 1, cur
    for i in range(2, k + 1):
        prev, cur = cur, add(cur, prev)
        yield i, cur
