"""fibdrv - One read: cursor -> sequence engine -> decimal encoder."""
from __future__ import annotations

from typing import NamedTuple
from warnings import warn

from .cursor import Cursor
from .decimal import encode_decimal
from .protocol import DIAG_MESSAGE, RESULT_BUF_LEN
from .sequence import fib_sequence


class Session:
    """State owned by the current access holder: a cursor and the result buffer."""

    __slots__ = ("cursor", "buffer")

    def __init__(self, buffer_size: int = RESULT_BUF_LEN):
        self.cursor = Cursor()
        self.buffer = bytearray(buffer_size)


class ReadResult(NamedTuple):
    text: bytes  # full buffer snapshot, zero fill included
    value: int

    @property
    def digits(self) -> bytes:
        return self.text.split(b"\x00", 1)[0]


def fill_diagnostic(buf: bytearray) -> None:
    """Zero the buffer and copy as much of DIAG_MESSAGE as fits."""
    size = len(buf)
    buf[:] = DIAG_MESSAGE[:size].ljust(size, b"\x00")


def read_session(session: Session) -> ReadResult:
    k = session.cursor.current()
    value = fib_sequence(k)
    if not encode_decimal(value, session.buffer):
        warn(f"fib({k}) does not fit a {len(session.buffer)}-byte buffer")
        fill_diagnostic(session.buffer)
    return ReadResult(bytes(session.buffer), value)
