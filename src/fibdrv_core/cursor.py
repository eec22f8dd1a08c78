"""fibdrv - Per-session cursor with clamped seek."""
from __future__ import annotations

from enum import IntEnum

from .protocol import MAX_INDEX, SEEK_CUR, SEEK_END, SEEK_SET


class SeekMode(IntEnum):
    SET = SEEK_SET
    CUR = SEEK_CUR
    END = SEEK_END


def clamp_index(pos: int) -> int:
    if pos > MAX_INDEX:
        return MAX_INDEX
    if pos < 0:
        return 0
    return pos


class Cursor:
    """Current index of one session, analogous to a file offset.

    Every seek lands inside [0, MAX_INDEX]. END is measured backwards:
    seek(n, END) targets MAX_INDEX - n.
    """

    __slots__ = ("position",)

    def __init__(self) -> None:
        self.position = 0

    def current(self) -> int:
        return self.position

    def seek(self, offset: int, whence: int = SEEK_SET) -> int:
        try:
            mode = SeekMode(whence)
        except ValueError:
            raise ValueError(f"invalid whence ({whence}, should be 0, 1 or 2)") from None

        if mode is SeekMode.SET:
            new_pos = offset
        elif mode is SeekMode.CUR:
            new_pos = self.position + offset
        else:
            new_pos = MAX_INDEX - offset

        self.position = clamp_index(new_pos)
        return self.position
