"""fibdrv - File-like access point for the Fibonacci engine.

open() hands out at most one FibFile at a time. A FibFile behaves like the
character device: seek() picks the index, read() copies the decimal text into
the caller's buffer and returns the Fibonacci value itself as its status.
"""
from __future__ import annotations

import errno
import os
from warnings import warn

from .arbiter import AccessArbiter
from .pipeline import ReadResult, Session, read_session
from .protocol import DEVICE_NAME, RESULT_BUF_LEN, SEEK_SET, WRITE_STATUS


class DeviceBusyError(OSError):
    """Raised by open() while another session holds the device."""

    def __init__(self, name: str = DEVICE_NAME):
        super().__init__(errno.EBUSY, os.strerror(errno.EBUSY), name)


class FibDevice:
    def __init__(self, name: str = DEVICE_NAME, buffer_size: int = RESULT_BUF_LEN):
        if buffer_size < 0:
            raise ValueError(f"buffer_size must be non-negative, got {buffer_size}")
        self.name = name
        self.buffer_size = buffer_size
        self.arbiter = AccessArbiter()

    def open(self) -> "FibFile":
        if not self.arbiter.acquire():
            warn(f"{self.name}: fibdrv is in use")
            raise DeviceBusyError(self.name)
        try:
            session = Session(self.buffer_size)
        except BaseException:
            self.arbiter.release()
            raise
        return FibFile(self, session)

    @property
    def in_use(self) -> bool:
        return self.arbiter.busy


class FibFile:
    def __init__(self, device: FibDevice, session: Session):
        self.device = device
        self._session: Session | None = session

    @property
    def closed(self) -> bool:
        return self._session is None

    def _require_session(self) -> Session:
        if self._session is None:
            raise ValueError("I/O operation on closed device file")
        return self._session

    def read_result(self) -> ReadResult:
        """Run one read and return both the buffer snapshot and the value."""
        return read_session(self._require_session())

    def read(self, dest, size: int | None = None) -> int:
        """Copy the rendered buffer into dest and return the Fibonacci value.

        size is accepted for parity with read(2) but does not limit the copy;
        only the length of dest does.
        """
        result = self.read_result()
        view = memoryview(dest)
        n = min(len(view), len(result.text))
        view[:n] = result.text[:n]
        return result.value

    def write(self, data=b"") -> int:
        self._require_session()
        return WRITE_STATUS

    def seek(self, offset: int, whence: int = SEEK_SET) -> int:
        return self._require_session().cursor.seek(offset, whence)

    def tell(self) -> int:
        return self._require_session().cursor.current()

    def close(self) -> None:
        if self._session is None:
            return
        self._session = None
        self.device.arbiter.release()

    def __enter__(self) -> "FibFile":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
