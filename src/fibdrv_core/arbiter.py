"""fibdrv - Single-holder access arbiter."""
from __future__ import annotations

import threading


class AccessArbiter:
    """Grants the access token to at most one holder.

    acquire() never waits: a held token reports busy immediately.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def acquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        if not self._lock.locked():
            raise RuntimeError("release of an access token that is not held")
        self._lock.release()

    @property
    def busy(self) -> bool:
        return self._lock.locked()
