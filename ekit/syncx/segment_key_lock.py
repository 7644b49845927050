"""Read-write locks selected by hashing a string key into segments."""

from __future__ import annotations

import threading
from typing import List

__all__ = ["SegmentKeysLock"]

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def _fnv32a(data: bytes) -> int:
    h = _FNV32_OFFSET
    for byte in data:
        h = ((h ^ byte) * _FNV32_PRIME) & 0xFFFFFFFF
    return h


class _RWLock:
    """A writer-preferring read-write lock."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def try_acquire_read(self) -> bool:
        with self._cond:
            if self._writer or self._waiting_writers:
                return False
            self._readers += 1
            return True

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("ekit: read unlock of a lock not read-locked")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def try_acquire_write(self) -> bool:
        with self._cond:
            if self._writer or self._readers or self._waiting_writers:
                return False
            self._writer = True
            return True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("ekit: unlock of a lock not locked")
            self._writer = False
            self._cond.notify_all()


class SegmentKeysLock:
    """A fixed number of read-write locks; each key uses the one its hash selects."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("ekit: SegmentKeysLock size must be positive")
        self._locks: List[_RWLock] = [_RWLock() for _ in range(size)]

    def _lock_for(self, key: str) -> _RWLock:
        return self._locks[_fnv32a(key.encode("utf-8")) % len(self._locks)]

    def rlock(self, key: str) -> None:
        """Take the read lock for ``key``."""
        self._lock_for(key).acquire_read()

    def try_rlock(self, key: str) -> bool:
        """Take the read lock for ``key`` if possible without waiting."""
        return self._lock_for(key).try_acquire_read()

    def runlock(self, key: str) -> None:
        """Release a read lock for ``key``."""
        self._lock_for(key).release_read()

    def lock(self, key: str) -> None:
        """Take the write lock for ``key``."""
        self._lock_for(key).acquire_write()

    def try_lock(self, key: str) -> bool:
        """Take the write lock for ``key`` if possible without waiting."""
        return self._lock_for(key).try_acquire_write()

    def unlock(self, key: str) -> None:
        """Release the write lock for ``key``."""
        self._lock_for(key).release_write()