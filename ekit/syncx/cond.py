"""A condition variable whose wait can time out."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Optional

__all__ = ["Cond"]


class Cond:
    """A rendezvous point for threads waiting for, or announcing, an event.

    ``lock`` must be held when the condition is changed and when ``wait`` is
    called. Waiters are woken in the order in which they started waiting.
    Use the instance as a context manager to hold ``lock``.
    """

    def __init__(self, lock: Optional[Any] = None) -> None:
        self.lock = threading.Lock() if lock is None else lock
        self._mutex = threading.Lock()
        self._waiters: deque[Any] = deque()

    def __enter__(self) -> "Cond":
        self.lock.acquire()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.lock.release()

    def __copy__(self) -> "Cond":
        raise TypeError("ekit: Cond must not be copied")

    def __deepcopy__(self, memo: dict) -> "Cond":
        raise TypeError("ekit: Cond must not be copied")

    def wait(self, timeout: Optional[float] = None) -> None:
        """Release ``lock``, sleep until woken, then take ``lock`` again.

        With a ``timeout`` in seconds, raise TimeoutError when no wake-up
        arrived in time. ``lock`` is held again in either case. As the
        condition may have changed meanwhile, call this in a loop.
        """
        waiter = threading.Lock()
        waiter.acquire()
        # Register before releasing the lock so that no signal is missed.
        with self._mutex:
            self._waiters.append(waiter)
        self.lock.release()
        try:
            if timeout is None:
                waiter.acquire()
                return
            if waiter.acquire(timeout=max(timeout, 0.0)):
                return
            with self._mutex:
                if waiter.acquire(blocking=False):
                    # Woken just as the time ran out: hand the wake-up on.
                    if self._waiters:
                        self._notify_next()
                else:
                    self._waiters.remove(waiter)
            raise TimeoutError("ekit: Cond.wait timed out")
        finally:
            self.lock.acquire()

    def signal(self) -> None:
        """Wake the longest-waiting thread, if there is one."""
        with self._mutex:
            if self._waiters:
                self._notify_next()

    def broadcast(self) -> None:
        """Wake every waiting thread."""
        with self._mutex:
            while self._waiters:
                self._notify_next()

    def _notify_next(self) -> None:
        self._waiters.popleft().release()