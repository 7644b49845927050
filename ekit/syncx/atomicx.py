"""A value holder with atomic load, store, swap and compare-and-swap."""

from __future__ import annotations

import threading
from typing import Generic, Optional, TypeVar

__all__ = ["Value", "new_value", "new_value_of"]

T = TypeVar("T")


class Value(Generic[T]):
    """Holds one value; every operation on it is atomic."""

    def __init__(self, val: Optional[T] = None) -> None:
        self._val = val
        self._lock = threading.Lock()

    def load(self) -> T:
        """Return the current value."""
        with self._lock:
            return self._val

    def store(self, val: T) -> None:
        """Replace the current value."""
        with self._lock:
            self._val = val

    def swap(self, new: T) -> T:
        """Store ``new`` and return the previous value."""
        with self._lock:
            old, self._val = self._val, new
            return old

    def compare_and_swap(self, old: T, new: T) -> bool:
        """Store ``new`` if the current value equals ``old``; report whether it did."""
        with self._lock:
            current = self._val
            if current is old or current == old:
                self._val = new
                return True
            return False


def new_value() -> Value:
    """Return a Value holding None."""
    return Value()


def new_value_of(t: T) -> Value[T]:
    """Return a Value holding ``t``."""
    return Value(t)