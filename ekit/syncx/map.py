"""A thread-safe mapping with load-or-store operations."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

__all__ = ["Map"]

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class Map(Generic[K, V]):
    """A dictionary safe for use from several threads.

    A missing key and a key stored with the value None are different: the
    boolean returned alongside a value tells them apart.
    """

    def __init__(self) -> None:
        self._data: Dict[K, V] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def load(self, key: K) -> Tuple[Optional[V], bool]:
        """Return the value for ``key`` and whether it was present."""
        with self._lock:
            value = self._data.get(key, _MISSING)
        if value is _MISSING:
            return None, False
        return value, True

    def store(self, key: K, value: V) -> None:
        """Set the value for ``key``."""
        with self._lock:
            self._data[key] = value

    def load_or_store(self, key: K, value: V) -> Tuple[V, bool]:
        """Return the existing value and True, or store ``value`` and return it with False."""
        with self._lock:
            existing = self._data.get(key, _MISSING)
            if existing is not _MISSING:
                return existing, True
            self._data[key] = value
            return value, False

    def load_or_store_func(self, key: K, fn: Callable[[], V]) -> Tuple[V, bool]:
        """Like ``load_or_store``, but only calls ``fn`` when the key is missing.

        Exceptions raised by ``fn`` propagate and nothing is stored.
        """
        value, ok = self.load(key)
        if ok:
            return value, True
        return self.load_or_store(key, fn())

    def load_and_delete(self, key: K) -> Tuple[Optional[V], bool]:
        """Remove ``key``, returning its value and whether it was present."""
        with self._lock:
            value = self._data.pop(key, _MISSING)
        if value is _MISSING:
            return None, False
        return value, True

    def delete(self, key: K) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._data.pop(key, None)

    def range(self, f: Callable[[K, V], bool]) -> None:
        """Call ``f`` for each entry; stop as soon as it returns a false value."""
        with self._lock:
            items = list(self._data.items())
        for key, value in items:
            if not f(key, value):
                break