"""Three-way comparison helpers."""

from __future__ import annotations

from typing import Callable, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, T], int]
"""Compares two objects: -1 if src < dst, 0 if equal, 1 if src > dst."""


def comparator_real_number(src, dst) -> int:
    """Compare two real numbers, returning -1, 0 or 1."""
    if src < dst:
        return -1
    if src == dst:
        return 0
    return 1