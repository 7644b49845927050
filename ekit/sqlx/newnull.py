"""Nullable values that are invalid when the wrapped value is its zero value."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, TypeVar

__all__ = [
    "Null",
    "new_null_bool",
    "new_null_bytes",
    "new_null_float64",
    "new_null_int64",
    "new_null_string",
    "new_null_time",
]

T = TypeVar("T")

_ZERO_TIME_UTC = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class Null(Generic[T]):
    """A value together with a flag telling whether it is not NULL."""

    value: T
    valid: bool = False


def new_null_string(val: str) -> Null[str]:
    return Null(val, val != "")


def new_null_int64(val: int) -> Null[int]:
    return Null(val, val != 0)


def new_null_float64(val: float) -> Null[float]:
    return Null(val, val != 0)


def new_null_bool(val: bool) -> Null[bool]:
    return Null(val, bool(val))


def _is_zero_time(val: datetime | None) -> bool:
    if val is None:
        return True
    if val.tzinfo is None or val.utcoffset() is None:
        return val == datetime.min
    return val == _ZERO_TIME_UTC


def new_null_time(val: datetime | None) -> Null[datetime | None]:
    """Wrap a time; None and the minimal datetime count as zero."""
    return Null(val, not _is_zero_time(val))


def new_null_bytes(val: bytes) -> Null[str]:
    """Wrap bytes as a string; empty bytes are NULL."""
    return Null(bytes(val).decode("utf-8", "surrogateescape"), len(val) > 0)