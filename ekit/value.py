"""Typed access to a loosely typed value that may carry an error."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from typing import Any, Callable

__all__ = ["AnyValue", "InvalidTypeError"]


class InvalidTypeError(TypeError):
    """Raised when a value does not have the requested type."""

    def __init__(self, want: str, actual: Any) -> None:
        super().__init__(
            f"ekit: type conversion failed, want {want}, "
            f"got {actual!r} of type {type(actual).__name__}"
        )
        self.want = want
        self.actual = actual


_INT_KINDS: dict[str, tuple[int, bool]] = {
    "int": (64, True),
    "int8": (8, True),
    "int16": (16, True),
    "int32": (32, True),
    "int64": (64, True),
    "uint": (64, False),
    "uint8": (8, False),
    "uint16": (16, False),
    "uint32": (32, False),
    "uint64": (64, False),
}

_SIGNED_SYNTAX = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_SYNTAX = re.compile(r"[0-9]+")
_DEC_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)


def _int_bounds(bits: int, signed: bool) -> tuple[int, int]:
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def _fits(value: Any, kind: str) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    low, high = _int_bounds(*_INT_KINDS[kind])
    return low <= value <= high


def _parse_int(text: str, bits: int, signed: bool) -> int:
    syntax = _SIGNED_SYNTAX if signed else _UNSIGNED_SYNTAX
    if not syntax.fullmatch(text):
        raise ValueError(f"ekit: invalid integer syntax {text!r}")
    number = int(text)
    low, high = _int_bounds(bits, signed)
    if not low <= number <= high:
        raise ValueError(f"ekit: integer {text!r} out of range for {bits} bits")
    return number


def _wrap_signed(number: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((number + half) & ((1 << bits) - 1)) - half


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _parse_float(text: str, bits: int) -> float:
    if _SPECIAL_FLOAT.fullmatch(text):
        return float(text)
    try:
        if _DEC_FLOAT.fullmatch(text):
            value = float(text)
        elif _HEX_FLOAT.fullmatch(text):
            value = float.fromhex(text)
        else:
            raise ValueError(f"ekit: invalid float syntax {text!r}")
    except OverflowError:
        value = math.inf
    if math.isinf(value):
        raise ValueError(f"ekit: float {text!r} out of range")
    if bits == 32:
        try:
            return _to_float32(value)
        except OverflowError:
            raise ValueError(f"ekit: float {text!r} out of range for float32") from None
    return value


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.10f}"


@dataclass(frozen=True)
class AnyValue:
    """A value of unknown type, or the error that prevented obtaining it.

    Strict accessors (``int``, ``string`` ...) return the value only when it
    already has the requested type. ``as_*`` accessors also convert from
    strings (and, for ``as_string``, from numbers and bytes). ``*_or_default``
    accessors return the given default instead of raising.
    """

    val: Any = None
    err: Exception | None = None

    def _raise_err(self) -> None:
        if self.err is not None:
            raise self.err

    def _exact_int(self, kind: str) -> int:
        self._raise_err()
        if _fits(self.val, kind):
            return self.val
        raise InvalidTypeError(kind, self.val)

    def _convert_int(self, kind: str, parse_bits: int) -> int:
        self._raise_err()
        value = self.val
        if _fits(value, kind):
            return value
        if isinstance(value, str):
            return _parse_int(value, parse_bits, _INT_KINDS[kind][1])
        raise InvalidTypeError(kind, value)

    @staticmethod
    def _or_default(getter: Callable[[], Any], default: Any) -> Any:
        try:
            return getter()
        except Exception:
            return default

    def int(self):
        """Return the value if it is a 64-bit signed integer."""
        return self._exact_int("int")

    def as_int(self):
        """Return the value as a 64-bit signed integer, parsing strings."""
        return self._convert_int("int", 64)

    def int_or_default(self, default):
        return self._or_default(self.int, default)

    def uint(self):
        """Return the value if it is a 64-bit unsigned integer."""
        return self._exact_int("uint")

    def as_uint(self):
        return self._convert_int("uint", 64)

    def uint_or_default(self, default):
        return self._or_default(self.uint, default)

    def int8(self):
        return self._exact_int("int8")

    def as_int8(self):
        """Parse strings as 64-bit integers and truncate them to 8 bits."""
        return _wrap_signed(self._convert_int("int8", 64), 8)

    def int8_or_default(self, default):
        return self._or_default(self.int8, default)

    def uint8(self):
        return self._exact_int("uint8")

    def as_uint8(self):
        return self._convert_int("uint8", 8)

    def uint8_or_default(self, default):
        return self._or_default(self.uint8, default)

    def int16(self):
        return self._exact_int("int16")

    def as_int16(self):
        return self._convert_int("int16", 16)

    def int16_or_default(self, default):
        return self._or_default(self.int16, default)

    def uint16(self):
        return self._exact_int("uint16")

    def as_uint16(self):
        return self._convert_int("uint16", 16)

    def uint16_or_default(self, default):
        return self._or_default(self.uint16, default)

    def int32(self):
        return self._exact_int("int32")

    def as_int32(self):
        return self._convert_int("int32", 32)

    def int32_or_default(self, default):
        return self._or_default(self.int32, default)

    def uint32(self):
        return self._exact_int("uint32")

    def as_uint32(self):
        return self._convert_int("uint32", 32)

    def uint32_or_default(self, default):
        return self._or_default(self.uint32, default)

    def int64(self):
        return self._exact_int("int64")

    def as_int64(self):
        return self._convert_int("int64", 64)

    def int64_or_default(self, default):
        return self._or_default(self.int64, default)

    def uint64(self):
        return self._exact_int("uint64")

    def as_uint64(self):
        return self._convert_int("uint64", 64)

    def uint64_or_default(self, default):
        return self._or_default(self.uint64, default)

    def float32(self):
        """Return a float value rounded to single precision."""
        self._raise_err()
        value = self.val
        if isinstance(value, float):
            try:
                return _to_float32(value)
            except OverflowError:
                pass
        raise InvalidTypeError("float32", value)

    def as_float32(self):
        """Like ``float32`` but also parses strings."""
        self._raise_err()
        if isinstance(self.val, str):
            return _parse_float(self.val, 32)
        return self.float32()

    def float32_or_default(self, default):
        return self._or_default(self.float32, default)

    def float64(self):
        self._raise_err()
        if isinstance(self.val, float):
            return self.val
        raise InvalidTypeError("float64", self.val)

    def as_float64(self):
        self._raise_err()
        if isinstance(self.val, str):
            return _parse_float(self.val, 64)
        return self.float64()

    def float64_or_default(self, default):
        return self._or_default(self.float64, default)

    def string(self):
        self._raise_err()
        if isinstance(self.val, str):
            return self.val
        raise InvalidTypeError("string", self.val)

    def as_string(self):
        """Render strings, integers, floats and bytes as a string."""
        self._raise_err()
        value = self.val
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            raise TypeError(f"ekit: unsupported type {type(value).__name__}, cannot convert")
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode("utf-8", errors="replace")
        if isinstance(value, (list, tuple)):
            raise InvalidTypeError("[]byte", value)
        raise TypeError(f"ekit: unsupported type {type(value).__name__}, cannot convert")

    def string_or_default(self, default):
        return self._or_default(self.string, default)

    def bytes(self):
        self._raise_err()
        if isinstance(self.val, (bytes, bytearray)):
            return self.val
        raise InvalidTypeError("[]byte", self.val)

    def as_bytes(self):
        self._raise_err()
        value = self.val
        if isinstance(value, (bytes, bytearray)):
            return value
        if isinstance(value, str):
            return value.encode("utf-8")
        raise InvalidTypeError("[]byte", value)

    def bytes_or_default(self, default):
        return self._or_default(self.bytes, default)

    def bool(self):
        self._raise_err()
        if isinstance(self.val, bool):
            return self.val
        raise InvalidTypeError("bool", self.val)

    def bool_or_default(self, default):
        return self._or_default(self.bool, default)