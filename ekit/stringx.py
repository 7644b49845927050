"""Conversions between text and bytes."""

from __future__ import annotations

__all__ = ["unsafe_to_bytes", "unsafe_to_string"]


def unsafe_to_bytes(val: str) -> bytes:
    """Encode text as UTF-8; undecodable bytes from ``unsafe_to_string`` survive."""
    return val.encode("utf-8", "surrogateescape")


def unsafe_to_string(val: bytes) -> str:
    """Decode UTF-8 bytes, keeping invalid bytes recoverable."""
    return bytes(val).decode("utf-8", "surrogateescape")