"""A column value stored encrypted with AES-GCM."""

from __future__ import annotations

import dataclasses
import json
import os
import struct
from dataclasses import dataclass
from typing import Any, Callable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

__all__ = ["EncryptColumn"]

_NONCE_SIZE = 12
_KEY_SIZES = (16, 24, 32)

_BINARY_FORMATS = {
    "int8": ">b",
    "int16": ">h",
    "int32": ">i",
    "int64": ">q",
    "int": ">q",
    "uint8": ">B",
    "uint16": ">H",
    "uint32": ">I",
    "uint64": ">Q",
    "uint": ">Q",
    "float32": ">f",
    "float64": ">d",
}
_KINDS = frozenset({"string", "bytes", "json", *_BINARY_FORMATS})


def _infer_kind(val: Any) -> str:
    if isinstance(val, str):
        return "string"
    if isinstance(val, (bytes, bytearray, memoryview)):
        return "bytes"
    if isinstance(val, bool):
        return "json"
    if isinstance(val, int):
        return "int"
    if isinstance(val, float):
        return "float64"
    return "json"


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@dataclass
class EncryptColumn:
    """A value that is written encrypted and read back decrypted.

    ``kind`` fixes the encoding before encryption: ``"string"`` and
    ``"bytes"`` are stored as is, the fixed-width numeric kinds
    (``"int8"`` ... ``"uint64"``, ``"int"``, ``"uint"``, ``"float32"``,
    ``"float64"``) as big-endian binary, and ``"json"`` as JSON. When
    ``kind`` is None it is inferred from ``val``; an unset ``val`` reads
    back as JSON. ``decode_hook`` turns decoded JSON into the wanted object.
    """

    val: Any = None
    valid: bool = False
    key: str = ""
    kind: str | None = None
    decode_hook: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if self.kind is not None and self.kind not in _KINDS:
            raise ValueError(f"ekit: unknown EncryptColumn kind {self.kind!r}")

    def value(self) -> bytes:
        """Return the encoded value encrypted as nonce followed by ciphertext."""
        if not self.valid:
            raise ValueError("ekit: EncryptColumn is invalid")
        key = self.key.encode("utf-8")
        if len(key) not in _KEY_SIZES:
            raise ValueError("ekit: EncryptColumn only supports 16/24/32 byte keys")
        return self._encrypt(key, self._encode())

    def scan(self, src: Any) -> None:
        """Decrypt ``src`` and decode it into ``val``."""
        if isinstance(src, (bytes, bytearray, memoryview)):
            data = bytes(src)
        elif isinstance(src, str):
            data = src.encode("utf-8", "surrogateescape")
        else:
            raise TypeError(f"ekit: EncryptColumn.scan does not support src type {src}")
        plain = self._decrypt(self.key.encode("utf-8"), data)
        try:
            self.val = self._decode(plain)
        except Exception:
            self.valid = False
            raise
        self.valid = True

    def _encode(self) -> bytes:
        kind = self.kind or _infer_kind(self.val)
        if kind == "string":
            return self.val.encode("utf-8", "surrogateescape")
        if kind == "bytes":
            return bytes(self.val)
        fmt = _BINARY_FORMATS.get(kind)
        if fmt is not None:
            try:
                return struct.pack(fmt, self.val)
            except (struct.error, OverflowError) as exc:
                raise ValueError(f"ekit: cannot encode {self.val!r} as {kind}") from exc
        return json.dumps(
            self.val,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
            default=_json_default,
        ).encode("utf-8")

    def _decode(self, plain: bytes) -> Any:
        kind = self.kind or _infer_kind(self.val)
        if kind == "string":
            return plain.decode("utf-8", "surrogateescape")
        if kind == "bytes":
            return plain
        fmt = _BINARY_FORMATS.get(kind)
        if fmt is not None:
            if len(plain) < struct.calcsize(fmt):
                raise ValueError(f"ekit: not enough data to decode {kind}")
            return struct.unpack_from(fmt, plain)[0]
        decoded = json.loads(plain)
        return self.decode_hook(decoded) if self.decode_hook else decoded

    @staticmethod
    def _encrypt(key: bytes, data: bytes) -> bytes:
        nonce = os.urandom(_NONCE_SIZE)
        return nonce + AESGCM(key).encrypt(nonce, data, None)

    @staticmethod
    def _decrypt(key: bytes, data: bytes) -> bytes:
        cipher = AESGCM(key)
        nonce, sealed = data[:_NONCE_SIZE], data[_NONCE_SIZE:]
        try:
            return cipher.decrypt(nonce, sealed, None)
        except InvalidTag:
            raise ValueError("ekit: message authentication failed") from None