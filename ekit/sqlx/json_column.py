"""A column value stored as JSON."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Callable

__all__ = ["JsonColumn"]


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@dataclass
class JsonColumn:
    """A value serialised to JSON for databases without a JSON type.

    ``decode_hook`` turns decoded JSON into the wanted object on ``scan``.
    """

    val: Any = None
    valid: bool = False
    decode_hook: Callable[[Any], Any] | None = None

    def value(self) -> bytes | None:
        """Return the JSON encoding of ``val``, or None when not valid."""
        if not self.valid:
            return None
        return json.dumps(
            self.val,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
            default=_json_default,
        ).encode("utf-8")

    def scan(self, src: Any) -> None:
        """Decode ``src`` (bytes, str or None) into ``val``; None is ignored."""
        if src is None:
            return
        if isinstance(src, (bytes, bytearray, memoryview)):
            data: bytes | str = bytes(src)
        elif isinstance(src, str):
            data = src
        else:
            raise TypeError(f"ekit: JsonColumn.scan does not support src type {src}")
        decoded = json.loads(data)
        self.val = self.decode_hook(decoded) if self.decode_hook else decoded
        self.valid = True