"""Row scanning over DB-API style cursors."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

__all__ = [
    "InvalidArgumentError",
    "NoMoreRowsError",
    "Rows",
    "RowsScanner",
    "new_sql_rows_scanner",
]


class NoMoreRowsError(LookupError):
    """Raised when every row of the current result set has been read."""

    def __init__(self) -> None:
        super().__init__("ekit: all rows have been read")


class InvalidArgumentError(ValueError):
    """Raised when the scanner is given unusable rows."""


@runtime_checkable
class Rows(Protocol):
    """The part of a DB-API cursor that the scanner needs.

    ``nextset`` is optional, as it is in the DB-API.
    """

    @property
    def description(self) -> Optional[Sequence[Sequence[Any]]]: ...

    def fetchone(self) -> Optional[Sequence[Any]]: ...


def _detach(value: Any) -> Any:
    # Buffers handed out by a driver may be reused; keep an independent copy.
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


class RowsScanner:
    """Reads rows from a cursor as lists of values.

    The scanner never closes the cursor; the caller owns it.
    """

    def __init__(self, rows: Rows) -> None:
        if rows is None:
            raise InvalidArgumentError("ekit: invalid argument, rows must not be None")
        try:
            description = rows.description
        except Exception as exc:
            raise InvalidArgumentError(
                f"ekit: invalid argument, cannot get column types of rows: {exc}"
            ) from exc
        if not description:
            raise InvalidArgumentError(
                "ekit: invalid argument, cannot get column types of rows"
            )
        self._rows = rows
        self.columns = [column[0] for column in description]

    def scan(self) -> list[Any]:
        """Return the next row; raise NoMoreRowsError when there is none."""
        row = self._rows.fetchone()
        if row is None:
            raise NoMoreRowsError()
        return [_detach(value) for value in row]

    def scan_all(self) -> list[list[Any]]:
        """Return every remaining row of the current result set."""
        rows = []
        while True:
            try:
                rows.append(self.scan())
            except NoMoreRowsError:
                return rows

    def next_result_set(self) -> bool:
        """Move to the next result set; False when there is none."""
        nextset = getattr(self._rows, "nextset", None)
        if nextset is None:
            return False
        return bool(nextset())


def new_sql_rows_scanner(rows: Rows) -> RowsScanner:
    """Return a scanner over ``rows``."""
    return RowsScanner(rows)