# ekit

Small building blocks for everyday Python code: typed access to loosely typed
values, helpers for database columns and rows, and thread-safe synchronisation
primitives.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Typed value access — `ekit.value`

`AnyValue(val, err)` holds a value of unknown type, or the exception that
prevented getting it. Every accessor first raises `err` if one is set.

- Strict accessors return the value only when it already has the requested kind:
  `int()`, `uint()`, `int8()` … `int64()`, `uint8()` … `uint64()` (an integer
  within the range of that width), `float32()`, `float64()`, `string()`,
  `bytes()` and `bool()`. Otherwise they raise `InvalidTypeError`.
- `as_*` accessors (`as_int()`, `as_uint16()`, `as_float64()`, …) also parse
  strings; a string that is not a number, or out of range, raises `ValueError`.
  `as_bytes()` encodes strings as UTF-8. `as_string()` renders integers in
  decimal, floats with ten decimal places and bytes as UTF-8 text.
- `*_or_default(default)` accessors return `default` instead of raising.

```python
from ekit.value import AnyValue

assert AnyValue("1").as_int() == 1
assert AnyValue(1e2).as_string() == "100.0000000000"
assert AnyValue("").int_or_default(7) == 7
```

## Comparison — `ekit.comparator`

`comparator_real_number(src, dst)` returns -1, 0 or 1.

## SQL helpers — `ekit.sqlx`

- `ekit.sqlx.encrypt.EncryptColumn(val, valid, key, kind, decode_hook)`:
  `value()` encodes `val` and encrypts it with AES-GCM, returning the nonce
  followed by the ciphertext; `scan(src)` decrypts bytes or text back into `val`
  and sets `valid`. The key must be 16, 24 or 32 bytes of UTF-8. `kind` chooses
  the encoding (`"string"`, `"bytes"`, a fixed-width numeric kind such as
  `"int32"` or `"float64"` stored big-endian, or `"json"`); when left as None it
  is inferred from `val`. `decode_hook` turns decoded JSON into the object you
  want. An invalid column raises `ValueError` from `value()`.
- `ekit.sqlx.json_column.JsonColumn(val, valid, decode_hook)`: `value()` returns
  compact JSON bytes, or None when not valid; `scan(src)` accepts bytes, text or
  None (which is ignored). Dataclasses are serialised as dictionaries.
- `ekit.sqlx.newnull`: `new_null_string`, `new_null_int64`, `new_null_float64`,
  `new_null_bool`, `new_null_time` and `new_null_bytes` build a frozen
  `Null(value, valid)` that is valid only when the value is not its zero value
  (empty, 0, False, None or `datetime.min`).
- `ekit.sqlx.scanner`: `new_sql_rows_scanner(rows)` returns a `RowsScanner` over
  any DB-API style cursor (the `Rows` protocol: `description` and `fetchone()`,
  with `nextset()` optional). `scan()` returns the next row as a list,
  `scan_all()` every remaining row, and `next_result_set()` moves to the next
  result set. Running out of rows raises `NoMoreRowsError`; a cursor without
  column information raises `InvalidArgumentError`. The scanner never closes
  the cursor.

```python
import sqlite3
from ekit.sqlx.scanner import new_sql_rows_scanner

conn = sqlite3.connect(":memory:")
cursor = conn.execute("SELECT 1, 'a' UNION ALL SELECT 2, 'b'")
assert new_sql_rows_scanner(cursor).scan_all() == [[1, "a"], [2, "b"]]
```

## Strings — `ekit.stringx`

`unsafe_to_bytes(val)` and `unsafe_to_string(val)` convert between `str` and
`bytes` as UTF-8; bytes that are not valid UTF-8 survive the round trip.

## Synchronisation — `ekit.syncx`

- `ekit.syncx.cond.Cond(lock)`: a condition variable. `wait(timeout)` releases
  the lock, sleeps until woken and takes the lock again; with a timeout it
  raises `TimeoutError` if nobody woke it in time. `signal()` wakes waiters in
  the order they started waiting, `broadcast()` wakes them all. The instance is
  a context manager for its lock and refuses to be copied.
- `ekit.syncx.map.Map`: a thread-safe map with `load`, `store`,
  `load_or_store`, `load_or_store_func`, `load_and_delete`, `delete`, `range`
  and `len()`. Lookups return `(value, present)`, so a key stored with None is
  told apart from a missing one.
- `ekit.syncx.pool.Pool(factory)`: `get()` hands out a pooled object or builds
  one with `factory`; `put(item)` returns it.
- `ekit.syncx.segment_key_lock.SegmentKeysLock(size)`: `size` read-write locks,
  each key using the one its FNV-1a hash selects: `lock`, `try_lock`, `unlock`,
  `rlock`, `try_rlock` and `runlock`.
- `ekit.syncx.atomicx`: `new_value()` (holding None) and `new_value_of(t)`
  create a `Value` with atomic `load`, `store`, `swap` and `compare_and_swap`.

```python
from ekit.syncx.atomicx import new_value_of

counter = new_value_of(123)
assert counter.swap(456) == 123
assert counter.compare_and_swap(456, 789)
assert counter.load() == 789
```

## What it does not do

The row scanner does not convert column values: each row holds exactly what the
cursor's `fetchone()` returned. There is no command-line tool; everything here
is used as a library.