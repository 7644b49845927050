from datetime import datetime, timezone

import pytest

from ekit.sqlx.newnull import (
    Null,
    new_null_bool,
    new_null_bytes,
    new_null_float64,
    new_null_int64,
    new_null_string,
    new_null_time,
)


@pytest.mark.parametrize(
    "val, want", [(True, Null(True, True)), (False, Null(False, False))]
)
def test_new_null_bool(val, want):
    assert new_null_bool(val) == want


@pytest.mark.parametrize(
    "val, want", [(b"test", Null("test", True)), (b"", Null("", False))]
)
def test_new_null_bytes(val, want):
    assert new_null_bytes(val) == want


@pytest.mark.parametrize(
    "val, want", [(1.1, Null(1.1, True)), (0.0, Null(0.0, False))]
)
def test_new_null_float64(val, want):
    assert new_null_float64(val) == want


@pytest.mark.parametrize("val, want", [(1, Null(1, True)), (0, Null(0, False))])
def test_new_null_int64(val, want):
    assert new_null_int64(val) == want


@pytest.mark.parametrize(
    "val, want", [("test", Null("test", True)), ("", Null("", False))]
)
def test_new_null_string(val, want):
    assert new_null_string(val) == want


def test_new_null_time_nonzero():
    when = datetime(2023, 10, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert new_null_time(when) == Null(when, True)


@pytest.mark.parametrize(
    "val", [None, datetime.min, datetime.min.replace(tzinfo=timezone.utc)]
)
def test_new_null_time_zero(val):
    assert new_null_time(val) == Null(val, False)