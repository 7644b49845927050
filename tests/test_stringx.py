import pytest

from ekit.stringx import unsafe_to_bytes, unsafe_to_string


@pytest.mark.parametrize(
    "val, want",
    [
        ("hello", b"hello"),
        ("😀!hello world", "😀!hello world".encode("utf-8")),
        ("你好 世界！", "你好 世界！".encode("utf-8")),
    ],
)
def test_unsafe_to_bytes(val, want):
    assert unsafe_to_bytes(val) == want


@pytest.mark.parametrize(
    "val, want",
    [
        (b"hello", "hello"),
        ("😀!hello world".encode("utf-8"), "😀!hello world"),
        ("你好 世界！".encode("utf-8"), "你好 世界！"),
    ],
)
def test_unsafe_to_string(val, want):
    assert unsafe_to_string(val) == want


def test_unsafe_to_string_from_file(tmp_path):
    path = tmp_path / "test_put.txt"
    path.write_text("the test file...")
    assert unsafe_to_string(path.read_bytes()) == "the test file..."


def test_invalid_utf8_round_trips():
    raw = b"\xff\xfeok"
    assert unsafe_to_bytes(unsafe_to_string(raw)) == raw