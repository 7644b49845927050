import sqlite3
from dataclasses import dataclass

import pytest

from ekit.sqlx.encrypt import EncryptColumn

KEY = "placeholder".ljust(16)
KEY_32 = "placeholder".ljust(32)


@dataclass
class Simple:
    name: str
    age: int


def test_wrong_length_key():
    col = EncryptColumn(val="abc", valid=True, key="placeholder")
    with pytest.raises(ValueError, match="16/24/32"):
        col.value()


def test_invalid_column_cannot_be_encrypted():
    with pytest.raises(ValueError, match="invalid"):
        EncryptColumn(val="abc", key=KEY).value()


def test_int32_round_trip_with_32_byte_key():
    source = EncryptColumn(val=123, valid=True, key=KEY_32, kind="int32")
    target = EncryptColumn(key=KEY_32, kind="int32")
    target.scan(source.value())
    assert target.val == 123
    assert target.valid is True


def test_int_round_trip_inferred_kind():
    source = EncryptColumn(val=123, valid=True, key=KEY)
    target = EncryptColumn(key=KEY, kind="int")
    target.scan(source.value())
    assert (target.val, target.valid) == (123, True)


def test_string_round_trip():
    text = "adsnfjkenfjkndjsknfjenjfknsadnfkjejfn"
    source = EncryptColumn(val=text, valid=True, key=KEY)
    target = EncryptColumn(key=KEY, kind="string")
    target.scan(source.value())
    assert target.val == text
    assert target.valid


@pytest.mark.parametrize("val", [complex(1, 2), 1 + 0j])
def test_complex_cannot_be_encoded(val):
    with pytest.raises(TypeError):
        EncryptColumn(val=val, valid=True, key=KEY).value()


def test_nonce_makes_each_ciphertext_unique():
    col = EncryptColumn(val="same", valid=True, key=KEY)
    first, second = col.value(), col.value()
    assert first != second
    assert len(first) == len(second) == 12 + len(b"same") + 16


def test_tampered_data_is_rejected():
    data = bytearray(EncryptColumn(val="abc", valid=True, key=KEY).value())
    data[-1] ^= 0xFF
    target = EncryptColumn(key=KEY, kind="string")
    with pytest.raises(ValueError, match="authentication"):
        target.scan(bytes(data))
    assert target.valid is False


def test_scan_rejects_unsupported_source():
    with pytest.raises(TypeError, match="src type 42"):
        EncryptColumn(key=KEY, kind="int").scan(42)


def test_scan_decode_failure_marks_invalid():
    data = EncryptColumn(val="abc", valid=True, key=KEY).value()
    target = EncryptColumn(key=KEY, kind="int64", valid=True)
    with pytest.raises(ValueError):
        target.scan(data)
    assert target.valid is False


def test_out_of_range_value_rejected():
    with pytest.raises(ValueError, match="int8"):
        EncryptColumn(val=1000, valid=True, key=KEY, kind="int8").value()


def test_unknown_kind_rejected():
    with pytest.raises(ValueError, match="kind"):
        EncryptColumn(key=KEY, kind="complex64")


@pytest.fixture
def db():
    conn = sqlite3.connect(":memory:")
    conn.executescript(
        """
        CREATE TABLE product(
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            encrypt TEXT NOT NULL
        );
        INSERT INTO product (id, encrypt) VALUES (1, '13adfdf');
        """
    )
    yield conn
    conn.close()


@pytest.mark.parametrize(
    "kind, val",
    [
        ("int8", 123),
        ("int16", 330),
        ("int32", 65550),
        ("int64", 4294967300),
        ("uint8", 123),
        ("uint16", 330),
        ("uint32", 65550),
        ("uint64", 4294967300),
        ("int", 123),
        ("int", (1 << 16) + 1),
        ("uint", 123),
        ("uint", (1 << 16) + 1),
        ("float32", 123.5),
        ("float64", 1212321412321323.12222221322),
        ("json", {"A": "B", "C": "D"}),
        ("json", ["B", "D", "E"]),
        ("bytes", b"hello"),
        ("json", True),
    ],
)
def test_round_trip_through_database(db, kind, val):
    encrypt = EncryptColumn(val=val, valid=True, key=KEY, kind=kind)
    db.execute("UPDATE product SET encrypt = ? WHERE id = 1", (encrypt.value(),))
    (stored,) = db.execute("SELECT encrypt FROM product WHERE id = 1").fetchone()
    decrypt = EncryptColumn(key=KEY, kind=kind)
    decrypt.scan(stored)
    assert decrypt.val == val
    assert decrypt.valid is True


def test_struct_round_trip_through_database(db):
    encrypt = EncryptColumn(val=Simple("大明", 99), valid=True, key=KEY)
    db.execute("UPDATE product SET encrypt = ? WHERE id = 1", (encrypt.value(),))
    (stored,) = db.execute("SELECT encrypt FROM product WHERE id = 1").fetchone()
    decrypt = EncryptColumn(key=KEY, kind="json", decode_hook=lambda d: Simple(**d))
    decrypt.scan(stored)
    assert decrypt.val == Simple("大明", 99)
    assert decrypt.valid