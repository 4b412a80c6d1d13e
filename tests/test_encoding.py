import pytest

from cowvanity.encoding import (
    InvalidInput,
    decode_address,
    decode_uint,
    encode_word,
    keccak256,
    parse_uint256,
    to_bytes,
)


def test_keccak256_is_not_sha3():
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"

def test_keccak256_concatenates_chunks():
    assert keccak256(b"ab", b"", b"cd") == keccak256(b"abcd")

def test_encode_word_uint():
    assert encode_word(0x100) == bytes(30) + b"\x01\x00"
    assert encode_word(2**256 - 1) == b"\xff" * 32
    with pytest.raises(ValueError):
        encode_word(2**256)
    with pytest.raises(ValueError):
        encode_word(-1)

def test_encode_word_address_round_trip():
    address = bytes.fromhex("aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa")
    word = encode_word(address)
    assert word == bytes(12) + address
    assert decode_address(word) == address

def test_encode_word_rejects_short_address():
    with pytest.raises(ValueError):
        encode_word(b"\x01" * 19)

def test_decode_uint():
    assert decode_uint(encode_word(0x17e63b10d14)) == 0x17e63b10d14

@pytest.mark.parametrize("text,expected", [
    ("0x17e63b10d14", 0x17e63b10d14),
    ("1643091116067", 1643091116067),
    ("0", 0),
    (42, 42),
])
def test_parse_uint256(text, expected):
    assert parse_uint256(text) == expected

@pytest.mark.parametrize("text", ["0xzz", "12a", "", "-1", "0x", "1_000", "0x1_0", " 12", "+5", hex(2**256), True, 1.5])
def test_parse_uint256_rejects(text):
    with pytest.raises(InvalidInput):
        parse_uint256(text)

def test_to_bytes():
    assert to_bytes("0xc0de") == b"\xc0\xde"
    assert to_bytes("c0de") == b"\xc0\xde"
    assert to_bytes("") == b""
    with pytest.raises(InvalidInput):
        to_bytes("0xc0d")
    with pytest.raises(InvalidInput):
        to_bytes("0xgg")
    with pytest.raises(InvalidInput):
        to_bytes("0xc0de", 32)

@pytest.mark.parametrize("text", ["c0  de", "0xc0 de", "c0de\n", " c0de", "0x_c0de"])
def test_to_bytes_rejects_non_hex_characters(text):
    with pytest.raises(InvalidInput):
        to_bytes(text)
