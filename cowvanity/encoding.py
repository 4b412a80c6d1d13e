"""
Hashing and fixed-width word encoding helpers.

Everything that ends up in a `CREATE2` preimage or in calldata goes through
here: Keccak-256 (the Ethereum variant, not SHA3-256) and 32-byte big-endian
words.
"""

import re
from typing import Optional, Union

import click
from eth_abi import encode
from eth_utils import keccak

ADDRESS_SIZE = 20
WORD_SIZE = 32
UINT256_MAX = 2**256 - 1

ZERO_ADDRESS = b"\x00" * ADDRESS_SIZE
ZERO_HASH = b"\x00" * WORD_SIZE

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")
_HEX_NUMBER = re.compile(r"0[xX][0-9a-fA-F]+")
_DEC_NUMBER = re.compile(r"[0-9]+")


class InvalidInput(click.ClickException):
    """Malformed hex, number or address supplied from the outside."""


# -------------------------- Hashing --------------------------

def keccak256(*chunks: bytes) -> bytes:
    """Keccak-256 digest of the concatenation of `chunks`."""
    return keccak(b"".join(chunks))


# -------------------------- Words --------------------------

def encode_uint(value: int) -> bytes:
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"value {value} does not fit in uint256")
    return encode(["uint256"], [value])

def encode_address(address: bytes) -> bytes:
    if len(address) != ADDRESS_SIZE:
        raise ValueError(f"address must be {ADDRESS_SIZE} bytes, got {len(address)}")
    return encode(["address"], [address])

def encode_word(value: Union[int, bytes]) -> bytes:
    """Left-zero-padded 32-byte word for an integer or a 20-byte address."""
    if isinstance(value, int):
        return encode_uint(value)
    return encode_address(bytes(value))

def decode_uint(word: bytes) -> int:
    return int.from_bytes(word, "big")

def decode_address(word: bytes) -> bytes:
    return bytes(word[WORD_SIZE - ADDRESS_SIZE:WORD_SIZE])


# -------------------------- Hex --------------------------

def strip0x(h: str) -> str:
    return h[2:] if h.startswith(("0x", "0X")) else h

def to_hex(b: bytes) -> str:
    return "0x" + bytes(b).hex()

def is_hex_digits(h: str) -> bool:
    return _HEX_DIGITS.fullmatch(h) is not None

def to_bytes(h: str, size: Optional[int] = None) -> bytes:
    """Decode a hex string (optional 0x), optionally enforcing a byte length."""
    h2 = strip0x(h)
    if not is_hex_digits(h2):
        raise InvalidInput(f"Invalid hex {h!r}: only hex digits are allowed")
    if len(h2) % 2 != 0:
        raise InvalidInput(f"Hex length must be even: {h!r}")
    b = bytes.fromhex(h2)
    if size is not None and len(b) != size:
        raise InvalidInput(f"Expected {size} bytes, got {len(b)}: {h!r}")
    return b

def parse_uint256(value: Union[str, int]) -> int:
    """Parse a `0x` hex or decimal string (or a plain int) into a uint256."""
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid number: {value!r}")
    if isinstance(value, int):
        n = value
    elif isinstance(value, str):
        if _HEX_NUMBER.fullmatch(value):
            n = int(value[2:], 16)
        elif _DEC_NUMBER.fullmatch(value):
            n = int(value, 10)
        else:
            raise InvalidInput(f"Invalid number: {value!r}")
    else:
        raise InvalidInput(f"Invalid number: {value!r}")
    if n < 0 or n > UINT256_MAX:
        raise InvalidInput(f"Number out of uint256 range: {value!r}")
    return n
