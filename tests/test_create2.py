import pytest

from cowvanity.create2 import Create2, create2_address
from cowvanity.encoding import keccak256

FACTORY = bytes.fromhex("5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f")
SALT = bytes.fromhex("0815f4f41ecb52c539a2caa2ccf468f9bc76a0f2651129ff468ac2a33cf75983")
INIT_CODE_HASH = bytes.fromhex("96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f")
EXPECTED = bytes.fromhex("3e8468f66d30fc99f745481d4b383f89861702c6")


def test_computes_deterministic_address():
    assert Create2(FACTORY, SALT, INIT_CODE_HASH).creation_address() == EXPECTED
    assert create2_address(FACTORY, SALT, INIT_CODE_HASH) == EXPECTED

def test_repeated_calls_are_stable():
    create2 = Create2(FACTORY, SALT, INIT_CODE_HASH)
    assert {create2.creation_address() for _ in range(10)} == {EXPECTED}

def test_matches_eip1014_formula():
    salt = bytes(range(32))
    expected = keccak256(b"\xff", FACTORY, salt, INIT_CODE_HASH)[12:]
    assert create2_address(FACTORY, salt, INIT_CODE_HASH) == expected

def test_salt_setter_only_touches_salt():
    create2 = Create2(FACTORY, bytes(32), INIT_CODE_HASH)
    create2.salt = SALT
    assert create2.factory == FACTORY
    assert create2.salt == SALT
    assert create2.init_code_hash == INIT_CODE_HASH
    assert create2.creation_address() == EXPECTED

def test_copy_is_independent():
    create2 = Create2(FACTORY, SALT, INIT_CODE_HASH)
    clone = create2.copy()
    assert clone == create2
    clone.salt = bytes(32)
    assert create2.salt == SALT
    assert create2.creation_address() == EXPECTED

def test_rejects_bad_lengths():
    with pytest.raises(ValueError):
        Create2(FACTORY[:19], SALT, INIT_CODE_HASH)
    with pytest.raises(ValueError):
        Create2(FACTORY, SALT[:31], INIT_CODE_HASH)
    create2 = Create2(FACTORY, SALT, INIT_CODE_HASH)
    with pytest.raises(ValueError):
        create2.salt = b"\x00"
