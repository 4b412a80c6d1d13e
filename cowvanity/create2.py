"""EIP-1014 `CREATE2` deterministic address computation."""

from .encoding import ADDRESS_SIZE, WORD_SIZE, keccak256

# 0xff ‖ factory(20) ‖ salt(32) ‖ init code hash(32)
_FACTORY = slice(1, 1 + ADDRESS_SIZE)
_SALT = slice(_FACTORY.stop, _FACTORY.stop + WORD_SIZE)
_INIT_CODE_HASH = slice(_SALT.stop, _SALT.stop + WORD_SIZE)
BUFFER_SIZE = _INIT_CODE_HASH.stop


class Create2:
    """
    `CREATE2` parameters kept in a single resident 85-byte preimage buffer.

    Only the salt region is ever rewritten after construction, so the search
    loop does not rebuild the preimage on each attempt.
    """

    __slots__ = ("_buffer",)

    def __init__(self, factory: bytes, salt: bytes, init_code_hash: bytes):
        if len(factory) != ADDRESS_SIZE:
            raise ValueError("factory must be a 20-byte address")
        if len(salt) != WORD_SIZE or len(init_code_hash) != WORD_SIZE:
            raise ValueError("salt and init code hash must be 32 bytes")
        self._buffer = bytearray(BUFFER_SIZE)
        self._buffer[0] = 0xFF
        self._buffer[_FACTORY] = factory
        self._buffer[_SALT] = salt
        self._buffer[_INIT_CODE_HASH] = init_code_hash

    @property
    def factory(self) -> bytes:
        return bytes(self._buffer[_FACTORY])

    @property
    def salt(self) -> bytes:
        return bytes(self._buffer[_SALT])

    @salt.setter
    def salt(self, value: bytes):
        if len(value) != WORD_SIZE:
            raise ValueError("salt must be 32 bytes")
        self._buffer[_SALT] = value

    @property
    def init_code_hash(self) -> bytes:
        return bytes(self._buffer[_INIT_CODE_HASH])

    def creation_address(self) -> bytes:
        """Deterministic deployment address for the current parameters."""
        return keccak256(self._buffer)[12:]

    def copy(self) -> "Create2":
        clone = Create2.__new__(Create2)
        clone._buffer = bytearray(self._buffer)
        return clone

    def __getstate__(self):
        return bytes(self._buffer)

    def __setstate__(self, state):
        self._buffer = bytearray(state)

    def __eq__(self, other):
        if not isinstance(other, Create2):
            return NotImplemented
        return self._buffer == other._buffer

    def __repr__(self):
        return (
            f"Create2(factory=0x{self.factory.hex()}, salt=0x{self.salt.hex()}, "
            f"init_code_hash=0x{self.init_code_hash.hex()})"
        )


def create2_address(factory: bytes, salt: bytes, init_code_hash: bytes) -> bytes:
    """One-shot `keccak256(0xff ‖ factory ‖ salt ‖ init_code_hash)[12:]`."""
    return Create2(factory, salt, init_code_hash).creation_address()
