"""Gnosis Safe proxy deployment through `createProxyWithNonce`."""

import random
from dataclasses import dataclass
from typing import List, Sequence

from eth_abi import encode
from eth_utils import to_canonical_address

from .create2 import Create2
from .encoding import (
    WORD_SIZE,
    ZERO_ADDRESS,
    ZERO_HASH,
    decode_uint,
    keccak256,
)
from .miner import Deployment

# Safe v1.3.0 deployment, identical on Ethereum mainnet and Gnosis Chain.
PROXY_FACTORY = to_canonical_address("0xa6B71E26C5e0845f74c812102Ca7114b6a896AB2")
PROXY_INIT_CODE_HASH = bytes.fromhex(
    "56e3081a3d1bb38ed4eed1a39f7729c3cc77c7825794c15bbf326f3047fd779c"
)
FALLBACK_HANDLER = to_canonical_address("0xf48f2B2d2a534e402487b3ee7C18c33Aec0Fe5e4")

# setup(address[],uint256,address,bytes,address,address,uint256,address)
SETUP_SELECTOR = bytes.fromhex("b63e800d")
SETUP_TYPES = ["address[]", "uint256", "address", "bytes", "address", "address", "uint256", "address"]


@dataclass
class SafeParameters:
    owners: List[bytes]
    threshold: int
    nonce: int = 0


def initializer(owners: Sequence[bytes], threshold: int) -> bytes:
    """ABI encoded `setup` calldata with the fallback handler and no payment."""
    return SETUP_SELECTOR + encode(
        SETUP_TYPES,
        [list(owners), threshold, ZERO_ADDRESS, b"", FALLBACK_HANDLER, ZERO_ADDRESS, 0, ZERO_ADDRESS],
    )


class SafeDeployment(Deployment):
    """
    Safe proxy deployed by the proxy factory with a salt nonce.

    The factory salt is `keccak256(keccak256(initializer) ‖ nonce)`. Owners and
    threshold are fixed at construction; mining only rewrites the nonce half of
    the 64-byte salt preimage and re-hashes it.
    """

    def __init__(self, parameters: SafeParameters):
        self._owners = tuple(bytes(o) for o in parameters.owners)
        self._threshold = parameters.threshold
        self._salt = bytearray(keccak256(initializer(self._owners, self._threshold)))
        self._salt += encode(["uint256"], [parameters.nonce])
        self._create2 = Create2(PROXY_FACTORY, ZERO_HASH, PROXY_INIT_CODE_HASH)
        self._create2.salt = keccak256(self._salt)

    @property
    def owners(self):
        return self._owners

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def initializer_hash(self) -> bytes:
        return bytes(self._salt[:WORD_SIZE])

    @property
    def nonce(self) -> int:
        return decode_uint(self._salt[WORD_SIZE:])

    @property
    def create2(self) -> Create2:
        return self._create2

    def creation_address(self) -> bytes:
        return self._create2.creation_address()

    def update(self, rng: random.Random) -> None:
        self._salt[WORD_SIZE:] = rng.randbytes(WORD_SIZE)
        self._create2.salt = keccak256(self._salt)

    def parameters(self) -> SafeParameters:
        return SafeParameters(
            owners=list(self._owners),
            threshold=self._threshold,
            nonce=self.nonce,
        )

    def with_parameters(self, parameters: SafeParameters) -> "SafeDeployment":
        return SafeDeployment(parameters)

    def clone(self) -> "SafeDeployment":
        clone = SafeDeployment.__new__(SafeDeployment)
        clone._owners = self._owners
        clone._threshold = self._threshold
        clone._salt = bytearray(self._salt)
        clone._create2 = self._create2.copy()
        return clone
