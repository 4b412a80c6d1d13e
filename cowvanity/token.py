"""COW token deployment through the deterministic deployment proxy."""

import random
from dataclasses import dataclass

from eth_abi import encode
from eth_utils import to_canonical_address

from .create2 import Create2
from .encoding import WORD_SIZE, ZERO_HASH, keccak256
from .miner import Deployment
from .safe import SafeDeployment

# https://github.com/Arachnid/deterministic-deployment-proxy
DEPLOYER = to_canonical_address("0x4e59b44847b379578588920ca78fbf26c0b4956c")
TOTAL_SUPPLY = 10**27


@dataclass
class TokenParameters:
    salt: bytes = ZERO_HASH


def init_code_hash(bytecode: bytes, initial_token_holder: bytes, dao: bytes, total_supply: int) -> bytes:
    # constructor(address initialTokenHolder, address cowDao, uint256 totalSupply)
    return keccak256(
        bytecode,
        encode(["address", "address", "uint256"], [initial_token_holder, dao, total_supply]),
    )


class TokenDeployment(Deployment):
    """Token deployment whose `CREATE2` salt is mined directly."""

    def __init__(
        self,
        bytecode: bytes,
        initial_token_holder: bytes,
        dao: bytes,
        parameters: TokenParameters,
        total_supply: int = TOTAL_SUPPLY,
    ):
        self._create2 = Create2(
            DEPLOYER,
            parameters.salt,
            init_code_hash(bytecode, initial_token_holder, dao, total_supply),
        )

    @classmethod
    def from_settings(cls, settings, bytecode: bytes) -> "TokenDeployment":
        """
        Token owned by the CoW DAO Safe described in `settings`, with the DAO
        authority as the initial token holder.
        """
        cow_dao = SafeDeployment(settings.cow_dao).creation_address()
        return cls(bytecode, settings.dao_authority, cow_dao, settings.cow_token)

    @property
    def salt(self) -> bytes:
        return self._create2.salt

    @property
    def init_code_hash(self) -> bytes:
        return self._create2.init_code_hash

    @property
    def create2(self) -> Create2:
        return self._create2

    def creation_address(self) -> bytes:
        return self._create2.creation_address()

    def update(self, rng: random.Random) -> None:
        self._create2.salt = rng.randbytes(WORD_SIZE)

    def parameters(self) -> TokenParameters:
        return TokenParameters(salt=self.salt)

    def with_parameters(self, parameters: TokenParameters) -> "TokenDeployment":
        rebuilt = self.clone()
        rebuilt._create2.salt = parameters.salt
        return rebuilt

    def clone(self) -> "TokenDeployment":
        clone = TokenDeployment.__new__(TokenDeployment)
        clone._create2 = self._create2.copy()
        return clone
