"""CREATE2 vanity address mining for the CoW DAO Safes and the COW token."""

from .create2 import Create2, create2_address
from .miner import Deployment, SearchStats, search_address
from .safe import SafeDeployment, SafeParameters
from .token import TokenDeployment, TokenParameters

__version__ = "0.1.0"
