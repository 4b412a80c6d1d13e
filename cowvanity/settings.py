"""
Deployment settings file and contract artifact loading.

The settings file is the same JSON document the deployment scripts consume:

    {
      "daoAuthority": "0x...",
      "cowDao": {"threshold": 2, "owners": ["0x...", ...], "nonce": "0x..."},
      "teamController": {"threshold": 1, "owners": ["0x..."]},
      "cowToken": {"salt": "0x..."}
    }

Mined parameters are written back into it, so unknown keys are preserved.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

import click
from eth_utils import is_hex_address, to_canonical_address, to_checksum_address

from .encoding import (
    WORD_SIZE,
    InvalidInput,
    is_hex_digits,
    parse_uint256,
    to_bytes,
    to_hex,
)
from .safe import SafeParameters
from .token import TokenParameters

DEFAULT_ARTIFACT = "build/artifacts/src/contracts/CowProtocolToken.sol/CowProtocolToken.json"

# contract selector -> settings key
SAFE_KEYS = {"dao": "cowDao", "team-controller": "teamController"}
TOKEN_KEY = "cowToken"


class SettingsError(InvalidInput):
    """The settings file is structurally valid JSON but has bad values."""


class ArtifactError(click.ClickException):
    """The contract artifact cannot provide creation bytecode."""


# -------------------------- Helpers --------------------------

def _read_json(path: str, what: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"failed to read {what} file {path}: {e}")

def parse_address(value: Any, where: str) -> bytes:
    if not isinstance(value, str) or not is_hex_address(value):
        raise SettingsError(f"{where}: invalid address {value!r}")
    return to_canonical_address(value)

def _require(obj: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(obj, dict):
        raise SettingsError(f"{where}: expected an object")
    if key not in obj:
        raise SettingsError(f"{where}: missing field {key!r}")
    return obj[key]

def parse_safe_parameters(obj: Dict[str, Any], where: str) -> SafeParameters:
    threshold = _require(obj, "threshold", where)
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
        raise SettingsError(f"{where}.threshold: must be an integer >= 1, got {threshold!r}")
    owners = _require(obj, "owners", where)
    if not isinstance(owners, list):
        raise SettingsError(f"{where}.owners: expected a list of addresses")
    try:
        nonce = parse_uint256(obj.get("nonce", 0))
    except InvalidInput as e:
        raise SettingsError(f"{where}.nonce: {e.message}")
    return SafeParameters(
        owners=[parse_address(o, f"{where}.owners[{i}]") for i, o in enumerate(owners)],
        threshold=threshold,
        nonce=nonce,
    )

def parse_token_parameters(obj: Dict[str, Any], where: str) -> TokenParameters:
    if not isinstance(obj, dict):
        raise SettingsError(f"{where}: expected an object")
    if "salt" not in obj:
        return TokenParameters()
    try:
        return TokenParameters(salt=to_bytes(str(obj["salt"]), WORD_SIZE))
    except InvalidInput as e:
        raise SettingsError(f"{where}.salt: {e.message}")


# -------------------------- Settings --------------------------

@dataclass
class Settings:
    dao_authority: bytes
    cow_dao: SafeParameters
    team_controller: SafeParameters
    cow_token: TokenParameters

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "Settings":
        if not isinstance(obj, dict):
            raise SettingsError("settings: expected a JSON object")
        # older settings files call the DAO authority `gnosisDao`
        authority_key = "gnosisDao" if "gnosisDao" in obj and "daoAuthority" not in obj else "daoAuthority"
        return cls(
            dao_authority=parse_address(_require(obj, authority_key, "settings"), authority_key),
            cow_dao=parse_safe_parameters(_require(obj, "cowDao", "settings"), "cowDao"),
            team_controller=parse_safe_parameters(
                _require(obj, "teamController", "settings"), "teamController"
            ),
            cow_token=parse_token_parameters(obj.get(TOKEN_KEY, {}), TOKEN_KEY),
        )

    @classmethod
    def from_file(cls, path: str) -> "Settings":
        return cls.from_dict(_read_json(path, "settings"))

    def safe_parameters(self, contract: str) -> SafeParameters:
        return self.cow_dao if contract == "dao" else self.team_controller


def parameters_to_dict(parameters: Union[SafeParameters, TokenParameters]) -> Dict[str, Any]:
    if isinstance(parameters, SafeParameters):
        return {
            "threshold": parameters.threshold,
            "owners": [to_checksum_address(o) for o in parameters.owners],
            "nonce": str(parameters.nonce),
        }
    return {"salt": to_hex(parameters.salt)}

def save_parameters(path: str, key: str, parameters: Union[SafeParameters, TokenParameters]) -> None:
    """Write the mined nonce or salt under `key`, keeping every other field as is."""
    obj = _read_json(path, "settings")
    if not isinstance(obj, dict) or not isinstance(obj.setdefault(key, {}), dict):
        raise SettingsError(f"{path}: cannot store parameters under {key!r}")
    if isinstance(parameters, SafeParameters):
        obj[key]["nonce"] = str(parameters.nonce)
    else:
        obj[key]["salt"] = to_hex(parameters.salt)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(obj, f, indent=2)
            f.write("\n")
    except OSError as e:
        raise click.ClickException(f"failed to write settings file {path}: {e}")


# -------------------------- Artifacts --------------------------

def load_artifact_bytecode(path: str) -> bytes:
    """Creation bytecode from a hardhat artifact; other fields are ignored."""
    artifact = _read_json(path, "artifact")
    bytecode = artifact.get("bytecode") if isinstance(artifact, dict) else None
    if not isinstance(bytecode, str):
        raise ArtifactError(f"{path}: missing bytecode")
    if not bytecode.startswith("0x"):
        raise ArtifactError(f"{path}: bytecode is missing 0x prefix")
    code = bytecode[2:]
    if not is_hex_digits(code) or len(code) % 2 != 0:
        raise ArtifactError(f"{path}: invalid bytecode hex")
    return bytes.fromhex(code)
