import json

import pytest


@pytest.fixture
def settings_obj():
    return {
        "daoAuthority": "0x9dA0424242424242424242424242424242424242",
        "cowDao": {
            "threshold": 1,
            "owners": ["0x85108e6bEE0E6E4d317b72751365d5A5D2Ee66a5"],
            "nonce": "0x17e63b10d14",
        },
        "teamController": {
            "threshold": 2,
            "owners": [
                "0x234ec257298586ad7242c1a74f57879c041140b7",
                "0xc409869444e8f42f3bca2cfd7e94b98f316de37b",
                "0xce280ea3648d4027275d77abdfa7c704fe5199c5",
            ],
            "nonce": "1643091116067",
        },
        "cowToken": {
            "salt": "0x5a175a175a175a175a175a175a175a175a175a175a175a175a175a175a175a17",
        },
        "virtualCowToken": {"merkleRoot": "0x00"},
    }


@pytest.fixture
def settings_file(tmp_path, settings_obj):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(settings_obj, indent=2))
    return path


@pytest.fixture
def bytecode():
    # any creation code works for hashing purposes
    return bytes.fromhex("608060405234801561001057600080fd5b50") * 8


@pytest.fixture
def artifact_file(tmp_path, bytecode):
    path = tmp_path / "CowProtocolToken.json"
    path.write_text(json.dumps({
        "contractName": "CowProtocolToken",
        "abi": [],
        "bytecode": "0x" + bytecode.hex(),
        "deployedBytecode": "0x",
    }))
    return path
