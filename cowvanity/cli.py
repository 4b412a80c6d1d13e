#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
cowvanity: CREATE2 vanity addresses for the CoW DAO deployment (offline).

Commands
  mine     -> Search a Safe salt nonce or token salt for an address prefix
  compute  -> Creation address for the parameters currently in the settings

Notes
- No RPC. Safe proxies use the v1.3.0 proxy factory; the token is deployed
  through the deterministic deployment proxy with bytecode from a hardhat
  artifact.
- The search runs one worker process per CPU and stops as soon as one hits.

Examples
  # Mine a CoW DAO Safe whose address starts with 0xc0de
  $ cowvanity mine --settings settings.json --contract dao --prefix c0de

  # Mine the token salt and store it back into the settings file
  $ cowvanity mine -s settings.json -c token -p 0xc0ffee --write

  # Show the addresses the current settings resolve to
  $ cowvanity compute --settings settings.json --contract team-controller
"""

import json
from typing import Any, Dict, Optional, Tuple

import click
from eth_utils import to_checksum_address

from .encoding import ADDRESS_SIZE, InvalidInput, to_bytes, to_hex
from .miner import Deployment, SearchStats, search_address
from .safe import SafeDeployment
from .settings import (
    DEFAULT_ARTIFACT,
    SAFE_KEYS,
    TOKEN_KEY,
    Settings,
    load_artifact_bytecode,
    parameters_to_dict,
    save_parameters,
)
from .token import TokenDeployment

CONTRACTS = ("dao", "team-controller", "token")

# -------------------------- Helpers --------------------------

class HexPrefix(click.ParamType):
    """Address prefix as hex with optional 0x, at most 20 bytes."""

    name = "hex"

    def convert(self, value, param, ctx):
        if isinstance(value, bytes):
            return value
        try:
            prefix = to_bytes(value)
        except InvalidInput as e:
            self.fail(e.message, param, ctx)
        if len(prefix) > ADDRESS_SIZE:
            self.fail(f"prefix is longer than {ADDRESS_SIZE} bytes", param, ctx)
        return prefix

def build_deployment(settings: Settings, contract: str, artifact: Optional[str]) -> Tuple[Deployment, str]:
    """Deployment model and settings key for the selected contract."""
    if contract == "token":
        bytecode = load_artifact_bytecode(artifact or DEFAULT_ARTIFACT)
        return TokenDeployment.from_settings(settings, bytecode), TOKEN_KEY
    return SafeDeployment(settings.safe_parameters(contract)), SAFE_KEYS[contract]

def describe(deployment: Deployment) -> Dict[str, Any]:
    out = {"address": to_checksum_address(deployment.creation_address())}
    out.update(parameters_to_dict(deployment.parameters()))
    out["create2"] = {
        "factory": to_checksum_address(deployment.create2.factory),
        "salt": to_hex(deployment.create2.salt),
        "init_code_hash": to_hex(deployment.create2.init_code_hash),
    }
    return out

# -------------------------- CLI --------------------------

@click.group(context_settings=dict(help_option_names=["-h","--help"]))
def cli():
    """cowvanity: CREATE2 vanity addresses for the CoW DAO deployment."""
    pass

settings_option = click.option(
    "--settings", "-s", "settings_path", required=True,
    type=click.Path(exists=True, dir_okay=False), help="Deployment settings JSON file.",
)
contract_option = click.option(
    "--contract", "-c", required=True, type=click.Choice(CONTRACTS), help="Contract to mine address for.",
)
artifact_option = click.option(
    "--artifact", type=click.Path(dir_okay=False), default=None,
    help=f"Hardhat artifact with the token bytecode (default: {DEFAULT_ARTIFACT}).",
)

@cli.command("mine")
@settings_option
@contract_option
@artifact_option
@click.option("--prefix", "-p", required=True, type=HexPrefix(), help='Address prefix to search for (e.g. "c0de" or "0xc0ffee").')
@click.option("--workers", "-j", type=click.IntRange(min=1), default=None, help="Worker processes (default: one per CPU).")
@click.option("--write", "write_back", is_flag=True, help="Store the mined nonce/salt back into the settings file.")
@click.option("--quiet", "-q", is_flag=True, help="No progress output on stderr.")
def mine_cmd(settings_path, contract, artifact, prefix, workers, write_back, quiet):
    """Search deployment parameters for a vanity address prefix."""
    settings = Settings.from_file(settings_path)
    deployment, key = build_deployment(settings, contract, artifact)

    stats = SearchStats()
    if not quiet:
        click.echo(f"Searching {contract} address with prefix {to_hex(prefix)}...", err=True)
    parameters = search_address(deployment, prefix, workers=workers, stats=stats)
    if not quiet:
        click.echo(
            f"Found after {stats.attempts:,} attempts in {stats.elapsed:.2f}s "
            f"({stats.rate:,.0f}/s, {stats.workers} workers)",
            err=True,
        )

    # re-validate the hit on a fresh deployment
    found = deployment.with_parameters(parameters)
    if not found.creation_address().startswith(prefix):
        raise click.ClickException(
            f"mined parameters do not reproduce prefix {to_hex(prefix)}"
        )
    click.echo(json.dumps(describe(found), indent=2))

    if write_back:
        save_parameters(settings_path, key, parameters)
        if not quiet:
            click.echo(f"Wrote {key} parameters to {settings_path}", err=True)

@cli.command("compute")
@settings_option
@contract_option
@artifact_option
def compute_cmd(settings_path, contract, artifact):
    """Creation address for the parameters currently in the settings file."""
    settings = Settings.from_file(settings_path)
    deployment, _ = build_deployment(settings, contract, artifact)
    click.echo(json.dumps(describe(deployment), indent=2))

if __name__ == "__main__":
    cli()
