"""Address syntax checks — run before any provider call."""

import re

from web3 import Web3

from scanner.core.errors import InvalidAddressError
from scanner.models.token import Network

SOLANA_ADDRESS_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def is_valid_evm_address(address: str) -> bool:
    """20-byte hex address; mixed-case input must carry a valid EIP-55 checksum."""
    try:
        return Web3.is_address(address)
    except (TypeError, ValueError):
        return False


def is_valid_solana_address(address: str) -> bool:
    """Base58 alphabet, 32-44 chars. Does not check the mint exists."""
    return bool(SOLANA_ADDRESS_RE.match(address))


def validate_address(network: Network, address: str) -> bool:
    if not isinstance(address, str):
        return False
    if network.is_evm:
        return is_valid_evm_address(address)
    return is_valid_solana_address(address)


def require_valid_address(network: Network, address: str) -> str:
    if not validate_address(network, address):
        raise InvalidAddressError(network.value, address)
    return address


def detect_network_family(address: str) -> str | None:
    """Classify an address as "evm" or "solana" for chain-agnostic lookups."""
    if is_valid_evm_address(address):
        return "evm"
    if is_valid_solana_address(address):
        return "solana"
    return None
