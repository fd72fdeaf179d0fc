"""EVM utility functions for network, asset, address and hex handling."""

import re

from eth_utils import to_checksum_address

from .constants import (
    NETWORK_CONFIGS,
    AssetInfo,
    NetworkConfig,
)

_HEX = re.compile(r"^0x[0-9a-fA-F]*$")
_BYTES32 = re.compile(r"^0x[0-9a-fA-F]{64}$")


def get_network_config(network: str) -> NetworkConfig:
    """Get configuration for a network.

    Args:
        network: Network name (e.g., "base-sepolia").

    Returns:
        Network configuration.

    Raises:
        ValueError: If network is not configured.
    """
    if network in NETWORK_CONFIGS:
        return NETWORK_CONFIGS[network]
    raise ValueError(f"No configuration for network: {network}")


def get_evm_chain_id(network: str) -> int:
    """Get the numeric chain ID of a network.

    Raises:
        ValueError: If network is not configured.
    """
    return get_network_config(network)["chain_id"]


def get_asset_info(network: str, asset_address: str) -> AssetInfo | None:
    """Get the configured asset of a network matching an address.

    Args:
        network: Network name.
        asset_address: Token contract address (any case).

    Returns:
        Asset information, or None if the address is not a configured asset.
    """
    asset = get_network_config(network)["default_asset"]
    if asset["address"].lower() == asset_address.lower():
        return asset
    return None


def normalize_address(address: str) -> str:
    """Normalize Ethereum address to checksummed format.

    Raises:
        ValueError: If address is invalid.
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid address: {address}")
    return to_checksum_address("0x" + address.lower().removeprefix("0x"))


def is_valid_address(address: str) -> bool:
    """Check if string is valid Ethereum address.

    Args:
        address: String to check.

    Returns:
        True if valid Ethereum address.
    """
    addr = address.lower().removeprefix("0x")
    if len(addr) != 40:
        return False
    try:
        int(addr, 16)
        return True
    except ValueError:
        return False


def is_hex_string(value: str) -> bool:
    """Check if value is a non-empty, even-length 0x-prefixed hex string."""
    return bool(_HEX.match(value)) and len(value) > 2 and len(value) % 2 == 0


def is_bytes32(value: str) -> bool:
    """Check if value is a 0x-prefixed 32-byte hex string."""
    return bool(_BYTES32.match(value))


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string to bytes (handles 0x prefix).

    Args:
        hex_str: Hex string with optional 0x prefix.

    Returns:
        Bytes.
    """
    return bytes.fromhex(hex_str.removeprefix("0x"))
