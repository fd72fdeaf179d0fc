"""Network family registry.

Every network the facilitator understands is declared exactly once, as a row
in one mechanism's ``NETWORK_CONFIGS``. This module folds those rows into a
single lookup table; the router and the codec dispatch through it and never
inspect network strings themselves.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .mechanisms.evm.constants import NETWORK_CONFIGS as EVM_NETWORK_CONFIGS
from .mechanisms.hyperliquid.constants import NETWORK_CONFIGS as HL_NETWORK_CONFIGS
from .mechanisms.svm.constants import NETWORK_CONFIGS as SVM_NETWORK_CONFIGS
from .schemas.base import Network
from .schemas.errors import UnsupportedNetworkError


class Family(str, Enum):
    """Groups of networks sharing payload shape and settlement semantics."""

    EVM = "evm"
    SVM = "svm"
    HYPERLIQUID = "hyperliquid"


@dataclass(frozen=True)
class NetworkEntry:
    """Registry row for a single network."""

    network: Network
    family: Family
    default_asset: str
    default_decimals: int
    chain_label: str
    endpoints: Mapping[str, str] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FamilyConfig:
    """Per-network defaults exposed to callers.

    Attributes:
        default_asset: Asset identifier used when requirements name none.
        default_decimals: Decimals of the default asset.
        chain_label: Human/chain name (e.g., "Mainnet" for Hyperliquid).
        base_endpoints: Named base URLs (rpc, exchange, info, explorer...).
    """

    default_asset: str
    default_decimals: int
    chain_label: str
    base_endpoints: Mapping[str, str]


def _entries(family: Family, configs: Mapping[str, Mapping[str, Any]]) -> dict[Network, NetworkEntry]:
    entries: dict[Network, NetworkEntry] = {}
    for network, config in configs.items():
        asset = config["default_asset"]
        entries[network] = NetworkEntry(
            network=network,
            family=family,
            default_asset=asset["address"],
            default_decimals=asset["decimals"],
            chain_label=config["chain_label"],
            endpoints=dict(config["endpoints"]),
            extra={
                k: v
                for k, v in config.items()
                if k not in ("default_asset", "chain_label", "endpoints")
            },
        )
    return entries


NETWORK_REGISTRY: dict[Network, NetworkEntry] = {
    **_entries(Family.EVM, EVM_NETWORK_CONFIGS),
    **_entries(Family.SVM, SVM_NETWORK_CONFIGS),
    **_entries(Family.HYPERLIQUID, HL_NETWORK_CONFIGS),
}


def get_entry(network: Network) -> NetworkEntry:
    """Get the registry row for a network.

    Raises:
        UnsupportedNetworkError: If the network is not registered.
    """
    entry = NETWORK_REGISTRY.get(network) if isinstance(network, str) else None
    if entry is None:
        raise UnsupportedNetworkError(network)
    return entry


def classify(network: Network) -> Family:
    """Resolve the family a network belongs to.

    Args:
        network: Network identifier.

    Returns:
        The network's family.

    Raises:
        UnsupportedNetworkError: If the network is not registered.
    """
    return get_entry(network).family


def family_config(network: Network) -> FamilyConfig:
    """Get default asset, decimals, chain label and endpoints for a network.

    Raises:
        UnsupportedNetworkError: If the network is not registered.
    """
    entry = get_entry(network)
    return FamilyConfig(
        default_asset=entry.default_asset,
        default_decimals=entry.default_decimals,
        chain_label=entry.chain_label,
        base_endpoints=entry.endpoints,
    )


def is_supported(network: Network) -> bool:
    """Check if a network is registered."""
    return isinstance(network, str) and network in NETWORK_REGISTRY


def is_family(network: Network, family: Family) -> bool:
    """Check if a network is registered under the given family."""
    return is_supported(network) and NETWORK_REGISTRY[network].family is family


def networks_for(family: Family) -> list[Network]:
    """List the networks registered under a family, in declaration order."""
    return [n for n, entry in NETWORK_REGISTRY.items() if entry.family is family]
