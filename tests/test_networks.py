"""Tests for the network family registry."""

import pytest

from x402_facilitator.mechanisms.hyperliquid.constants import USDC_TOKEN
from x402_facilitator.networks import (
    NETWORK_REGISTRY,
    Family,
    classify,
    family_config,
    is_family,
    is_supported,
    networks_for,
)
from x402_facilitator.schemas import UnsupportedNetworkError


@pytest.mark.parametrize(
    "network,family",
    [
        ("base", Family.EVM),
        ("base-sepolia", Family.EVM),
        ("avalanche-fuji", Family.EVM),
        ("iotex", Family.EVM),
        ("solana", Family.SVM),
        ("solana-devnet", Family.SVM),
        ("hyperliquid", Family.HYPERLIQUID),
        ("hyperliquid-testnet", Family.HYPERLIQUID),
    ],
)
def test_classify(network, family):
    assert classify(network) is family
    assert is_family(network, family)


@pytest.mark.parametrize("network", ["dogecoin", "", "HYPERLIQUID", "eip155:8453", None])
def test_unknown_networks_never_default(network):
    with pytest.raises(UnsupportedNetworkError):
        classify(network)
    assert not is_supported(network)


def test_every_network_belongs_to_exactly_one_family():
    by_family = [set(networks_for(family)) for family in Family]

    assert sum(len(networks) for networks in by_family) == len(NETWORK_REGISTRY)
    assert set().union(*by_family) == set(NETWORK_REGISTRY)


def test_family_networks():
    assert networks_for(Family.SVM) == ["solana", "solana-devnet"]
    assert networks_for(Family.HYPERLIQUID) == ["hyperliquid", "hyperliquid-testnet"]
    assert len(networks_for(Family.EVM)) == 9


def test_hyperliquid_family_config():
    mainnet = family_config("hyperliquid")
    testnet = family_config("hyperliquid-testnet")

    assert mainnet.chain_label == "Mainnet"
    assert testnet.chain_label == "Testnet"
    assert mainnet.default_asset == USDC_TOKEN
    assert mainnet.default_decimals == 6
    assert set(mainnet.base_endpoints) == {"exchange", "info", "explorer"}


def test_evm_family_config():
    config = family_config("base-sepolia")

    assert config.default_asset == "0x036CbD53842c5426634e7929541eC2318f3dCF7e"
    assert config.base_endpoints["rpc"] == "https://sepolia.base.org"
