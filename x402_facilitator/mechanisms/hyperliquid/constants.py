"""Hyperliquid mechanism constants - network configs, endpoints, error codes."""

from typing import TypedDict

# Default token decimals for USDC on Hyperliquid spot
DEFAULT_DECIMALS = 6

# USDC spot token (compound SYMBOL:0xHEX token id)
USDC_TOKEN = "USDC:0xeb62eee3685fc4c43992febcd9e75443"

# Arbitrum One chain id, used as the EIP-712 signatureChainId
SIGNATURE_CHAIN_ID = "0xa4b1"

# User-signed action typed data
SIGN_TRANSACTION_DOMAIN_NAME = "HyperliquidSignTransaction"
SIGN_TRANSACTION_DOMAIN_VERSION = "1"
SIGN_TRANSACTION_VERIFYING_CONTRACT = "0x0000000000000000000000000000000000000000"
SPOT_SEND_PRIMARY_TYPE = "HyperliquidTransaction:SpotSend"
SPOT_SEND_TYPES: dict[str, list[dict[str, str]]] = {
    SPOT_SEND_PRIMARY_TYPE: [
        {"name": "hyperliquidChain", "type": "string"},
        {"name": "destination", "type": "string"},
        {"name": "token", "type": "string"},
        {"name": "amount", "type": "string"},
        {"name": "time", "type": "uint64"},
    ]
}

# Settlement confirmation polling
CONFIRMATION_RETRIES = 3
CONFIRMATION_DELAY_SECONDS = 0.25

# Exchange acknowledgment marker
EXCHANGE_STATUS_OK = "ok"

# Collections that may hold a user's transactions in a userDetails response
USER_TRANSACTION_FIELDS = ("txs", "userFlow", "actions", "transactions")

TX_HASH_REGEX = r"^0x[0-9a-fA-F]{64}$"


class AssetInfo(TypedDict):
    """Information about a Hyperliquid spot token."""

    address: str
    name: str
    decimals: int


class NetworkConfig(TypedDict):
    """Configuration for a Hyperliquid network."""

    chain_label: str
    signature_chain_id: str
    endpoints: dict[str, str]
    default_asset: AssetInfo


_USDC: AssetInfo = {"address": USDC_TOKEN, "name": "USDC", "decimals": DEFAULT_DECIMALS}

# One row per supported network
NETWORK_CONFIGS: dict[str, NetworkConfig] = {
    "hyperliquid": {
        "chain_label": "Mainnet",
        "signature_chain_id": SIGNATURE_CHAIN_ID,
        "endpoints": {
            "exchange": "https://api.hyperliquid.xyz/exchange",
            "info": "https://api.hyperliquid.xyz/info",
            "explorer": "https://rpc.hyperliquid.xyz/explorer",
        },
        "default_asset": _USDC,
    },
    "hyperliquid-testnet": {
        "chain_label": "Testnet",
        "signature_chain_id": SIGNATURE_CHAIN_ID,
        "endpoints": {
            "exchange": "https://api.hyperliquid-testnet.xyz/exchange",
            "info": "https://api.hyperliquid-testnet.xyz/info",
            "explorer": "https://rpc.hyperliquid-testnet.xyz/explorer",
        },
        "default_asset": _USDC,
    },
}
