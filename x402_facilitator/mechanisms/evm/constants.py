"""EVM mechanism constants - network configs, USDC addresses, ABIs, error codes."""

from typing import Any, TypedDict

# Default token decimals for USDC
DEFAULT_DECIMALS = 6

# Seconds of headroom required before validBefore at verification time
DEFAULT_VALIDITY_BUFFER = 6

# Transaction receipt status values
TX_STATUS_SUCCESS = 1
TX_STATUS_FAILED = 0

# EIP-1271 isValidSignature magic value
EIP1271_MAGIC_VALUE = bytes.fromhex("1626ba7e")

# Family-specific error codes
ERR_INVALID_SIGNATURE = "invalid_exact_evm_payload_signature"
ERR_PAYMENT_NOT_YET_VALID = "invalid_exact_evm_payload_authorization_valid_after"
ERR_INSUFFICIENT_FUNDS = "insufficient_funds"
ERR_TRANSACTION_FAILED = "transaction_failed"


class AssetInfo(TypedDict):
    """Information about a token asset (EIP-712 domain included)."""

    address: str
    name: str
    version: str
    decimals: int


class NetworkConfig(TypedDict):
    """Configuration for an EVM network."""

    chain_id: int
    chain_label: str
    endpoints: dict[str, str]
    default_asset: AssetInfo


def _usdc(address: str, name: str = "USD Coin") -> AssetInfo:
    return {"address": address, "name": name, "version": "2", "decimals": DEFAULT_DECIMALS}


# One row per supported network
NETWORK_CONFIGS: dict[str, NetworkConfig] = {
    "base": {
        "chain_id": 8453,
        "chain_label": "Base",
        "endpoints": {"rpc": "https://mainnet.base.org"},
        "default_asset": _usdc("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"),
    },
    "base-sepolia": {
        "chain_id": 84532,
        "chain_label": "Base Sepolia",
        "endpoints": {"rpc": "https://sepolia.base.org"},
        "default_asset": _usdc("0x036CbD53842c5426634e7929541eC2318f3dCF7e", "USDC"),
    },
    "avalanche": {
        "chain_id": 43114,
        "chain_label": "Avalanche C-Chain",
        "endpoints": {"rpc": "https://api.avax.network/ext/bc/C/rpc"},
        "default_asset": _usdc("0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E"),
    },
    "avalanche-fuji": {
        "chain_id": 43113,
        "chain_label": "Avalanche Fuji",
        "endpoints": {"rpc": "https://api.avax-test.network/ext/bc/C/rpc"},
        "default_asset": _usdc("0x5425890298aed601595a70AB815c96711a31Bc65"),
    },
    "polygon": {
        "chain_id": 137,
        "chain_label": "Polygon",
        "endpoints": {"rpc": "https://polygon-rpc.com"},
        "default_asset": _usdc("0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359"),
    },
    "polygon-amoy": {
        "chain_id": 80002,
        "chain_label": "Polygon Amoy",
        "endpoints": {"rpc": "https://rpc-amoy.polygon.technology"},
        "default_asset": _usdc("0x41E94Eb019C0762f9Bfcf9Fb1E58725BfB0e7582", "USDC"),
    },
    "sei": {
        "chain_id": 1329,
        "chain_label": "Sei",
        "endpoints": {"rpc": "https://evm-rpc.sei-apis.com"},
        "default_asset": _usdc("0xe15fC38F6D8c56aF07bbCBe3BAf5708A2Bf42392", "USDC"),
    },
    "sei-testnet": {
        "chain_id": 1328,
        "chain_label": "Sei Testnet",
        "endpoints": {"rpc": "https://evm-rpc-testnet.sei-apis.com"},
        "default_asset": _usdc("0x4fCF1784B31630811181f670Aea7A7bEF803eaED", "USDC"),
    },
    "iotex": {
        "chain_id": 4689,
        "chain_label": "IoTeX",
        "endpoints": {"rpc": "https://babel-api.mainnet.iotex.io"},
        "default_asset": _usdc("0xcdf79194c6c285077a58da47641d4dbe51f63542", "Bridged USDC"),
    },
}

# EIP-3009 transferWithAuthorization (v, r, s variant)
TRANSFER_WITH_AUTHORIZATION_VRS_ABI: list[dict[str, Any]] = [
    {
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "value", "type": "uint256"},
            {"name": "validAfter", "type": "uint256"},
            {"name": "validBefore", "type": "uint256"},
            {"name": "nonce", "type": "bytes32"},
            {"name": "v", "type": "uint8"},
            {"name": "r", "type": "bytes32"},
            {"name": "s", "type": "bytes32"},
        ],
        "name": "transferWithAuthorization",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    }
]

# EIP-3009 transferWithAuthorization (bytes signature variant, smart wallets)
TRANSFER_WITH_AUTHORIZATION_BYTES_ABI: list[dict[str, Any]] = [
    {
        "inputs": [
            {"name": "from", "type": "address"},
            {"name": "to", "type": "address"},
            {"name": "value", "type": "uint256"},
            {"name": "validAfter", "type": "uint256"},
            {"name": "validBefore", "type": "uint256"},
            {"name": "nonce", "type": "bytes32"},
            {"name": "signature", "type": "bytes"},
        ],
        "name": "transferWithAuthorization",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    }
]

BALANCE_OF_ABI: list[dict[str, Any]] = [
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    }
]

IS_VALID_SIGNATURE_ABI: list[dict[str, Any]] = [
    {
        "inputs": [
            {"name": "hash", "type": "bytes32"},
            {"name": "signature", "type": "bytes"},
        ],
        "name": "isValidSignature",
        "outputs": [{"name": "magicValue", "type": "bytes4"}],
        "stateMutability": "view",
        "type": "function",
    }
]
