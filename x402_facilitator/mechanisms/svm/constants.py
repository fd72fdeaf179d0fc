"""SVM mechanism constants - network configs, USDC addresses, error codes."""

from typing import TypedDict

# Default token decimals for USDC on Solana
DEFAULT_DECIMALS = 6

# Token program addresses (same across all Solana networks)
TOKEN_PROGRAM_ADDRESS = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ADDRESS = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
ASSOCIATED_TOKEN_PROGRAM_ADDRESS = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
COMPUTE_BUDGET_PROGRAM_ADDRESS = "ComputeBudget111111111111111111111111111111"
MEMO_PROGRAM_ADDRESS = "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr"
LIGHTHOUSE_PROGRAM_ADDRESS = "L2TExMFKdjpN9kozasaurPirfHy9P8sbXoAN1qA3S95"

# Instruction discriminators
SET_COMPUTE_UNIT_LIMIT_DISCRIMINATOR = 2
SET_COMPUTE_UNIT_PRICE_DISCRIMINATOR = 3
TRANSFER_CHECKED_DISCRIMINATOR = 12

# Compute budget configuration
# All prices are in microlamports (1 lamport = 1,000,000 microlamports)
MAX_COMPUTE_UNIT_PRICE_MICROLAMPORTS = 5_000_000  # 5 lamports

# USDC token mint addresses (default stablecoin)
USDC_MAINNET_ADDRESS = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDC_DEVNET_ADDRESS = "4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU"

# Family-specific error codes
ERR_FEE_PAYER_NOT_MANAGED = "fee_payer_not_managed_by_facilitator"
ERR_TRANSACTION_DECODE_FAILED = "invalid_exact_svm_payload_transaction_could_not_be_decoded"
ERR_INVALID_INSTRUCTION_COUNT = "invalid_exact_svm_payload_transaction_instructions_length"
ERR_INVALID_COMPUTE_LIMIT = (
    "invalid_exact_svm_payload_transaction_instructions_compute_limit_instruction"
)
ERR_INVALID_COMPUTE_PRICE = (
    "invalid_exact_svm_payload_transaction_instructions_compute_price_instruction"
)
ERR_COMPUTE_PRICE_TOO_HIGH = (
    "invalid_exact_svm_payload_transaction_instructions_compute_price_instruction_too_high"
)
ERR_NO_TRANSFER_INSTRUCTION = "invalid_exact_svm_payload_no_transfer_instruction"
ERR_UNKNOWN_OPTIONAL_INSTRUCTION = "invalid_exact_svm_payload_unknown_optional_instruction"
ERR_FEE_PAYER_TRANSFERRING = "invalid_exact_svm_payload_transaction_fee_payer_transferring_funds"
ERR_SIMULATION_FAILED = "transaction_simulation_failed"


class AssetInfo(TypedDict):
    """Information about a token asset."""

    address: str
    name: str
    decimals: int


class NetworkConfig(TypedDict):
    """Configuration for a Solana network."""

    chain_label: str
    endpoints: dict[str, str]
    default_asset: AssetInfo


# One row per supported network
NETWORK_CONFIGS: dict[str, NetworkConfig] = {
    "solana": {
        "chain_label": "Solana Mainnet",
        "endpoints": {
            "rpc": "https://api.mainnet-beta.solana.com",
            "ws": "wss://api.mainnet-beta.solana.com",
        },
        "default_asset": {
            "address": USDC_MAINNET_ADDRESS,
            "name": "USD Coin",
            "decimals": DEFAULT_DECIMALS,
        },
    },
    "solana-devnet": {
        "chain_label": "Solana Devnet",
        "endpoints": {
            "rpc": "https://api.devnet.solana.com",
            "ws": "wss://api.devnet.solana.com",
        },
        "default_asset": {
            "address": USDC_DEVNET_ADDRESS,
            "name": "USD Coin",
            "decimals": DEFAULT_DECIMALS,
        },
    },
}
