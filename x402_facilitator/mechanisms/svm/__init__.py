"""SVM mechanism for x402 payment protocol."""

# Constants
from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ADDRESS,
    COMPUTE_BUDGET_PROGRAM_ADDRESS,
    DEFAULT_DECIMALS,
    ERR_COMPUTE_PRICE_TOO_HIGH,
    ERR_FEE_PAYER_NOT_MANAGED,
    ERR_FEE_PAYER_TRANSFERRING,
    ERR_INVALID_COMPUTE_LIMIT,
    ERR_INVALID_COMPUTE_PRICE,
    ERR_INVALID_INSTRUCTION_COUNT,
    ERR_NO_TRANSFER_INSTRUCTION,
    ERR_SIMULATION_FAILED,
    ERR_TRANSACTION_DECODE_FAILED,
    ERR_UNKNOWN_OPTIONAL_INSTRUCTION,
    LIGHTHOUSE_PROGRAM_ADDRESS,
    MAX_COMPUTE_UNIT_PRICE_MICROLAMPORTS,
    MEMO_PROGRAM_ADDRESS,
    NETWORK_CONFIGS,
    TOKEN_2022_PROGRAM_ADDRESS,
    TOKEN_PROGRAM_ADDRESS,
    USDC_DEVNET_ADDRESS,
    USDC_MAINNET_ADDRESS,
    AssetInfo,
    NetworkConfig,
)

# Signer protocols
from .signer import FacilitatorSvmSigner

# Types
from .types import TransactionInfo

# Utilities
from .utils import (
    decode_transaction,
    derive_ata,
    encode_transaction,
    extract_transaction_info,
    is_token_program,
)

__all__ = [
    # Constants
    "ASSOCIATED_TOKEN_PROGRAM_ADDRESS",
    "COMPUTE_BUDGET_PROGRAM_ADDRESS",
    "DEFAULT_DECIMALS",
    "ERR_COMPUTE_PRICE_TOO_HIGH",
    "ERR_FEE_PAYER_NOT_MANAGED",
    "ERR_FEE_PAYER_TRANSFERRING",
    "ERR_INVALID_COMPUTE_LIMIT",
    "ERR_INVALID_COMPUTE_PRICE",
    "ERR_INVALID_INSTRUCTION_COUNT",
    "ERR_NO_TRANSFER_INSTRUCTION",
    "ERR_SIMULATION_FAILED",
    "ERR_TRANSACTION_DECODE_FAILED",
    "ERR_UNKNOWN_OPTIONAL_INSTRUCTION",
    "LIGHTHOUSE_PROGRAM_ADDRESS",
    "MAX_COMPUTE_UNIT_PRICE_MICROLAMPORTS",
    "MEMO_PROGRAM_ADDRESS",
    "NETWORK_CONFIGS",
    "TOKEN_2022_PROGRAM_ADDRESS",
    "TOKEN_PROGRAM_ADDRESS",
    "USDC_DEVNET_ADDRESS",
    "USDC_MAINNET_ADDRESS",
    "AssetInfo",
    "NetworkConfig",
    # Signers
    "FacilitatorSvmSigner",
    # Types
    "TransactionInfo",
    # Utilities
    "decode_transaction",
    "derive_ata",
    "encode_transaction",
    "extract_transaction_info",
    "is_token_program",
]
