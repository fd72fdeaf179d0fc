"""EVM mechanism for x402 payment protocol."""

# Constants
from .constants import (
    BALANCE_OF_ABI,
    DEFAULT_DECIMALS,
    DEFAULT_VALIDITY_BUFFER,
    EIP1271_MAGIC_VALUE,
    ERR_INSUFFICIENT_FUNDS,
    ERR_INVALID_SIGNATURE,
    ERR_PAYMENT_NOT_YET_VALID,
    ERR_TRANSACTION_FAILED,
    IS_VALID_SIGNATURE_ABI,
    NETWORK_CONFIGS,
    TRANSFER_WITH_AUTHORIZATION_BYTES_ABI,
    TRANSFER_WITH_AUTHORIZATION_VRS_ABI,
    TX_STATUS_FAILED,
    TX_STATUS_SUCCESS,
    AssetInfo,
    NetworkConfig,
)

# EIP-712
from .eip712 import build_typed_data_for_signing, hash_eip3009_authorization

# Signer protocols
from .signer import FacilitatorEvmSigner

# Signer implementations
from .signers import FacilitatorWeb3Signer

# Types
from .types import TransactionReceipt, TypedDataDomain, TypedDataField

# Utilities
from .utils import (
    get_asset_info,
    get_evm_chain_id,
    get_network_config,
    hex_to_bytes,
    is_valid_address,
    normalize_address,
)

# Signature verification
from .verify import verify_eip1271_signature, verify_eoa_signature, verify_payer_signature

__all__ = [
    # Constants
    "BALANCE_OF_ABI",
    "DEFAULT_DECIMALS",
    "DEFAULT_VALIDITY_BUFFER",
    "EIP1271_MAGIC_VALUE",
    "ERR_INSUFFICIENT_FUNDS",
    "ERR_INVALID_SIGNATURE",
    "ERR_PAYMENT_NOT_YET_VALID",
    "ERR_TRANSACTION_FAILED",
    "IS_VALID_SIGNATURE_ABI",
    "NETWORK_CONFIGS",
    "TRANSFER_WITH_AUTHORIZATION_BYTES_ABI",
    "TRANSFER_WITH_AUTHORIZATION_VRS_ABI",
    "TX_STATUS_FAILED",
    "TX_STATUS_SUCCESS",
    "AssetInfo",
    "NetworkConfig",
    # EIP-712
    "build_typed_data_for_signing",
    "hash_eip3009_authorization",
    # Signers
    "FacilitatorEvmSigner",
    "FacilitatorWeb3Signer",
    # Types
    "TransactionReceipt",
    "TypedDataDomain",
    "TypedDataField",
    # Utilities
    "get_asset_info",
    "get_evm_chain_id",
    "get_network_config",
    "hex_to_bytes",
    "is_valid_address",
    "normalize_address",
    # Verification
    "verify_eip1271_signature",
    "verify_eoa_signature",
    "verify_payer_signature",
]
