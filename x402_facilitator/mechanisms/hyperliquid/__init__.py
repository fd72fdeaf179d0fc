"""Hyperliquid mechanism for x402 payment protocol."""

# Constants
from .constants import (
    CONFIRMATION_DELAY_SECONDS,
    CONFIRMATION_RETRIES,
    DEFAULT_DECIMALS,
    NETWORK_CONFIGS,
    SIGNATURE_CHAIN_ID,
    SPOT_SEND_PRIMARY_TYPE,
    SPOT_SEND_TYPES,
    USDC_TOKEN,
    AssetInfo,
    NetworkConfig,
)

# Token info cache
from .cache import TokenInfoCache

# API client
from .info import HyperliquidApiError, HyperliquidInfoClient

# Settlement matching
from .matching import (
    amounts_match,
    extract_user_transactions,
    find_matching_hash,
    transaction_matches_payment,
)

# Signer protocols
from .signer import (
    ClientHyperliquidSigner,
    EthAccountHyperliquidSigner,
    recover_user_signed_action,
    user_signed_typed_data,
)

# Types
from .types import ConfirmationResult, HyperliquidTokenInfo

# Utilities
from .utils import (
    amount_meets_requirement,
    decimal_to_atomic,
    extract_payer,
    extract_token_id,
    format_decimal_amount,
    get_chain_label,
    get_signature_chain_id,
    is_tx_hash,
    within_ttl,
)

__all__ = [
    # Constants
    "CONFIRMATION_DELAY_SECONDS",
    "CONFIRMATION_RETRIES",
    "DEFAULT_DECIMALS",
    "NETWORK_CONFIGS",
    "SIGNATURE_CHAIN_ID",
    "SPOT_SEND_PRIMARY_TYPE",
    "SPOT_SEND_TYPES",
    "USDC_TOKEN",
    "AssetInfo",
    "NetworkConfig",
    # Cache
    "TokenInfoCache",
    # API client
    "HyperliquidApiError",
    "HyperliquidInfoClient",
    # Matching
    "amounts_match",
    "extract_user_transactions",
    "find_matching_hash",
    "transaction_matches_payment",
    # Signers
    "ClientHyperliquidSigner",
    "EthAccountHyperliquidSigner",
    "recover_user_signed_action",
    "user_signed_typed_data",
    # Types
    "ConfirmationResult",
    "HyperliquidTokenInfo",
    # Utilities
    "amount_meets_requirement",
    "decimal_to_atomic",
    "extract_payer",
    "extract_token_id",
    "format_decimal_amount",
    "get_chain_label",
    "get_signature_chain_id",
    "is_tx_hash",
    "within_ttl",
]
