"""x402 Types - Core type definitions for the facilitator.

This module provides:
- Base types (Network, BaseX402Model)
- Payment types (PaymentRequirements, PaymentPayload)
- Family payload variants (EVM, SVM, Hyperliquid)
- Response types (VerifyResponse, SettleResponse, SupportedResponse)
- Error types and reason codes
"""

# Base types
from .base import (
    SCHEME_EXACT,
    X402_VERSION,
    BaseX402Model,
    Network,
)

# Error types
from .errors import (
    ERR_AMOUNT_MISMATCH,
    ERR_ASSET_MISMATCH,
    ERR_EXCHANGE_ERROR,
    ERR_INVALID_NETWORK,
    ERR_INVALID_PAYLOAD,
    ERR_PAYMENT_EXPIRED,
    ERR_RECIPIENT_MISMATCH,
    ERR_TX_NOT_FOUND,
    ERR_TX_UNCONFIRMED,
    ERR_UNSUPPORTED_NETWORK,
    InvalidPayloadError,
    PaymentError,
    UnsupportedNetworkError,
)

# Family payloads
from .payloads import (
    ExactEvmAuthorization,
    ExactEvmPayload,
    ExactHlPayload,
    ExactSvmPayload,
    FamilyPayload,
    HlSignature,
)

# Payment types
from .payments import (
    PaymentPayload,
    PaymentRequirements,
)

# Response types
from .responses import (
    SettleRequest,
    SettleResponse,
    SupportedKind,
    SupportedResponse,
    VerifyRequest,
    VerifyResponse,
)

__all__ = [
    # Base
    "X402_VERSION",
    "SCHEME_EXACT",
    "Network",
    "BaseX402Model",
    # Payloads
    "ExactEvmAuthorization",
    "ExactEvmPayload",
    "ExactSvmPayload",
    "ExactHlPayload",
    "HlSignature",
    "FamilyPayload",
    # Payments
    "PaymentRequirements",
    "PaymentPayload",
    # Responses
    "VerifyRequest",
    "VerifyResponse",
    "SettleRequest",
    "SettleResponse",
    "SupportedKind",
    "SupportedResponse",
    # Errors
    "PaymentError",
    "UnsupportedNetworkError",
    "InvalidPayloadError",
    "ERR_INVALID_NETWORK",
    "ERR_INVALID_PAYLOAD",
    "ERR_UNSUPPORTED_NETWORK",
    "ERR_RECIPIENT_MISMATCH",
    "ERR_ASSET_MISMATCH",
    "ERR_AMOUNT_MISMATCH",
    "ERR_PAYMENT_EXPIRED",
    "ERR_EXCHANGE_ERROR",
    "ERR_TX_NOT_FOUND",
    "ERR_TX_UNCONFIRMED",
]
