"""x402 payment facilitator for EVM, SVM and Hyperliquid networks."""

from .schemas import (
    SCHEME_EXACT,
    X402_VERSION,
    InvalidPayloadError,
    PaymentError,
    PaymentPayload,
    PaymentRequirements,
    SettleRequest,
    SettleResponse,
    SupportedResponse,
    UnsupportedNetworkError,
    VerifyRequest,
    VerifyResponse,
)
from .networks import Family, classify, family_config, is_supported, networks_for
from .codec import (
    X_PAYMENT_HEADER,
    X_PAYMENT_RESPONSE_HEADER,
    decode_payment,
    decode_settle_response,
    encode_payment,
    encode_settle_response,
)
from .facilitator import x402Facilitator

__all__ = [
    "SCHEME_EXACT",
    "X402_VERSION",
    "InvalidPayloadError",
    "PaymentError",
    "PaymentPayload",
    "PaymentRequirements",
    "SettleRequest",
    "SettleResponse",
    "SupportedResponse",
    "UnsupportedNetworkError",
    "VerifyRequest",
    "VerifyResponse",
    # Registry
    "Family",
    "classify",
    "family_config",
    "is_supported",
    "networks_for",
    # Codec
    "X_PAYMENT_HEADER",
    "X_PAYMENT_RESPONSE_HEADER",
    "decode_payment",
    "decode_settle_response",
    "encode_payment",
    "encode_settle_response",
    # Router
    "x402Facilitator",
]
