"""Error types and stable reason codes for the x402 facilitator.

Reason strings are part of the wire contract: callers branch on them, so
they must never change once published.
"""

# Shape / routing
ERR_INVALID_NETWORK = "invalid_network"
ERR_INVALID_PAYLOAD = "invalid_payload"
ERR_UNSUPPORTED_NETWORK = "unsupported_network"

# Field mismatches
ERR_RECIPIENT_MISMATCH = "recipient_mismatch"
ERR_ASSET_MISMATCH = "asset_mismatch"
ERR_AMOUNT_MISMATCH = "amount_mismatch"
ERR_PAYMENT_EXPIRED = "payment_expired"

# Settlement
ERR_EXCHANGE_ERROR = "exchange_error"
ERR_TX_NOT_FOUND = "tx_not_found"
ERR_TX_UNCONFIRMED = "tx_unconfirmed"


class PaymentError(Exception):
    """Base class for x402 payment errors."""

    pass


class UnsupportedNetworkError(PaymentError):
    """Network does not belong to any registered family.

    Attributes:
        network: The offending network identifier.
    """

    reason = ERR_UNSUPPORTED_NETWORK

    def __init__(self, network: str):
        self.network = network
        super().__init__(f"{ERR_UNSUPPORTED_NETWORK}: {network!r}")


class InvalidPayloadError(PaymentError):
    """Payment envelope could not be decoded or failed its family schema.

    Attributes:
        message: Human-readable detail.
    """

    reason = ERR_INVALID_PAYLOAD

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"{ERR_INVALID_PAYLOAD}: {message}")
