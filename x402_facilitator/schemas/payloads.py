"""Family-specific payload models for the exact scheme.

Exactly one of these models is carried by a PaymentPayload; which one is
decided by the family of the envelope's network, never by the payload's
own fields.
"""

from typing import Any

from pydantic import Field, PositiveInt, field_serializer, field_validator

from .base import BaseX402Model


class ExactEvmAuthorization(BaseX402Model):
    """EIP-3009 TransferWithAuthorization message.

    Amount and window fields are uint256 on chain, so they are held as
    Python ints and always serialized as decimal strings; a JSON number
    would lose precision in most consumers.
    """

    from_address: str = Field(alias="from")
    to: str
    value: int
    valid_after: int
    valid_before: int
    nonce: str

    @field_validator("value", "valid_after", "valid_before", mode="before")
    @classmethod
    def _parse_uint(cls, v: Any) -> int:
        if isinstance(v, bool):
            raise ValueError("expected an unsigned integer")
        if isinstance(v, str):
            v = v.strip()
            if not v.isdigit():
                raise ValueError(f"expected an unsigned integer string, got {v!r}")
            return int(v)
        if isinstance(v, int) and v >= 0:
            return v
        raise ValueError(f"expected an unsigned integer, got {v!r}")

    @field_serializer("value", "valid_after", "valid_before")
    def _serialize_uint(self, v: int) -> str:
        return str(v)


class ExactEvmPayload(BaseX402Model):
    """Exact payment payload for EVM networks (EIP-3009 authorization)."""

    signature: str
    authorization: ExactEvmAuthorization


class ExactSvmPayload(BaseX402Model):
    """Exact payment payload for SVM networks.

    Contains a base64 encoded, partially signed Solana transaction that includes:
    - Compute budget instructions
    - SPL Token TransferChecked instruction
    """

    transaction: str


class HlSignature(BaseX402Model):
    """Split ECDSA signature as produced by Hyperliquid signing helpers."""

    r: str
    s: str
    v: int


class ExactHlPayload(BaseX402Model):
    """Exact payment payload for Hyperliquid networks.

    Attributes:
        action: The user-signed action (e.g., a spotSend), kept as an open map.
        signature: Hex signature string or split {r, s, v}.
        nonce: Positive integer nonce (milliseconds timestamp by convention).
        user: Optional explicit payer address.
    """

    action: dict[str, Any]
    signature: str | HlSignature
    nonce: PositiveInt
    user: str | None = None


FamilyPayload = ExactEvmPayload | ExactSvmPayload | ExactHlPayload
