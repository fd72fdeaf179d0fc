"""Encoding and decoding of x402 payment headers.

A payment header is ``base64(JSON({x402Version, scheme, network, payload}))``.
The network is classified through the registry before the payload is
touched, so an envelope is always validated against exactly one family's
payload model.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from pydantic import ValidationError

from .networks import Family, classify
from .schemas import (
    InvalidPayloadError,
    PaymentPayload,
    SettleResponse,
)

X_PAYMENT_HEADER = "X-PAYMENT"
X_PAYMENT_RESPONSE_HEADER = "X-PAYMENT-RESPONSE"


def safe_base64_encode(data: str) -> str:
    """Base64 encode a string safely."""
    return base64.b64encode(data.encode("utf-8")).decode("utf-8")


def safe_base64_decode(data: str) -> str:
    """Base64 decode a string safely.

    Raises:
        InvalidPayloadError: If the input is not valid base64 of UTF-8 text.
    """
    try:
        return base64.b64decode(data.encode("utf-8"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidPayloadError(f"header is not valid base64: {e}") from e


def _serialize_envelope(payload: PaymentPayload) -> dict[str, Any]:
    family = classify(payload.network)
    envelope = payload.model_dump(by_alias=True, exclude_none=True)
    if family is Family.EVM:
        # uint256 fields must never reach JSON as numbers
        auth = envelope["payload"]["authorization"]
        for key in ("value", "validAfter", "validBefore"):
            auth[key] = str(auth[key])
    return envelope


def encode_payment(payload: PaymentPayload) -> str:
    """Encode a payment payload as a base64 header value.

    Args:
        payload: Payment payload to encode.

    Returns:
        Base64 encoded JSON envelope.

    Raises:
        UnsupportedNetworkError: If the payload's network is not registered.
    """
    return safe_base64_encode(json.dumps(_serialize_envelope(payload), separators=(",", ":")))


def decode_payment(header_value: str) -> PaymentPayload:
    """Decode a base64 payment header into a PaymentPayload.

    Args:
        header_value: Value of the X-PAYMENT header.

    Returns:
        Payment payload whose inner payload is the variant of the network's family.

    Raises:
        InvalidPayloadError: If the header is not base64 JSON or fails the
            family's schema.
        UnsupportedNetworkError: If the envelope names an unregistered network.
    """
    json_str = safe_base64_decode(header_value)
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise InvalidPayloadError(f"header is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidPayloadError("payment envelope must be a JSON object")
    network = data.get("network")
    if not isinstance(network, str):
        raise InvalidPayloadError("payment envelope is missing a network")

    classify(network)
    return parse_payment_payload(data)


def parse_payment_payload(data: dict[str, Any]) -> PaymentPayload:
    """Validate an already-parsed envelope dict.

    Raises:
        InvalidPayloadError: If the envelope fails the family's schema.
        UnsupportedNetworkError: If the envelope names an unregistered network.
    """
    try:
        return PaymentPayload.model_validate(data)
    except ValidationError as e:
        raise InvalidPayloadError(str(e)) from e


def encode_settle_response(settle_response: SettleResponse) -> str:
    """Encode a SettleResponse as a base64 X-PAYMENT-RESPONSE header value."""
    return safe_base64_encode(settle_response.model_dump_json(by_alias=True, exclude_none=True))


def decode_settle_response(header_value: str) -> SettleResponse:
    """Decode a base64 X-PAYMENT-RESPONSE header into a SettleResponse.

    Raises:
        InvalidPayloadError: If the header does not hold a settle response.
    """
    json_str = safe_base64_decode(header_value)
    try:
        return SettleResponse.model_validate_json(json_str)
    except ValidationError as e:
        raise InvalidPayloadError(str(e)) from e
