"""Tests for payment header encoding and decoding."""

import base64
import json

import pytest
from conftest import make_hl_payload

from x402_facilitator.codec import (
    decode_payment,
    decode_settle_response,
    encode_payment,
    encode_settle_response,
    parse_payment_payload,
    safe_base64_decode,
)
from x402_facilitator.schemas import (
    ExactEvmAuthorization,
    ExactEvmPayload,
    ExactHlPayload,
    ExactSvmPayload,
    InvalidPayloadError,
    PaymentPayload,
    SettleResponse,
    UnsupportedNetworkError,
)


def _header(data) -> str:
    return base64.b64encode(json.dumps(data).encode()).decode()


def evm_payload(value=10**30):
    return PaymentPayload(
        scheme="exact",
        network="base-sepolia",
        payload=ExactEvmPayload(
            signature="0x" + "ab" * 65,
            authorization=ExactEvmAuthorization(
                from_address="0x" + "2" * 40,
                to="0x" + "1" * 40,
                value=value,
                valid_after=0,
                valid_before=2**64,
                nonce="0x" + "00" * 32,
            ),
        ),
    )


class TestRoundTrip:
    def test_hyperliquid(self):
        payload = make_hl_payload()

        assert decode_payment(encode_payment(payload)) == payload

    def test_evm_big_integers_survive_as_strings(self):
        payload = evm_payload()

        header = encode_payment(payload)
        wire = json.loads(base64.b64decode(header))

        assert wire["payload"]["authorization"]["value"] == str(10**30)
        assert wire["payload"]["authorization"]["validBefore"] == str(2**64)
        assert wire["payload"]["authorization"]["from"] == "0x" + "2" * 40
        assert decode_payment(header) == payload

    def test_svm(self):
        payload = PaymentPayload(
            scheme="exact",
            network="solana-devnet",
            payload=ExactSvmPayload(transaction=base64.b64encode(b"tx-bytes").decode()),
        )

        assert decode_payment(encode_payment(payload)) == payload

    def test_envelope_is_camel_case(self):
        wire = json.loads(base64.b64decode(encode_payment(make_hl_payload())))

        assert set(wire) == {"x402Version", "scheme", "network", "payload"}
        assert wire["x402Version"] == 1


class TestDecodeRejects:
    def test_not_base64(self):
        with pytest.raises(InvalidPayloadError):
            decode_payment("%%% not base64 %%%")

    def test_not_json(self):
        with pytest.raises(InvalidPayloadError):
            decode_payment(base64.b64encode(b"{not json").decode())

    def test_not_an_object(self):
        with pytest.raises(InvalidPayloadError):
            decode_payment(_header([1, 2, 3]))

    def test_missing_network(self):
        with pytest.raises(InvalidPayloadError):
            decode_payment(_header({"x402Version": 1, "scheme": "exact", "payload": {}}))

    def test_unknown_network(self):
        with pytest.raises(UnsupportedNetworkError) as exc_info:
            decode_payment(_header({"x402Version": 1, "scheme": "exact", "network": "dogecoin", "payload": {}}))

        assert exc_info.value.network == "dogecoin"
        assert exc_info.value.reason == "unsupported_network"

    def test_payload_shape_must_match_network_family(self):
        evm_shaped = evm_payload().model_dump(by_alias=True)["payload"]
        envelope = {"x402Version": 1, "scheme": "exact", "network": "hyperliquid", "payload": evm_shaped}

        with pytest.raises(InvalidPayloadError):
            decode_payment(_header(envelope))

    def test_non_positive_hyperliquid_nonce(self):
        hl = make_hl_payload().model_dump(by_alias=True)
        hl["payload"]["nonce"] = 0

        with pytest.raises(InvalidPayloadError):
            decode_payment(_header(hl))

    def test_non_numeric_evm_value(self):
        evm = evm_payload().model_dump(by_alias=True)
        evm["payload"]["authorization"]["value"] = "12abc"

        with pytest.raises(InvalidPayloadError):
            parse_payment_payload(evm)


def test_variant_cannot_cross_families():
    with pytest.raises(ValueError):
        PaymentPayload(
            scheme="exact",
            network="hyperliquid",
            payload=ExactSvmPayload(transaction="AAAA"),
        )


def test_encode_unknown_network_raises():
    payload = PaymentPayload.model_construct(
        x402_version=1,
        scheme="exact",
        network="dogecoin",
        payload=ExactHlPayload(action={}, signature="0x00", nonce=1),
    )

    with pytest.raises(UnsupportedNetworkError):
        encode_payment(payload)


def test_settle_response_header_round_trip():
    response = SettleResponse(success=True, transaction="0x" + "ab" * 32, network="hyperliquid", payer="0xabc")

    header = encode_settle_response(response)

    assert json.loads(safe_base64_decode(header))["transaction"] == response.transaction
    assert decode_settle_response(header) == response
