"""Tests for Hyperliquid client payload creation and signing."""

import pytest
from conftest import HL_TOKEN, HL_TOKEN_ID, NOW_MS, PAY_TO, make_hl_requirements

from x402_facilitator.codec import decode_payment
from x402_facilitator.mechanisms.hyperliquid.cache import TokenInfoCache
from x402_facilitator.mechanisms.hyperliquid.constants import SPOT_SEND_PRIMARY_TYPE, SPOT_SEND_TYPES
from x402_facilitator.mechanisms.hyperliquid.exact import ExactHyperliquidClientScheme
from x402_facilitator.mechanisms.hyperliquid.signer import (
    EthAccountHyperliquidSigner,
    recover_user_signed_action,
)
from x402_facilitator.schemas import ExactHlPayload

PRIVATE_KEY = "0x" + "4c" * 32


@pytest.fixture
def signer():
    return EthAccountHyperliquidSigner(PRIVATE_KEY)


@pytest.fixture
def client_scheme(signer, hl_api):
    return ExactHyperliquidClientScheme(
        signer,
        http_client=hl_api.client(),
        token_cache=TokenInfoCache(),
        clock=lambda: NOW_MS,
    )


class TestCreatePaymentPayload:
    def test_builds_spot_send(self, client_scheme, signer):
        requirements = make_hl_requirements(max_amount_required="1500000")

        payload = client_scheme.create_payment_payload(requirements)

        assert payload.network == "hyperliquid-testnet"
        assert payload.scheme == "exact"
        assert isinstance(payload.payload, ExactHlPayload)
        assert payload.payload.nonce == NOW_MS
        assert payload.payload.user == signer.address
        assert payload.payload.action == {
            "type": "spotSend",
            "signatureChainId": "0xa4b1",
            "hyperliquidChain": "Testnet",
            "destination": PAY_TO,
            "token": HL_TOKEN,
            "amount": "1.5",
            "time": NOW_MS,
        }

    def test_signature_recovers_to_signer(self, client_scheme, signer):
        payload = client_scheme.create_payment_payload(make_hl_requirements())
        hl_payload = payload.payload

        recovered = recover_user_signed_action(
            hl_payload.action,
            SPOT_SEND_TYPES,
            SPOT_SEND_PRIMARY_TYPE,
            hl_payload.signature.model_dump(),
        )

        assert recovered == signer.address

    def test_decimals_and_symbol_looked_up_for_bare_token_id(self, client_scheme, hl_api):
        hl_api.token_details = {"name": "USDC", "weiDecimals": 3}
        requirements = make_hl_requirements(asset=HL_TOKEN_ID, extra=None, max_amount_required="1234")

        payload = client_scheme.create_payment_payload(requirements)

        assert payload.payload.action["amount"] == "1.234"
        assert payload.payload.action["token"] == f"USDC:{HL_TOKEN_ID}"
        assert hl_api.count("tokenDetails") == 1

    def test_token_symbol_hint(self, client_scheme, hl_api):
        requirements = make_hl_requirements(asset=HL_TOKEN_ID, extra={"decimals": 6, "tokenSymbol": "USDC"})

        payload = client_scheme.create_payment_payload(requirements)

        assert payload.payload.action["token"] == f"USDC:{HL_TOKEN_ID}"
        assert hl_api.requests == []

    def test_failed_lookup_falls_back(self, client_scheme, hl_api):
        hl_api.info_status = 500
        requirements = make_hl_requirements(asset=HL_TOKEN_ID, extra=None, max_amount_required="1234")

        payload = client_scheme.create_payment_payload(requirements)

        assert payload.payload.action["amount"] == "1234"
        assert payload.payload.action["token"] == f"TOKEN:{HL_TOKEN_ID}"

    def test_header_decodes_to_same_payload(self, client_scheme):
        requirements = make_hl_requirements()

        header = client_scheme.create_payment_header(requirements)

        assert decode_payment(header) == client_scheme.create_payment_payload(requirements)


def test_client_payload_verifies(client_scheme, hl_scheme, signer):
    requirements = make_hl_requirements(max_amount_required="2500000")

    result = hl_scheme.verify(client_scheme.create_payment_payload(requirements), requirements)

    assert result.is_valid
    assert result.payer == signer.address
