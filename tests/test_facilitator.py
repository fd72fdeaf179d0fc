"""Tests for the family router."""

import pytest
from conftest import PAY_TO, make_hl_payload, make_hl_requirements

from x402_facilitator import Family, x402Facilitator
from x402_facilitator.schemas import SettleRequest, SettleResponse, VerifyRequest, VerifyResponse


class RecordingScheme:
    """Mechanism stub that records calls and returns canned responses."""

    scheme = "exact"

    def __init__(self, error=None, signers=("0xsigner",)):
        self.error = error
        self.signers = list(signers)
        self.calls = []

    def get_extra(self, network):
        return {"network": network}

    def get_signers(self, network):
        return self.signers

    def verify(self, payload, requirements):
        self.calls.append(("verify", requirements.network))
        if self.error:
            raise self.error
        return VerifyResponse(is_valid=True, payer="0xpayer")

    def settle(self, payload, requirements):
        self.calls.append(("settle", requirements.network))
        if self.error:
            raise self.error
        return SettleResponse(success=True, transaction="0xhash", network=requirements.network)


class TestRegistration:
    def test_duplicate_family_rejected(self):
        facilitator = x402Facilitator().register(Family.HYPERLIQUID, RecordingScheme())

        with pytest.raises(ValueError):
            facilitator.register(Family.HYPERLIQUID, RecordingScheme())

    def test_families_listed_in_registration_order(self):
        facilitator = x402Facilitator()
        facilitator.register("svm", RecordingScheme()).register(Family.EVM, RecordingScheme())

        assert facilitator.registered_families() == [Family.SVM, Family.EVM]


class TestDispatch:
    def test_routes_by_network_family(self):
        hl, evm = RecordingScheme(), RecordingScheme()
        facilitator = x402Facilitator().register(Family.HYPERLIQUID, hl).register(Family.EVM, evm)

        result = facilitator.verify(make_hl_payload(), make_hl_requirements())

        assert result.is_valid
        assert hl.calls == [("verify", "hyperliquid-testnet")]
        assert evm.calls == []

    def test_unknown_network(self):
        facilitator = x402Facilitator().register(Family.HYPERLIQUID, RecordingScheme())
        requirements = make_hl_requirements(network="dogecoin")

        verify = facilitator.verify(make_hl_payload(), requirements)
        settle = facilitator.settle(make_hl_payload(), requirements)

        assert verify.invalid_reason == "invalid_network"
        assert settle.error_reason == "invalid_network"
        assert settle.transaction == ""

    def test_unregistered_family(self):
        facilitator = x402Facilitator().register(Family.EVM, RecordingScheme())

        result = facilitator.verify(make_hl_payload(), make_hl_requirements())

        assert not result.is_valid
        assert result.invalid_reason == "invalid_network"

    def test_mechanism_exception_becomes_invalid_payload(self):
        facilitator = x402Facilitator().register(Family.HYPERLIQUID, RecordingScheme(error=KeyError("action")))

        result = facilitator.verify(make_hl_payload(), make_hl_requirements())

        assert result.invalid_reason == "invalid_payload"

    def test_mechanism_exception_during_settle_becomes_exchange_error(self):
        facilitator = x402Facilitator().register(Family.HYPERLIQUID, RecordingScheme(error=RuntimeError("boom")))

        result = facilitator.settle(make_hl_payload(), make_hl_requirements())

        assert result.error_reason == "exchange_error"
        assert result.error_message == "boom"
        assert result.transaction == PAY_TO

    def test_request_bodies(self):
        scheme = RecordingScheme()
        facilitator = x402Facilitator().register(Family.HYPERLIQUID, scheme)
        body = {"paymentPayload": make_hl_payload(), "paymentRequirements": make_hl_requirements()}

        assert facilitator.verify_request(VerifyRequest(**body)).is_valid
        assert facilitator.settle_request(SettleRequest(**body)).success
        assert [call for call, _ in scheme.calls] == ["verify", "settle"]


def test_supported_lists_every_network_of_registered_families():
    facilitator = x402Facilitator()
    facilitator.register(Family.HYPERLIQUID, RecordingScheme(signers=()))
    facilitator.register(Family.SVM, RecordingScheme(signers=("fee-payer", "fee-payer")))

    supported = facilitator.get_supported()

    assert [kind.network for kind in supported.kinds] == [
        "hyperliquid",
        "hyperliquid-testnet",
        "solana",
        "solana-devnet",
    ]
    assert all(kind.x402_version == 1 and kind.scheme == "exact" for kind in supported.kinds)
    assert supported.kinds[0].extra == {"network": "hyperliquid"}
    assert supported.signers == {"hyperliquid": [], "svm": ["fee-payer"]}
