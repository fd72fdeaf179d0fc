"""Tests for the facilitator HTTP endpoints."""

import pytest
from conftest import NOW_MS, PAYER, TX_HASH, make_hl_payload, make_hl_requirements, make_spot_send

from server.server import create_app
from x402_facilitator import Family, x402Facilitator
from x402_facilitator.codec import encode_payment


@pytest.fixture
def client(hl_scheme):
    facilitator = x402Facilitator().register(Family.HYPERLIQUID, hl_scheme)
    app = create_app(facilitator)
    app.config["TESTING"] = True
    return app.test_client()


def body(payload=None, requirements=None):
    return {
        "paymentPayload": (payload or make_hl_payload()).model_dump(mode="json", by_alias=True),
        "paymentRequirements": (requirements or make_hl_requirements()).model_dump(mode="json", by_alias=True),
    }


def test_health(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "families": ["hyperliquid"]}


def test_supported(client):
    data = client.get("/supported").get_json()

    assert [kind["network"] for kind in data["kinds"]] == ["hyperliquid", "hyperliquid-testnet"]
    assert data["kinds"][0]["x402Version"] == 1
    assert data["kinds"][1]["extra"] == {"signatureChainId": "0xa4b1", "hyperliquidChain": "Testnet"}


class TestVerify:
    def test_payload_body(self, client):
        response = client.post("/verify", json=body())

        assert response.status_code == 200
        assert response.get_json() == {"isValid": True, "payer": PAYER}

    def test_header_body(self, client):
        request = {
            "paymentHeader": encode_payment(make_hl_payload()),
            "paymentRequirements": make_hl_requirements().model_dump(mode="json", by_alias=True),
        }

        response = client.post("/verify", json=request)

        assert response.get_json()["isValid"] is True

    def test_invalid_payment_is_200(self, client):
        payload = make_hl_payload(action=make_spot_send(amount="0.5"))

        response = client.post("/verify", json=body(payload=payload))

        assert response.status_code == 200
        assert response.get_json()["invalidReason"] == "amount_mismatch"

    def test_malformed_body(self, client):
        response = client.post("/verify", data="not json", content_type="application/json")

        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_payload"

    def test_missing_requirements(self, client):
        response = client.post("/verify", json={"paymentPayload": body()["paymentPayload"]})

        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_payload"

    def test_unknown_network(self, client):
        request = body()
        request["paymentPayload"]["network"] = "dogecoin"

        response = client.post("/verify", json=request)

        assert response.status_code == 400
        assert response.get_json()["error"] == "unsupported_network"


class TestSettle:
    def test_success(self, client, hl_api):
        hl_api.user_txs = [{"hash": TX_HASH, "time": NOW_MS, "action": make_spot_send()}]

        response = client.post("/settle", json=body())

        assert response.status_code == 200
        assert response.get_json() == {
            "success": True,
            "transaction": TX_HASH,
            "network": "hyperliquid-testnet",
            "payer": PAYER,
        }

    def test_failure_reported_in_body(self, client, hl_api):
        hl_api.exchange_response = {"status": "err", "response": "Insufficient balance"}

        response = client.post("/settle", json=body())

        assert response.status_code == 200
        assert response.get_json()["errorReason"] == "exchange_error"
