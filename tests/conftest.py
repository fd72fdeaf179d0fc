"""
Pytest configuration and shared fixtures.

Provides Hyperliquid request/payload factories and a fake Hyperliquid API
served through httpx.MockTransport. No test touches the network.
"""

import json

import httpx
import pytest

from x402_facilitator.mechanisms.hyperliquid.cache import TokenInfoCache
from x402_facilitator.mechanisms.hyperliquid.exact import ExactHyperliquidScheme
from x402_facilitator.schemas import ExactHlPayload, PaymentPayload, PaymentRequirements

HL_NETWORK = "hyperliquid-testnet"
HL_TOKEN = "USDC:0xeb62eee3685fc4c43992febcd9e75443"
HL_TOKEN_ID = "0xeb62eee3685fc4c43992febcd9e75443"
PAY_TO = "0x1111111111111111111111111111111111111111"
PAYER = "0x2222222222222222222222222222222222222222"
NOW_MS = 1_700_000_000_000
TX_HASH = "0x" + "ab" * 32


def make_hl_requirements(**overrides):
    """Build Hyperliquid payment requirements (1 USDC, 6 decimals hint)."""
    fields = {
        "scheme": "exact",
        "network": HL_NETWORK,
        "max_amount_required": "1000000",
        "resource": "https://api.example.com/premium",
        "description": "Premium data",
        "pay_to": PAY_TO,
        "max_timeout_seconds": 60,
        "asset": HL_TOKEN,
        "extra": {"decimals": 6},
    }
    fields.update(overrides)
    return PaymentRequirements(**fields)


def make_spot_send(**overrides):
    action = {
        "type": "spotSend",
        "signatureChainId": "0xa4b1",
        "hyperliquidChain": "Testnet",
        "destination": PAY_TO,
        "token": HL_TOKEN,
        "amount": "1",
        "time": NOW_MS,
    }
    action.update(overrides)
    return {k: v for k, v in action.items() if v is not None}


def make_hl_payload(action=None, user=PAYER, nonce=None, network=HL_NETWORK, scheme="exact"):
    """Build a Hyperliquid payment payload around a spotSend action."""
    action = action if action is not None else make_spot_send()
    return PaymentPayload(
        scheme=scheme,
        network=network,
        payload=ExactHlPayload(
            action=action,
            signature={"r": "0x" + "1" * 64, "s": "0x" + "2" * 64, "v": 27},
            nonce=nonce or action.get("time", NOW_MS),
            user=user,
        ),
    )


class FakeHyperliquidApi:
    """In-memory exchange, info and explorer endpoints.

    Attributes:
        exchange_response: Body returned by /exchange.
        token_details: Body returned by a tokenDetails info request.
        info_status: Status code of info responses.
        user_txs: Transactions returned by userDetails.
        tx_details: Queue of (status, body) returned by successive txDetails
            requests; once empty, the transaction is reported found.
        requests: Every (path, body) received.
    """

    def __init__(self):
        self.exchange_response = {"status": "ok", "response": {"type": "default"}}
        self.token_details = {"name": "USDC", "weiDecimals": 8}
        self.info_status = 200
        self.user_txs = []
        self.tx_details = []
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        path = request.url.path
        self.requests.append((path, body))

        if path == "/exchange":
            return httpx.Response(200, json=self.exchange_response)
        if path == "/info":
            return httpx.Response(self.info_status, json=self.token_details)
        if body.get("type") == "userDetails":
            return httpx.Response(200, json={"type": "userDetails", "txs": self.user_txs})
        if body.get("type") == "txDetails":
            if self.tx_details:
                status, payload = self.tx_details.pop(0)
                return httpx.Response(status, json=payload)
            return httpx.Response(200, json={"type": "txDetails", "tx": {"hash": body["hash"]}})
        return httpx.Response(404, json={"type": "error", "message": "unknown request"})

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def count(self, request_type: str) -> int:
        """Count requests by body type ("exchange" for exchange submissions)."""
        if request_type == "exchange":
            return sum(1 for path, _ in self.requests if path == "/exchange")
        return sum(1 for _, body in self.requests if body.get("type") == request_type)


@pytest.fixture
def hl_api():
    """Fake Hyperliquid API."""
    return FakeHyperliquidApi()


@pytest.fixture
def sleeps():
    """Records delays requested by the settle confirmation loop."""
    return []


@pytest.fixture
def hl_scheme(hl_api, sleeps):
    """Hyperliquid facilitator wired to the fake API, a fixed clock and a fresh cache."""
    return ExactHyperliquidScheme(
        http_client=hl_api.client(),
        token_cache=TokenInfoCache(),
        sleep=sleeps.append,
        clock=lambda: NOW_MS,
    )
